#!/usr/bin/env python3
"""Verify a guest output commitment.

Recomputes SHA256(program_bytes || result_string) and compares it against the
commitment revealed by the guest.

Usage:
    python check_commitment.py <program_hex> <expected_result> <commitment_hex>

Example:
    python check_commitment.py 010000481501 "Integer(42)" 9182033e...

Exit codes:
    0 - Match
    1 - Mismatch
    2 - Usage error or malformed hex
"""

import argparse
import sys

from artifacts.guest_commitment import check_guest_commitment, compute_guest_commitment
from primitives.errors import MalformedHex
from primitives.hexbytes import strip_hex_prefix

EXIT_MATCH = 0
EXIT_MISMATCH = 1
EXIT_USAGE = 2


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify a guest output commitment.")
    parser.add_argument("program_hex", help="Hex-encoded program bytes")
    parser.add_argument("expected_result", help='Expected evaluation result string (e.g. "Integer(42)")')
    parser.add_argument("commitment_hex", help="The 32-byte commitment from the proof (hex)")
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_USAGE if e.code else EXIT_MATCH

    try:
        expected_hash = compute_guest_commitment(args.program_hex, args.expected_result)
        matches = check_guest_commitment(args.program_hex, args.expected_result, args.commitment_hex)
    except MalformedHex as e:
        print(f"Error: invalid program hex: {e}", file=sys.stderr)
        return EXIT_USAGE

    commitment = strip_hex_prefix(args.commitment_hex.strip()).lower()

    print(f"Program:          {args.program_hex}")
    print(f"Expected result:  {args.expected_result}")
    print()
    print(f"Verifier hash:    {expected_hash}")
    print(f"Proof commitment: {commitment}")
    print()

    if matches:
        print("MATCH - proof is valid")
        return EXIT_MATCH
    print("MISMATCH - proof rejected")
    return EXIT_MISMATCH


if __name__ == "__main__":
    sys.exit(main())
