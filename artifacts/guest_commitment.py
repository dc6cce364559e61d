"""Guest output commitment: SHA256(program_bytes || result_string).

The guest evaluates a program and reveals a 32-byte commitment binding the
program bytes to the printed evaluation result. Checking it needs no proof
machinery, only the hash.
"""

import hashlib
import re
from typing import Optional

from primitives.hexbytes import hex_to_bytes, strip_hex_prefix

COMMITMENT_SIZE = 32

_EXECUTION_OUTPUT_RE = re.compile(r"Execution output: \[([^\]]*)\]")


def compute_guest_commitment(program_hex: str, result: str) -> str:
    """Lowercase hex SHA256 over the decoded program bytes then the UTF-8 result."""
    hasher = hashlib.sha256()
    hasher.update(hex_to_bytes(program_hex))
    hasher.update(result.encode("utf-8"))
    return hasher.hexdigest()


def check_guest_commitment(program_hex: str, result: str, commitment_hex: str) -> bool:
    """True iff the recomputed commitment equals commitment_hex."""
    expected = compute_guest_commitment(program_hex, result)
    return expected == strip_hex_prefix(commitment_hex.strip()).lower()


def extract_commitment(output: str) -> Optional[str]:
    """Pull the commitment out of an "Execution output: [b0, b1, ...]" line.

    Returns the 64-char hex of the 32 byte values, or None if no line carries a
    full 32-byte array of u8 values.
    """
    for line in output.splitlines():
        match = _EXECUTION_OUTPUT_RE.search(line)
        if match is None:
            continue
        values = []
        for item in match.group(1).split(","):
            item = item.strip()
            if not (item.isascii() and item.isdigit()) or int(item) > 0xFF:
                return None
            values.append(int(item))
        if len(values) != COMMITMENT_SIZE:
            return None
        return bytes(values).hex()
    return None
