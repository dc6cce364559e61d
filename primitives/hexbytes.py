"""Strict hex string -> bytes decoding.

bytes.fromhex() tolerates embedded whitespace; prover output never contains any,
so a stray space means a corrupted artifact and is rejected like any other
non-hex digit. Odd lengths are rejected rather than padded or truncated.
"""

import re

from primitives.errors import MalformedHex

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def strip_hex_prefix(hex_str: str) -> str:
    """Remove a single leading 0x/0X prefix, if present."""
    if hex_str[:2] in ("0x", "0X"):
        return hex_str[2:]
    return hex_str


def hex_to_bytes(hex_str: str) -> bytes:
    """Decode a hex string (optional 0x prefix) to raw bytes."""
    if not isinstance(hex_str, str):
        raise MalformedHex(f"expected hex string, got {type(hex_str).__name__}")
    clean = strip_hex_prefix(hex_str)
    if len(clean) % 2 != 0:
        raise MalformedHex(f"odd-length hex string ({len(clean)} digits)")
    if not _HEX_RE.fullmatch(clean):
        raise MalformedHex("hex string contains non-hex characters")
    return bytes.fromhex(clean)
