"""Bitcode u32 encoding (serde mode): 1-byte packing tag + little-endian payload.

The portable verifier deserializes its verifying key with bitcode, which packs
each u32 with a width tag chosen from the value's magnitude:

    value > 65535        0x00 + 4 bytes LE
    255 < value <= 65535 0x02 + 2 bytes LE
    value <= 255         0x04 + 1 byte

Other tag values are reserved by the format (signed/variant packings) and are
never produced here. This layout is a wire contract; it must match byte-for-byte.
"""

import struct

TAG_U32 = 0x00
TAG_U16 = 0x02
TAG_U8 = 0x04

U8_MAX = 0xFF
U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF


def encode_u32(value: int) -> bytes:
    """Encode one unsigned 32-bit value as tag byte + payload."""
    value = int(value)
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"value out of u32 range: {value}")
    if value > U16_MAX:
        return struct.pack("<BI", TAG_U32, value)
    if value > U8_MAX:
        return struct.pack("<BH", TAG_U16, value)
    return struct.pack("<BB", TAG_U8, value)


def encoded_len(value: int) -> int:
    """Number of bytes encode_u32(value) produces (2, 3 or 5)."""
    value = int(value)
    if value > U16_MAX:
        return 5
    if value > U8_MAX:
        return 3
    return 2
