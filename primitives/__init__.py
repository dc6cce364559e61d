"""Primitives - BabyBear field, bitcode integer packing and hex decoding."""

from primitives.bitcode import (
    TAG_U8,
    TAG_U16,
    TAG_U32,
    encode_u32,
    encoded_len,
)
from primitives.errors import (
    ArtifactError,
    ArtifactMissing,
    CompressionFailure,
    MalformedHex,
)
from primitives.field import (
    BABYBEAR_PRIME,
    FF,
    MONTY_R,
    to_montgomery,
    to_montgomery_batch,
)
from primitives.hexbytes import hex_to_bytes, strip_hex_prefix

__all__ = [
    # Field
    "FF",
    "BABYBEAR_PRIME",
    "MONTY_R",
    "to_montgomery",
    "to_montgomery_batch",
    # Bitcode
    "encode_u32",
    "encoded_len",
    "TAG_U8",
    "TAG_U16",
    "TAG_U32",
    # Hex
    "hex_to_bytes",
    "strip_hex_prefix",
    # Errors
    "ArtifactError",
    "ArtifactMissing",
    "CompressionFailure",
    "MalformedHex",
]
