"""App commitments: 32-byte digests encoded as bitcode [BabyBear; 8].

A commitment digest is read as one big-endian 256-bit integer and decomposed
in base p into 8 limbs, least-significant digit first (the SDK's
bytes_to_u32_digest). Each limb goes to Montgomery form and is then packed with
the bitcode u32 encoding. The output is NOT the digest bytes in any order; it
is a base-p positional decomposition.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from artifacts.files import read_json_artifact, require_str_field
from primitives.bitcode import encode_u32
from primitives.errors import MalformedHex
from primitives.field import BABYBEAR_PRIME, to_montgomery_batch
from primitives.hexbytes import hex_to_bytes

DIGEST_SIZE = 32
N_LIMBS = 8

# --- Digest <-> Limbs ---


def decompose_digest(digest: bytes) -> list[int]:
    """Split a 32-byte big-endian digest into 8 canonical base-p limbs.

    Limb 0 is the least-significant base-p digit. Digests >= p^8 lose their
    top part: only the low 8 digits are kept, exactly as the SDK does.
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    v = int.from_bytes(digest, "big")
    limbs = []
    for _ in range(N_LIMBS):
        v, limb = divmod(v, BABYBEAR_PRIME)
        limbs.append(limb)
    return limbs


def recompose_limbs(limbs: list[int]) -> int:
    """Inverse of decompose_digest() for digests < p^8: sum(limb[i] * p^i)."""
    v = 0
    for limb in reversed(limbs):
        v = v * BABYBEAR_PRIME + limb
    return v


def commit_hex_to_digest(commit_hex: str) -> bytes:
    """Parse a commitment hex string into exactly 32 raw bytes."""
    digest = hex_to_bytes(commit_hex)
    if len(digest) != DIGEST_SIZE:
        raise MalformedHex(
            f"commitment must be {DIGEST_SIZE} bytes ({2 * DIGEST_SIZE} hex digits), "
            f"got {len(digest)} bytes"
        )
    return digest


def commit_hex_to_canonical(commit_hex: str) -> list[int]:
    """Commitment hex -> 8 canonical u32 limbs."""
    return decompose_digest(commit_hex_to_digest(commit_hex))


# --- Encoding ---


def encode_commitment(commit_hex: str) -> bytes:
    """Encode commitment hex as bitcode-serialized [BabyBear; 8].

    canonical -> Montgomery -> bitcode u32, limb 0 first. Output length varies
    between 16 and 40 bytes with the limb magnitudes.
    """
    monty = to_montgomery_batch(commit_hex_to_canonical(commit_hex))
    return b"".join(encode_u32(m) for m in monty)


# --- Commit JSON ---


@dataclass(frozen=True)
class AppCommit:
    """The app_exe_commit / app_vm_commit pair emitted by the commit step."""
    app_exe_commit: str
    app_vm_commit: str


def load_app_commit(path: Union[str, Path]) -> AppCommit:
    """Load an AppCommit from a commit JSON file."""
    what = "commit JSON"
    data = read_json_artifact(path, what)
    return AppCommit(
        app_exe_commit=require_str_field(data, "app_exe_commit", what),
        app_vm_commit=require_str_field(data, "app_vm_commit", what),
    )
