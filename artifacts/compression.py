"""zstd compression of assembled proof bytes.

The portable verifier decompresses a standard zstd frame before deserializing,
so the container format is fixed. The level only affects size and speed; it is
chosen once per compressor handle and never varied per call.
"""

from dataclasses import dataclass

import zstandard as zstd

from artifacts.proof import StarkProofJson, build_proof_bytes
from primitives.errors import CompressionFailure

ZSTD_LEVEL = 3
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


class ProofCompressor:
    """Reusable zstd compressor handle with a fixed level."""

    def __init__(self, level: int = ZSTD_LEVEL) -> None:
        self.level = level
        self._cctx = zstd.ZstdCompressor(level=level)

    def compress(self, data: bytes) -> bytes:
        """Compress data into a single zstd frame."""
        try:
            return self._cctx.compress(data)
        except zstd.ZstdError as e:
            raise CompressionFailure(f"zstd compression failed: {e}") from e


@dataclass(frozen=True)
class ProcessedProof:
    """Proof ready for the portable verifier."""
    proof_bytes: bytes
    compressed_proof: bytes
    user_public_values_hex: str


def process_proof(proof_json: StarkProofJson, compressor: ProofCompressor) -> ProcessedProof:
    """Hex decode + concatenate + compress a proof JSON."""
    proof_bytes = build_proof_bytes(proof_json)
    return ProcessedProof(
        proof_bytes=proof_bytes,
        compressed_proof=compressor.compress(proof_bytes),
        user_public_values_hex=proof_json.user_public_values_hex,
    )
