"""Artifacts - verifying key and proof byte construction for the portable verifier."""

from artifacts.commitment import (
    DIGEST_SIZE,
    N_LIMBS,
    AppCommit,
    commit_hex_to_canonical,
    decompose_digest,
    encode_commitment,
    load_app_commit,
    recompose_limbs,
)
from artifacts.compression import (
    ZSTD_LEVEL,
    ProcessedProof,
    ProofCompressor,
    process_proof,
)
from artifacts.guest_commitment import (
    check_guest_commitment,
    compute_guest_commitment,
    extract_commitment,
)
from artifacts.proof import (
    StarkProofJson,
    assemble_proof_bytes,
    build_proof_bytes,
    load_proof_json,
)
from artifacts.verifying_key import (
    build_verifying_key,
    build_verifying_key_for,
    load_base_vk,
)

__all__ = [
    # Commitments
    "DIGEST_SIZE",
    "N_LIMBS",
    "AppCommit",
    "decompose_digest",
    "recompose_limbs",
    "commit_hex_to_canonical",
    "encode_commitment",
    "load_app_commit",
    # Verifying key
    "build_verifying_key",
    "build_verifying_key_for",
    "load_base_vk",
    # Proof
    "StarkProofJson",
    "assemble_proof_bytes",
    "build_proof_bytes",
    "load_proof_json",
    # Compression
    "ZSTD_LEVEL",
    "ProofCompressor",
    "ProcessedProof",
    "process_proof",
    # Guest commitment
    "compute_guest_commitment",
    "check_guest_commitment",
    "extract_commitment",
]
