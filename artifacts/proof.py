"""STARK proof JSON loading and proof byte assembly."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from artifacts.files import read_json_artifact, require_str_field
from primitives.hexbytes import hex_to_bytes, strip_hex_prefix

UNKNOWN_VERSION = "unknown"


# --- Proof Data Structures ---

@dataclass(frozen=True)
class StarkProofJson:
    """STARK proof as emitted by the prover's JSON writer.

    Attributes:
        proof: Hex-encoded serialized proof (optionally 0x-prefixed).
        user_public_values: Hex-encoded public values revealed by the guest.
        version: Proof format version string ("unknown" when the file omits it).
    """
    proof: str
    user_public_values: str
    version: str = UNKNOWN_VERSION

    @property
    def user_public_values_hex(self) -> str:
        """Public values hex without 0x prefix, for display."""
        return strip_hex_prefix(self.user_public_values)


# --- JSON Loading ---

def proof_json_from_dict(data: dict[str, Any], what: str = "proof JSON") -> StarkProofJson:
    """Build StarkProofJson from a parsed JSON object."""
    version = data.get("version")
    return StarkProofJson(
        proof=require_str_field(data, "proof", what),
        user_public_values=require_str_field(data, "user_public_values", what),
        version=str(version) if version is not None else UNKNOWN_VERSION,
    )


def load_proof_json(path: Union[str, Path]) -> StarkProofJson:
    """Load a STARK proof JSON file."""
    return proof_json_from_dict(read_json_artifact(path, "proof JSON"))


# --- Binary Assembly ---

def assemble_proof_bytes(proof_hex: str, user_public_values_hex: str) -> bytes:
    """Decode both hex fields and concatenate: proof || user_public_values.

    The order is fixed by the verifier's deserializer; do not swap it.
    """
    proof_bin = hex_to_bytes(proof_hex)
    upv_bin = hex_to_bytes(user_public_values_hex)
    return proof_bin + upv_bin


def build_proof_bytes(proof_json: StarkProofJson) -> bytes:
    """assemble_proof_bytes() for a loaded proof JSON."""
    return assemble_proof_bytes(proof_json.proof, proof_json.user_public_values)
