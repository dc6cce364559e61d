"""
Tests for STARK proof JSON loading and proof byte assembly.
"""

import json
from pathlib import Path

import pytest

from artifacts.proof import (
    UNKNOWN_VERSION,
    StarkProofJson,
    assemble_proof_bytes,
    build_proof_bytes,
    load_proof_json,
    proof_json_from_dict,
)
from primitives.errors import ArtifactMissing, MalformedHex


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestAssembleProofBytes:

    def test_proof_then_public_values(self) -> None:
        assert assemble_proof_bytes("0xaabb", "0xccdd") == bytes.fromhex("aabbccdd")

    def test_prefix_optional(self) -> None:
        assert assemble_proof_bytes("aabb", "0xccdd") == assemble_proof_bytes("0xaabb", "ccdd")

    def test_empty_public_values(self) -> None:
        assert assemble_proof_bytes("0x0102", "0x") == b"\x01\x02"

    def test_malformed(self) -> None:
        with pytest.raises(MalformedHex):
            assemble_proof_bytes("0xabc", "00")
        with pytest.raises(MalformedHex):
            assemble_proof_bytes("00", "not hex!")

    def test_from_proof_json(self) -> None:
        proof = StarkProofJson(proof="0x01", user_public_values="0x02", version="v1.4")
        assert build_proof_bytes(proof) == b"\x01\x02"


class TestProofJson:

    def test_from_dict(self) -> None:
        proof = proof_json_from_dict({"proof": "0x01", "user_public_values": "0xFF", "version": "v1.4"})
        assert proof == StarkProofJson("0x01", "0xFF", "v1.4")
        assert proof.user_public_values_hex == "FF"

    def test_version_optional(self) -> None:
        proof = proof_json_from_dict({"proof": "0x01", "user_public_values": "0x02"})
        assert proof.version == UNKNOWN_VERSION

    def test_non_string_version_stringified(self) -> None:
        proof = proof_json_from_dict({"proof": "0x01", "user_public_values": "0x02", "version": 2})
        assert proof.version == "2"

    def test_extra_fields_ignored(self) -> None:
        proof = proof_json_from_dict({"proof": "01", "user_public_values": "02", "extra": [1]})
        assert build_proof_bytes(proof) == b"\x01\x02"

    @pytest.mark.parametrize("missing", ["proof", "user_public_values"])
    def test_required_fields(self, missing: str) -> None:
        data = {"proof": "0x01", "user_public_values": "0x02"}
        del data[missing]
        with pytest.raises(ArtifactMissing, match=missing):
            proof_json_from_dict(data)


class TestLoadProofJson:

    def test_load(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "p.json", {"proof": "0xab", "user_public_values": "0xcd", "version": "v1"})
        proof = load_proof_json(path)
        assert build_proof_bytes(proof) == b"\xab\xcd"
        assert proof.version == "v1"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactMissing, match="not readable"):
            load_proof_json(tmp_path / "p.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "p.json"
        path.write_text("{not json")
        with pytest.raises(ArtifactMissing, match="not valid JSON"):
            load_proof_json(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "p.json", ["0x01", "0x02"])
        with pytest.raises(ArtifactMissing, match="not a JSON object"):
            load_proof_json(path)
