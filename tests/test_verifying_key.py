"""Tests for verifying key assembly."""

from pathlib import Path

import pytest

from artifacts.commitment import AppCommit, encode_commitment
from artifacts.verifying_key import build_verifying_key, build_verifying_key_for, load_base_vk
from primitives.errors import ArtifactMissing, MalformedHex
from tests.toy_system import (
    BASE_VK,
    EXE_LIMBS,
    VM_LIMBS,
    decode_u32_stream,
    digest_hex_from_limbs,
    from_montgomery,
)

EXE_HEX = digest_hex_from_limbs(EXE_LIMBS)
VM_HEX = digest_hex_from_limbs(VM_LIMBS)


class TestBuildVerifyingKey:

    def test_layout(self) -> None:
        """base ++ encode(exe) ++ encode(vm), no separators."""
        vk = build_verifying_key(BASE_VK, EXE_HEX, VM_HEX)
        assert vk == BASE_VK + encode_commitment(EXE_HEX) + encode_commitment(VM_HEX)

    def test_base_passed_through(self) -> None:
        base = bytes(range(256)) * 4
        vk = build_verifying_key(base, EXE_HEX, VM_HEX)
        assert vk.startswith(base)

    def test_empty_base(self) -> None:
        vk = build_verifying_key(b"", "00" * 32, "00" * 32)
        assert vk == bytes([0x04, 0x00]) * 16

    def test_order_matters(self) -> None:
        assert build_verifying_key(BASE_VK, EXE_HEX, VM_HEX) != build_verifying_key(BASE_VK, VM_HEX, EXE_HEX)

    def test_tail_decodes_to_both_commitments(self) -> None:
        vk = build_verifying_key(BASE_VK, EXE_HEX, VM_HEX)
        values = [from_montgomery(v) for v in decode_u32_stream(vk[len(BASE_VK):])]
        assert values == EXE_LIMBS + VM_LIMBS

    def test_from_app_commit(self) -> None:
        commit = AppCommit(app_exe_commit=EXE_HEX, app_vm_commit=VM_HEX)
        assert build_verifying_key_for(BASE_VK, commit) == build_verifying_key(BASE_VK, EXE_HEX, VM_HEX)

    def test_malformed_commit(self) -> None:
        with pytest.raises(MalformedHex):
            build_verifying_key(BASE_VK, EXE_HEX[:-2], VM_HEX)


class TestLoadBaseVk:

    def test_reads_raw_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "agg_stark.vk"
        path.write_bytes(b"\x00\x01binary\xff")
        assert load_base_vk(path) == b"\x00\x01binary\xff"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactMissing, match="base verifying key"):
            load_base_vk(tmp_path / "agg_stark.vk")
