"""VmStarkVerifyingKey assembly.

The aggregation verifying key (agg_stark.vk) is produced once per toolchain
version by the setup step and is identical for every program. A program's full
verifying key is that blob followed by its two bitcode-encoded commitments:

    VmStarkVerifyingKey = agg_vk ++ encode(app_exe_commit) ++ encode(app_vm_commit)

No separators and no padding. The base blob is opaque here and passed through
untouched; if it is malformed, verification fails downstream.
"""

from pathlib import Path
from typing import Union

from artifacts.commitment import AppCommit, encode_commitment
from artifacts.files import read_bytes_artifact


def build_verifying_key(base_vk: bytes, exe_commit_hex: str, vm_commit_hex: str) -> bytes:
    """Construct full verifying key bytes from the base key and two commitments."""
    exe_encoded = encode_commitment(exe_commit_hex)
    vm_encoded = encode_commitment(vm_commit_hex)
    return bytes(base_vk) + exe_encoded + vm_encoded


def build_verifying_key_for(base_vk: bytes, app_commit: AppCommit) -> bytes:
    """build_verifying_key() taking the commit pair as loaded from JSON."""
    return build_verifying_key(base_vk, app_commit.app_exe_commit, app_commit.app_vm_commit)


def load_base_vk(path: Union[str, Path]) -> bytes:
    """Read the raw aggregation verifying key file."""
    return read_bytes_artifact(path, "base verifying key")
