"""Harness configuration: artifact locations and verifier knobs."""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from artifacts.compression import ZSTD_LEVEL

# --- Defaults ---

DEFAULT_NATIVE_COMMAND = ("cargo", "openvm", "verify", "stark")
DEFAULT_NATIVE_TIMEOUT_SECS = 120.0
DEFAULT_ENTRY_POINT = "verify_stark"

GUEST_SUBDIR = Path("crates/zkvms/openvm")
PROOF_FILENAME = "openvm-guest.stark.proof"
COMMIT_SUBPATH = Path("target/openvm/release/openvm-guest.commit.json")
AGG_VK_PATH = Path("~/.openvm/agg_stark.vk")
VERIFIER_WASM_SUBPATH = Path(
    "web/node_modules/@ethproofs/openvm-wasm-stark-verifier/pkg/openvm_wasm_stark_verifier_bg.wasm"
)


@dataclass
class HarnessConfig:
    """Everything one verification run needs to locate and check its artifacts.

    Attributes:
        proof_path: Proof JSON ({proof, user_public_values, version}).
        commit_path: Commit JSON ({app_exe_commit, app_vm_commit}).
        base_vk_path: Raw aggregation verifying key.
        verifier_wasm_path: Portable verifier WebAssembly module.
        guest_dir: Working directory for the reference verifier.
        verifier_entry_point: Export name of the portable verify function.
        native_command: Reference verifier argv prefix; --proof/--app-commit are appended.
        native_timeout_secs: Upper bound on the reference verifier run.
        zstd_level: Compression level for the portable path's proof.
    """
    proof_path: Path
    commit_path: Path
    base_vk_path: Path
    verifier_wasm_path: Path
    guest_dir: Path
    verifier_entry_point: str = DEFAULT_ENTRY_POINT
    native_command: tuple[str, ...] = field(default=DEFAULT_NATIVE_COMMAND)
    native_timeout_secs: float = DEFAULT_NATIVE_TIMEOUT_SECS
    zstd_level: int = ZSTD_LEVEL

    @classmethod
    def defaults(cls, root: Union[str, Path]) -> "HarnessConfig":
        """Standard workspace layout rooted at root."""
        root = Path(root)
        guest_dir = root / GUEST_SUBDIR
        return cls(
            proof_path=guest_dir / PROOF_FILENAME,
            commit_path=root / COMMIT_SUBPATH,
            base_vk_path=AGG_VK_PATH.expanduser(),
            verifier_wasm_path=root / VERIFIER_WASM_SUBPATH,
            guest_dir=guest_dir,
        )

    @classmethod
    def from_env(cls, root: Union[str, Path], environ: Optional[dict[str, str]] = None) -> "HarnessConfig":
        """defaults(root) with OPENVM_* environment overrides applied."""
        env = os.environ if environ is None else environ
        config = cls.defaults(root)

        guest_dir = env.get("OPENVM_GUEST_DIR")
        if guest_dir:
            config.guest_dir = Path(guest_dir).expanduser()
            config.proof_path = config.guest_dir / PROOF_FILENAME
        if env.get("OPENVM_PROOF_PATH"):
            config.proof_path = Path(env["OPENVM_PROOF_PATH"]).expanduser()
        if env.get("OPENVM_COMMIT_PATH"):
            config.commit_path = Path(env["OPENVM_COMMIT_PATH"]).expanduser()
        if env.get("OPENVM_AGG_VK"):
            config.base_vk_path = Path(env["OPENVM_AGG_VK"]).expanduser()
        if env.get("OPENVM_VERIFIER_WASM"):
            config.verifier_wasm_path = Path(env["OPENVM_VERIFIER_WASM"]).expanduser()
        if env.get("OPENVM_VERIFIER_ENTRY"):
            config.verifier_entry_point = env["OPENVM_VERIFIER_ENTRY"]
        if env.get("OPENVM_NATIVE_COMMAND"):
            config.native_command = tuple(shlex.split(env["OPENVM_NATIVE_COMMAND"]))
        if env.get("OPENVM_NATIVE_TIMEOUT"):
            config.native_timeout_secs = parse_timeout(env["OPENVM_NATIVE_TIMEOUT"])
        return config


def parse_timeout(value: str) -> float:
    """Parse a positive timeout in seconds."""
    try:
        secs = float(value)
    except ValueError:
        raise ValueError(f"invalid timeout: {value!r}") from None
    if secs <= 0:
        raise ValueError(f"timeout must be positive, got {value!r}")
    return secs
