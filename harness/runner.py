"""Dual-path verification harness.

One run walks a fixed sequence of states:

    IDLE -> LOADING_ARTIFACTS -> BUILDING_ARTIFACTS -> NATIVE_VERIFY
         -> PORTABLE_VERIFY -> DONE

Loading and building errors abort the run (nothing meaningful can be compared
without every artifact). The native path degrades to FAIL on any subprocess
problem. The portable path aborts if the module cannot be loaded, since there
would be no second verdict, but a failing verify call is recorded as FAIL.

Both verdicts are reported as data. The harness never asserts that they agree.
"""

import enum
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional, Protocol

from artifacts.commitment import AppCommit, load_app_commit
from artifacts.compression import ProofCompressor
from artifacts.proof import StarkProofJson, build_proof_bytes, load_proof_json
from artifacts.verifying_key import build_verifying_key_for, load_base_vk
from harness.config import HarnessConfig
from harness.native import NativeVerifier
from harness.portable import WASM_CALL_ERRORS, load_portable_verifier
from harness.report import PORTABLE_PATH, PathOutcome, VerificationReport

logger = logging.getLogger(__name__)


class HarnessState(enum.Enum):
    IDLE = "idle"
    LOADING_ARTIFACTS = "loading_artifacts"
    BUILDING_ARTIFACTS = "building_artifacts"
    NATIVE_VERIFY = "native_verify"
    PORTABLE_VERIFY = "portable_verify"
    DONE = "done"


class Verifier(Protocol):
    def verify(self, proof_bytes: bytes, vk_bytes: bytes) -> bool: ...


VerifierLoader = Callable[[HarnessConfig], Awaitable[Verifier]]


async def default_verifier_loader(config: HarnessConfig) -> Verifier:
    return await load_portable_verifier(config.verifier_wasm_path, config.verifier_entry_point)


# --- Artifacts ---

@dataclass(frozen=True)
class Artifacts:
    """The four inputs of a run, as loaded from disk."""
    base_vk: bytes
    app_commit: AppCommit
    proof: StarkProofJson
    proof_path: Path
    commit_path: Path


@dataclass(frozen=True)
class BuiltArtifacts:
    """Encoded inputs for the portable path."""
    vk_bytes: bytes
    proof_bytes: bytes
    compressed_proof: bytes


def load_artifacts(config: HarnessConfig) -> Artifacts:
    """Load base VK, commit JSON and proof JSON. Raises ArtifactMissing."""
    base_vk = load_base_vk(config.base_vk_path)
    app_commit = load_app_commit(config.commit_path)
    proof = load_proof_json(config.proof_path)
    return Artifacts(
        base_vk=base_vk,
        app_commit=app_commit,
        proof=proof,
        proof_path=config.proof_path,
        commit_path=config.commit_path,
    )


def build_artifacts(artifacts: Artifacts, compressor: ProofCompressor) -> BuiltArtifacts:
    """VK assembly, proof assembly and compression. Raises on malformed input."""
    vk_bytes = build_verifying_key_for(artifacts.base_vk, artifacts.app_commit)
    proof_bytes = build_proof_bytes(artifacts.proof)
    return BuiltArtifacts(
        vk_bytes=vk_bytes,
        proof_bytes=proof_bytes,
        compressed_proof=compressor.compress(proof_bytes),
    )


# --- Harness ---

class VerificationHarness:
    """Runs both verification paths once over one set of artifacts.

    The compressor, the native verifier and the portable-module loader are
    handles owned by the harness; tests substitute their own.
    """

    def __init__(
        self,
        config: HarnessConfig,
        native: Optional[NativeVerifier] = None,
        verifier_loader: Optional[VerifierLoader] = None,
        compressor: Optional[ProofCompressor] = None,
    ) -> None:
        self.config = config
        self.native = native or NativeVerifier(
            config.native_command, cwd=config.guest_dir, timeout_secs=config.native_timeout_secs
        )
        self.verifier_loader = verifier_loader or default_verifier_loader
        self.compressor = compressor or ProofCompressor(config.zstd_level)
        self.state = HarnessState.IDLE

    def _enter(self, state: HarnessState) -> None:
        logger.debug("harness: %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(self) -> VerificationReport:
        """Execute the run. A harness instance runs exactly once."""
        if self.state is not HarnessState.IDLE:
            raise RuntimeError(f"harness already used (state: {self.state.value})")

        self._enter(HarnessState.LOADING_ARTIFACTS)
        artifacts = load_artifacts(self.config)
        logger.info("agg_stark.vk: %d bytes", len(artifacts.base_vk))
        logger.info("exe commit:   %s", artifacts.app_commit.app_exe_commit)
        logger.info("vm  commit:   %s", artifacts.app_commit.app_vm_commit)
        logger.info("proof version: %s", artifacts.proof.version)

        self._enter(HarnessState.BUILDING_ARTIFACTS)
        built = build_artifacts(artifacts, self.compressor)
        logger.info(
            "VK size: %d bytes (agg + %d commit bytes)",
            len(built.vk_bytes), len(built.vk_bytes) - len(artifacts.base_vk),
        )
        logger.info(
            "proof: %d bytes -> %d compressed", len(built.proof_bytes), len(built.compressed_proof)
        )

        self._enter(HarnessState.NATIVE_VERIFY)
        native = self.native.verify(artifacts.proof_path, artifacts.commit_path)
        logger.info("native verification: %s", native.status)

        self._enter(HarnessState.PORTABLE_VERIFY)
        verifier = await self.verifier_loader(self.config)
        portable = self._portable_verify(verifier, built)
        logger.info("portable verification: %s", portable.status)

        self._enter(HarnessState.DONE)
        return VerificationReport(
            native=native,
            portable=portable,
            proof_version=artifacts.proof.version,
            base_vk_size=len(artifacts.base_vk),
            vk_size=len(built.vk_bytes),
            proof_size=len(built.proof_bytes),
            compressed_proof_size=len(built.compressed_proof),
        )

    def _portable_verify(self, verifier: Verifier, built: BuiltArtifacts) -> PathOutcome:
        t0 = time.perf_counter()
        try:
            ok = bool(verifier.verify(built.compressed_proof, built.vk_bytes))
        except WASM_CALL_ERRORS as e:
            logger.warning("portable verify raised: %s", e)
            return PathOutcome(PORTABLE_PATH, False, f"ERROR: {e}", time.perf_counter() - t0)
        elapsed = time.perf_counter() - t0
        detail = f"{self.config.verifier_entry_point} returned: {ok}"
        return PathOutcome(PORTABLE_PATH, ok, detail, elapsed)
