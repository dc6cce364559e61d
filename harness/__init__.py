"""Harness - reference vs portable verification of one proof."""

from harness.config import HarnessConfig
from harness.native import NativeVerifier, SubprocessFailure
from harness.portable import (
    ModuleLoadFailure,
    PortableVerifier,
    PortableVerifyError,
    load_portable_verifier,
)
from harness.report import PathOutcome, VerificationReport, format_report
from harness.runner import (
    Artifacts,
    BuiltArtifacts,
    HarnessState,
    VerificationHarness,
    build_artifacts,
    load_artifacts,
)

__all__ = [
    # Config
    "HarnessConfig",
    # Native path
    "NativeVerifier",
    "SubprocessFailure",
    # Portable path
    "PortableVerifier",
    "PortableVerifyError",
    "ModuleLoadFailure",
    "load_portable_verifier",
    # Report
    "PathOutcome",
    "VerificationReport",
    "format_report",
    # Runner
    "Artifacts",
    "BuiltArtifacts",
    "HarnessState",
    "VerificationHarness",
    "build_artifacts",
    "load_artifacts",
]
