#!/usr/bin/env python3
"""End-to-end STARK verification: reference CLI vs portable (wasm) verifier.

Usage:
    python verify_e2e.py [--root DIR] [--proof PATH] [--commit PATH] \
        [--agg-vk PATH] [--wasm PATH] [--require-agreement] [-v]

Builds the verifying key (agg_stark.vk ++ exe commit ++ vm commit) and the
compressed proof bytes, then runs:
  1. Native verification via the reference verifier subprocess
  2. Portable verification via the wasm module's verify entry point

Both results are printed. The exit status is 0 once the run completes,
whatever the verdicts, unless --require-agreement is given, in which case a
disagreement between the two paths exits 3.

Exit codes:
    0 - Run completed
    1 - Fatal error (missing/malformed artifact, compression, module load)
    3 - Paths disagree (--require-agreement only)
"""

import argparse
import asyncio
import logging
import shlex
import sys
from pathlib import Path

from harness.config import PROOF_FILENAME, HarnessConfig, parse_timeout
from harness.portable import ModuleLoadFailure
from harness.report import format_report
from harness.runner import VerificationHarness
from primitives.errors import ArtifactError

EXIT_DONE = 0
EXIT_FATAL = 1
EXIT_DIVERGED = 3

logger = logging.getLogger("verify_e2e")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Verify a STARK proof natively and with the portable verifier, and report both."
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Workspace root used for default artifact locations (default: cwd)",
    )
    parser.add_argument("--proof", help="Path to the STARK proof JSON")
    parser.add_argument("--commit", help="Path to the commit JSON (app_exe_commit, app_vm_commit)")
    parser.add_argument("--agg-vk", help="Path to agg_stark.vk")
    parser.add_argument("--wasm", help="Path to the portable verifier .wasm module")
    parser.add_argument("--entry-point", help="Export name of the verify function")
    parser.add_argument("--guest-dir", help="Working directory for the reference verifier")
    parser.add_argument(
        "--native-command",
        help="Reference verifier command prefix (default: 'cargo openvm verify stark')",
    )
    parser.add_argument("--timeout", type=parse_timeout, help="Reference verifier timeout in seconds")
    parser.add_argument(
        "--require-agreement",
        action="store_true",
        help="Exit 3 if the native and portable verdicts differ",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> HarnessConfig:
    """Environment-derived config with command-line overrides on top."""
    config = HarnessConfig.from_env(Path(args.root).resolve())
    if args.guest_dir:
        config.guest_dir = Path(args.guest_dir).expanduser()
        config.proof_path = config.guest_dir / PROOF_FILENAME
    if args.proof:
        config.proof_path = Path(args.proof)
    if args.commit:
        config.commit_path = Path(args.commit)
    if args.agg_vk:
        config.base_vk_path = Path(args.agg_vk)
    if args.wasm:
        config.verifier_wasm_path = Path(args.wasm)
    if args.entry_point:
        config.verifier_entry_point = args.entry_point
    if args.native_command:
        config.native_command = tuple(shlex.split(args.native_command))
    if args.timeout is not None:
        config.native_timeout_secs = args.timeout
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error("invalid configuration: %s", e)
        return EXIT_FATAL

    print("OpenVM STARK Verification E2E Test\n")
    harness = VerificationHarness(config)
    try:
        report = asyncio.run(harness.run())
    except ArtifactError as e:
        logger.error("fatal (%s): %s", harness.state.value, e)
        return EXIT_FATAL
    except ModuleLoadFailure as e:
        logger.error("portable verifier load failed: %s", e)
        return EXIT_FATAL

    print(format_report(report))
    if args.require_agreement and not report.agree:
        return EXIT_DIVERGED
    return EXIT_DONE


if __name__ == "__main__":
    sys.exit(main())
