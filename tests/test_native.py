"""Tests for the reference verifier subprocess path."""

import json
import sys
from pathlib import Path

import pytest

from harness.native import NativeVerifier, SubprocessFailure
from harness.report import NATIVE_PATH
from tests.toy_system import FAKE_REFERENCE_VERIFIER, ToyArtifacts, flip_bit


def fake_native(cwd: Path, timeout_secs: float = 60.0) -> NativeVerifier:
    return NativeVerifier((sys.executable, str(FAKE_REFERENCE_VERIFIER)), cwd=cwd, timeout_secs=timeout_secs)


def python_snippet(code: str, cwd: Path, timeout_secs: float = 60.0) -> NativeVerifier:
    # The snippet sees --proof/--app-commit in sys.argv and ignores them
    return NativeVerifier((sys.executable, "-c", code), cwd=cwd, timeout_secs=timeout_secs)


class TestArgv:

    def test_appends_proof_and_commit(self) -> None:
        native = NativeVerifier(("cargo", "openvm", "verify", "stark"))
        assert native.argv(Path("p.json"), Path("c.json")) == [
            "cargo", "openvm", "verify", "stark", "--proof", "p.json", "--app-commit", "c.json",
        ]


class TestNativeVerify:

    def test_valid_proof_passes(self, toy_artifacts: ToyArtifacts) -> None:
        outcome = fake_native(toy_artifacts.root).verify(toy_artifacts.proof_path, toy_artifacts.commit_path)
        assert outcome.name == NATIVE_PATH
        assert outcome.passed
        assert "verified successfully" in outcome.detail
        assert outcome.duration_secs is not None and outcome.duration_secs >= 0

    def test_tampered_proof_fails(self, toy_artifacts: ToyArtifacts) -> None:
        data = json.loads(toy_artifacts.proof_path.read_text())
        data["proof"] = flip_bit(data["proof"], 3)
        toy_artifacts.proof_path.write_text(json.dumps(data))

        outcome = fake_native(toy_artifacts.root).verify(toy_artifacts.proof_path, toy_artifacts.commit_path)
        assert not outcome.passed
        assert "exited with status 1" in outcome.detail
        assert "verification failed" in outcome.detail

    def test_runs_in_guest_dir(self, tmp_path: Path) -> None:
        native = python_snippet("import os; print(os.getcwd())", cwd=tmp_path)
        outcome = native.verify(Path("p"), Path("c"))
        assert outcome.passed
        assert Path(outcome.detail).resolve() == tmp_path.resolve()

    def test_stdout_used_when_stderr_empty(self, tmp_path: Path) -> None:
        native = python_snippet("import sys; print('bad commit'); sys.exit(2)", cwd=tmp_path)
        outcome = native.verify(Path("p"), Path("c"))
        assert not outcome.passed
        assert "status 2" in outcome.detail
        assert "bad commit" in outcome.detail

    def test_timeout_fails(self, tmp_path: Path) -> None:
        native = python_snippet("import time; time.sleep(30)", cwd=tmp_path, timeout_secs=0.5)
        outcome = native.verify(Path("p"), Path("c"))
        assert not outcome.passed
        assert "timed out after 0.5s" in outcome.detail

    def test_missing_binary_fails(self, tmp_path: Path) -> None:
        native = NativeVerifier((str(tmp_path / "no-such-verifier"),), cwd=tmp_path)
        outcome = native.verify(Path("p"), Path("c"))
        assert not outcome.passed
        assert "cannot start reference verifier" in outcome.detail

    def test_run_raises(self, tmp_path: Path) -> None:
        native = python_snippet("import sys; sys.exit(1)", cwd=tmp_path)
        with pytest.raises(SubprocessFailure):
            native.run(Path("p"), Path("c"))
