"""Reference verifier path: the native CLI run as a subprocess.

The reference tool reads the original proof JSON and commit JSON itself, with
its own deserialization, so it is independent of the byte encoding built in
artifacts/. A non-zero exit, a timeout or a missing binary all degrade to a
failed outcome; none of them abort the run.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Optional, Sequence

from harness.report import NATIVE_PATH, PathOutcome

logger = logging.getLogger(__name__)

OUTPUT_TAIL_CHARS = 500


class SubprocessFailure(RuntimeError):
    """Reference verifier exited non-zero, timed out, or could not be started."""


def _tail(text: str, limit: int = OUTPUT_TAIL_CHARS) -> str:
    text = text.strip()
    return text[-limit:]


class NativeVerifier:
    """Runs `<command> --proof <proof> --app-commit <commit>` in cwd."""

    def __init__(
        self,
        command: Sequence[str],
        cwd: Optional[Path] = None,
        timeout_secs: float = 120.0,
    ) -> None:
        self.command = tuple(command)
        self.cwd = cwd
        self.timeout_secs = timeout_secs

    def argv(self, proof_path: Path, commit_path: Path) -> list[str]:
        return [*self.command, "--proof", str(proof_path), "--app-commit", str(commit_path)]

    def run(self, proof_path: Path, commit_path: Path) -> str:
        """Run the reference verifier; return its stdout or raise SubprocessFailure."""
        argv = self.argv(proof_path, commit_path)
        logger.debug("running reference verifier: %s (cwd=%s)", argv, self.cwd)
        try:
            result = subprocess.run(
                argv,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout_secs,
            )
        except subprocess.TimeoutExpired as e:
            raise SubprocessFailure(
                f"reference verifier timed out after {self.timeout_secs:g}s"
            ) from e
        except OSError as e:
            raise SubprocessFailure(f"cannot start reference verifier: {e}") from e

        if result.returncode != 0:
            output = _tail(result.stderr) or _tail(result.stdout)
            raise SubprocessFailure(
                f"reference verifier exited with status {result.returncode}\n{output}".rstrip()
            )
        return result.stdout

    def verify(self, proof_path: Path, commit_path: Path) -> PathOutcome:
        """Run and record the verdict; never raises for verifier failures."""
        t0 = time.perf_counter()
        try:
            stdout = self.run(proof_path, commit_path)
        except SubprocessFailure as e:
            logger.warning("native verification failed: %s", e)
            return PathOutcome(NATIVE_PATH, False, str(e), time.perf_counter() - t0)
        return PathOutcome(NATIVE_PATH, True, _tail(stdout), time.perf_counter() - t0)
