"""Per-path outcomes and the run report."""

from dataclasses import dataclass
from typing import Optional

NATIVE_PATH = "NATIVE"
PORTABLE_PATH = "WASM"

BANNER_WIDTH = 60


@dataclass(frozen=True)
class PathOutcome:
    """Verdict of one verification path."""
    name: str
    passed: bool
    detail: str = ""
    duration_secs: Optional[float] = None

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"


@dataclass
class VerificationReport:
    """Both path outcomes plus artifact sizes.

    The two outcomes are reported side by side and never reconciled: a
    disagreement is exactly the signal of an encoding bug.
    """
    native: PathOutcome
    portable: PathOutcome
    proof_version: str = ""
    base_vk_size: int = 0
    vk_size: int = 0
    proof_size: int = 0
    compressed_proof_size: int = 0

    @property
    def agree(self) -> bool:
        return self.native.passed == self.portable.passed

    @property
    def commit_bytes(self) -> int:
        return self.vk_size - self.base_vk_size


def _banner(title: str) -> list[str]:
    rule = "=" * BANNER_WIDTH
    return [rule, f"  {title}", rule]


def format_report(report: VerificationReport) -> str:
    """Render the report the way the console harness prints it."""
    lines = [
        f"  proof version: {report.proof_version}",
        f"  VK size:       {report.vk_size} bytes "
        f"(agg + {report.commit_bytes} commit bytes)",
        f"  proof:         {report.proof_size} bytes -> "
        f"{report.compressed_proof_size} compressed",
        "",
    ]
    for outcome in (report.native, report.portable):
        lines.extend(_banner(outcome.name))
        if outcome.detail:
            lines.extend(f"  {line}" for line in outcome.detail.splitlines())
        if outcome.duration_secs is not None:
            lines.append(f"  ({outcome.duration_secs:.1f}s)")
        lines.append(f"  {outcome.name}: {outcome.status}")
        lines.append("")
    if not report.agree:
        lines.append(
            f"  DIVERGENCE: {report.native.name}={report.native.status} "
            f"{report.portable.name}={report.portable.status}"
        )
    lines.extend(_banner("DONE"))
    return "\n".join(lines)
