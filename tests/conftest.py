"""
Pytest configuration for the artifact-encoding and harness tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repo root, so parent is the root)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from tests.toy_system import ToyArtifacts, write_toy_artifacts  # noqa: E402


@pytest.fixture
def toy_artifacts(tmp_path: Path) -> ToyArtifacts:
    """A consistent, valid artifact set written under tmp_path."""
    return write_toy_artifacts(tmp_path)
