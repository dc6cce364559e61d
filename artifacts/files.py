"""Artifact file readers that report absence as ArtifactMissing."""

import json
from pathlib import Path
from typing import Any, Union

from primitives.errors import ArtifactMissing

PathLike = Union[str, Path]


def read_bytes_artifact(path: PathLike, what: str) -> bytes:
    """Read a binary artifact in full."""
    path = Path(path)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ArtifactMissing(f"{what} not readable at {path}: {e.strerror or e}") from e


def read_json_artifact(path: PathLike, what: str) -> dict[str, Any]:
    """Read a JSON object artifact."""
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise ArtifactMissing(f"{what} not readable at {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise ArtifactMissing(f"{what} at {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ArtifactMissing(f"{what} at {path} is not a JSON object")
    return data


def require_str_field(data: dict[str, Any], key: str, what: str) -> str:
    """Fetch a required string field from a parsed JSON artifact."""
    value = data.get(key)
    if value is None:
        raise ArtifactMissing(f"{what} is missing field '{key}'")
    if not isinstance(value, str):
        raise ArtifactMissing(f"{what} field '{key}' must be a string, got {type(value).__name__}")
    return value
