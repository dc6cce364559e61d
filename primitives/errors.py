"""Encoding-layer error taxonomy.

All of these abort a verification run. Orchestration failures (reference
verifier exit status, portable module loading) live in the harness package.
"""


class ArtifactError(Exception):
    """Base class for errors raised while loading or encoding artifacts."""


class MalformedHex(ArtifactError, ValueError):
    """Odd-length or non-hex-digit input to a hex decoder."""


class ArtifactMissing(ArtifactError):
    """A required artifact file, or a required field inside one, is absent."""


class CompressionFailure(ArtifactError):
    """The proof compressor failed."""
