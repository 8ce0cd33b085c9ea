"""Error hierarchy for manifest processing.

Every error carries a stable ``code`` (surfaced in ``ServiceError.code``)
and the filesystem path it concerns, so the CLI can point at the file.

INVARIANT: Losing a claim race is never an error. Nothing here models it.
"""

from __future__ import annotations

from pathlib import Path


class BumpError(Exception):
    """Base class for all per-manifest failures."""

    code = "BUMP_ERROR"

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class ResolutionError(BumpError):
    """A manifest reference could not be canonicalised."""

    code = "RESOLUTION_ERROR"


class ManifestNotFoundError(ResolutionError):
    """A manifest reference points at nothing on disk."""

    code = "NOT_FOUND"


class ManifestParseError(BumpError):
    """Manifest text is not valid UTF-8 TOML."""

    code = "PARSE_ERROR"


class ManifestIOError(BumpError):
    """Reading or writing a manifest failed."""

    code = "IO_ERROR"
