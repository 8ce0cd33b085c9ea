"""Manifest locators and identities.

A :class:`ManifestReference` is whatever a ``path = "..."`` field (or the
root argument) names: a directory or a manifest file, not yet checked.
A :class:`ManifestIdentity` is the canonical form used as the dedup key.

INVARIANT: Identity equality is defined on the canonical path only, so two
differently spelled references to the same file collapse to one identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

MANIFEST_FILENAME = "Cargo.toml"

# Tables whose detailed entries get a default version and may carry ``path``.
DEPENDENCY_TABLES: tuple[tuple[str, ...], ...] = (
    ("dependencies",),
    ("dev-dependencies",),
    ("workspace", "dependencies"),
)

# Tables whose own literal ``version`` is replaced.
PACKAGE_TABLES: tuple[tuple[str, ...], ...] = (
    ("package",),
    ("workspace", "package"),
)


@dataclass(frozen=True)
class ManifestReference:
    """Raw locator for a manifest.

    Attributes:
        path: Directory or manifest file path, as discovered.
        declared_in: Manifest that declared this reference (None for the root).
    """

    path: Path
    declared_in: Path | None = field(default=None, compare=False)


@dataclass(frozen=True, order=True)
class ManifestIdentity:
    """Canonical manifest file location (absolute, symlink-free)."""

    path: Path

    @property
    def directory(self) -> Path:
        """Directory that relative ``path`` fields in this manifest resolve against."""
        return self.path.parent

    def __str__(self) -> str:
        return str(self.path)


def normalize_version(raw: str) -> str:
    """Strip a single leading ``v`` from a version argument.

    ``"v1.2.3"`` becomes ``"1.2.3"``; anything else is returned unchanged.
    No semantic-version validation is performed.
    """
    if raw.startswith("v"):
        return raw[1:]
    return raw
