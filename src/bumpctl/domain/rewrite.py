"""Version rewriting over a parsed Cargo manifest.

Two field-level mutations, applied in place on a ``tomlkit`` document:

- Detailed dependency entries (``foo = { path = "..." }`` or a
  ``[dependencies.foo]`` table) without a ``version`` get the target version.
- A literal ``version`` in ``[package]`` / ``[workspace.package]`` is replaced.
  ``version.workspace = true`` defers to the owning table and is left alone.

Every ``path`` seen on a detailed dependency is returned as a
:class:`ManifestReference` joined against the manifest's own directory.

Pure: no I/O, no failure modes. Anything not shaped like a table is skipped.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

from bumpctl.domain.manifest import (
    DEPENDENCY_TABLES,
    PACKAGE_TABLES,
    ManifestReference,
)


def _as_table(item: Any) -> MutableMapping[str, Any] | None:
    """Return *item* if it is table-like (table, inline table, or proxy)."""
    if isinstance(item, MutableMapping):
        return item
    return None


def _lookup(
    doc: MutableMapping[str, Any], keys: tuple[str, ...]
) -> MutableMapping[str, Any] | None:
    """Walk nested tables by *keys*; None if any step is missing or not a table."""
    current: MutableMapping[str, Any] | None = doc
    for key in keys:
        if current is None:
            return None
        current = _as_table(current.get(key))
    return current


def rewrite_dependencies(
    table: MutableMapping[str, Any],
    version: str,
    *,
    base_dir: Path,
    manifest_path: Path | None = None,
) -> list[ManifestReference]:
    """Default unpinned detailed entries to *version* and collect path references."""
    references: list[ManifestReference] = []
    for _name, entry in list(table.items()):
        detail = _as_table(entry)
        if detail is None:
            continue  # bare "1.0" requirement

        if "version" not in detail:
            detail["version"] = version

        path = detail.get("path")
        if isinstance(path, str):
            references.append(
                ManifestReference(path=base_dir / str(path), declared_in=manifest_path)
            )
    return references


def rewrite_package(table: MutableMapping[str, Any], version: str) -> bool:
    """Replace a literal ``version`` in a package table.

    Returns True if the field was changed. Inherited versions and values
    already equal to *version* are left untouched.
    """
    if "version" not in table:
        return False
    current = table["version"]
    if _as_table(current) is not None:
        return False
    if isinstance(current, str) and current == version:
        return False
    table["version"] = version
    return True


def rewrite_manifest(
    doc: MutableMapping[str, Any],
    version: str,
    *,
    base_dir: Path,
    manifest_path: Path | None = None,
) -> list[ManifestReference]:
    """Apply both mutations to *doc* and return discovered path references.

    Args:
        doc: Parsed manifest, mutated in place.
        version: Target version string (already normalized).
        base_dir: Directory of the manifest; ``path`` fields are relative to it.
        manifest_path: Manifest file, recorded on references for error context.
    """
    references: list[ManifestReference] = []
    for keys in DEPENDENCY_TABLES:
        table = _lookup(doc, keys)
        if table is not None:
            references.extend(
                rewrite_dependencies(
                    table, version, base_dir=base_dir, manifest_path=manifest_path
                )
            )

    for keys in PACKAGE_TABLES:
        table = _lookup(doc, keys)
        if table is not None:
            rewrite_package(table, version)

    return references
