"""Manifest file I/O.

INVARIANT: Round trips are lossless. Text is read and written as raw
UTF-8 bytes (no newline translation) and parsed with ``tomlkit``, so
comments and ordering survive untouched fields.

INVARIANT: A manifest that uses CRLF line endings is written back with
CRLF throughout, including lines tomlkit inserts (it emits bare LF).
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError

from bumpctl.domain.errors import ManifestIOError, ManifestParseError


def read_manifest(path: Path) -> TOMLDocument:
    """Read and parse the manifest at *path* into an editable document."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ManifestIOError(f"cannot read manifest: {exc.strerror or exc}", path=path) from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"manifest is not valid UTF-8: {exc}", path=path) from exc

    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ManifestParseError(f"invalid TOML: {exc}", path=path) from exc


def _match_line_endings(text: str) -> str:
    if "\r\n" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\n", "\r\n")


def write_manifest(path: Path, doc: TOMLDocument) -> None:
    """Serialize *doc* back to *path* as UTF-8, keeping CRLF files CRLF."""
    text = _match_line_endings(tomlkit.dumps(doc))
    try:
        path.write_bytes(text.encode("utf-8"))
    except OSError as exc:
        raise ManifestIOError(f"cannot write manifest: {exc.strerror or exc}", path=path) from exc
