"""Tests for target resolution: references to canonical identities."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from bumpctl.domain.errors import ManifestNotFoundError, ResolutionError
from bumpctl.domain.manifest import ManifestIdentity, ManifestReference
from bumpctl.infrastructure.resolver import resolve_reference


@pytest.fixture
def crate(tmp_path: Path) -> Path:
    directory = tmp_path / "ws" / "crates" / "core"
    directory.mkdir(parents=True)
    (directory / "Cargo.toml").write_text('[package]\nname = "core"\n', encoding="utf-8")
    return directory


class TestResolveReference:
    def test_directory_gets_manifest_appended(self, crate: Path) -> None:
        identity = resolve_reference(ManifestReference(crate))
        assert identity == ManifestIdentity((crate / "Cargo.toml").resolve())

    def test_explicit_manifest_file(self, crate: Path) -> None:
        identity = resolve_reference(ManifestReference(crate / "Cargo.toml"))
        assert identity.path == (crate / "Cargo.toml").resolve()

    def test_identity_is_absolute(self, crate: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(crate.parent)
        identity = resolve_reference(ManifestReference(Path("core")))
        assert identity.path.is_absolute()

    def test_different_spellings_collapse(self, crate: Path) -> None:
        ws = crate.parent.parent
        direct = resolve_reference(ManifestReference(crate))
        dotted = resolve_reference(ManifestReference(ws / "crates" / ".." / "crates" / "core" / "."))
        as_file = resolve_reference(ManifestReference(crate / "Cargo.toml"))
        assert direct == dotted == as_file

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_resolved(self, crate: Path, tmp_path: Path) -> None:
        link = tmp_path / "link"
        try:
            link.symlink_to(crate, target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")
        assert resolve_reference(ManifestReference(link)) == resolve_reference(
            ManifestReference(crate)
        )

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError) as excinfo:
            resolve_reference(ManifestReference(tmp_path / "nope"))
        assert excinfo.value.code == "NOT_FOUND"
        assert isinstance(excinfo.value, ResolutionError)

    def test_directory_without_manifest(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(ManifestNotFoundError) as excinfo:
            resolve_reference(ManifestReference(empty))
        assert excinfo.value.path == empty / "Cargo.toml"

    def test_error_names_declaring_manifest(self, tmp_path: Path) -> None:
        owner = tmp_path / "Cargo.toml"
        with pytest.raises(ManifestNotFoundError) as excinfo:
            resolve_reference(ManifestReference(tmp_path / "libs" / "foo", declared_in=owner))
        message = str(excinfo.value)
        assert str(owner) in message
        assert "foo" in message
