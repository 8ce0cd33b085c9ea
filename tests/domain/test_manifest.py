"""Tests for manifest references, identities, and version normalization."""

from pathlib import Path

from bumpctl.domain.manifest import (
    MANIFEST_FILENAME,
    ManifestIdentity,
    ManifestReference,
    normalize_version,
)


class TestNormalizeVersion:
    def test_strips_leading_v(self) -> None:
        assert normalize_version("v1.2.3") == "1.2.3"

    def test_plain_version_unchanged(self) -> None:
        assert normalize_version("1.2.3") == "1.2.3"

    def test_only_one_v_stripped(self) -> None:
        assert normalize_version("vv1") == "v1"

    def test_no_semver_validation(self) -> None:
        assert normalize_version("not-a-version") == "not-a-version"

    def test_uppercase_v_kept(self) -> None:
        assert normalize_version("V1.0.0") == "V1.0.0"


class TestManifestIdentity:
    def test_equality_by_path(self) -> None:
        a = ManifestIdentity(Path("/ws/a/Cargo.toml"))
        b = ManifestIdentity(Path("/ws/a/Cargo.toml"))
        assert a == b
        assert len({a, b}) == 1

    def test_directory(self) -> None:
        identity = ManifestIdentity(Path("/ws/a") / MANIFEST_FILENAME)
        assert identity.directory == Path("/ws/a")

    def test_str_is_path(self) -> None:
        assert str(ManifestIdentity(Path("/ws/Cargo.toml"))) == str(Path("/ws/Cargo.toml"))


class TestManifestReference:
    def test_declared_in_ignored_for_equality(self) -> None:
        a = ManifestReference(Path("libs/foo"), declared_in=Path("/ws/Cargo.toml"))
        b = ManifestReference(Path("libs/foo"))
        assert a == b

    def test_root_reference_has_no_origin(self) -> None:
        assert ManifestReference(Path(".")).declared_in is None
