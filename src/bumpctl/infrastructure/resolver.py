"""Target resolution: raw manifest references to canonical identities.

Directories get ``Cargo.toml`` appended; the result is resolved strictly
(absolute, symlinks followed, must exist). Two spellings of one file
always yield equal identities.

Paths that leave the workspace root are followed like any other.
"""

from __future__ import annotations

from bumpctl.domain.errors import ManifestNotFoundError, ResolutionError
from bumpctl.domain.manifest import MANIFEST_FILENAME, ManifestIdentity, ManifestReference


def _origin(reference: ManifestReference) -> str:
    if reference.declared_in is None:
        return ""
    return f" (path dependency of {reference.declared_in})"


def resolve_reference(reference: ManifestReference) -> ManifestIdentity:
    """Canonicalise *reference* into a :class:`ManifestIdentity`.

    Raises:
        ManifestNotFoundError: The directory or manifest file does not exist.
        ResolutionError: Any other filesystem error while resolving.
    """
    path = reference.path
    try:
        if path.is_dir():
            path = path / MANIFEST_FILENAME
        canonical = path.resolve(strict=True)
    except FileNotFoundError as exc:
        msg = f"manifest not found{_origin(reference)}"
        raise ManifestNotFoundError(msg, path=path) from exc
    except (OSError, RuntimeError) as exc:
        # RuntimeError: symlink loop on older interpreters
        msg = f"cannot resolve path{_origin(reference)}: {exc}"
        raise ResolutionError(msg, path=path) from exc

    if canonical.is_dir():
        msg = f"not a manifest file{_origin(reference)}"
        raise ManifestNotFoundError(msg, path=canonical)
    return ManifestIdentity(canonical)
