"""PropagateService — rewrite a workspace's versions via its path dependencies.

Each claimed manifest is handled by one unit: read, rewrite, enqueue the
path dependencies it declares, write. The traversal engine guarantees one
unit per manifest file and keeps siblings running when one fails.

INVARIANT: A failed unit leaves its own manifest untouched on disk.
Manifests already written are never rolled back.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from bumpctl.domain.errors import BumpError
from bumpctl.domain.manifest import ManifestIdentity, ManifestReference
from bumpctl.domain.rewrite import rewrite_manifest
from bumpctl.infrastructure.manifest_io import read_manifest, write_manifest
from bumpctl.services.result import ServiceError, ServiceResult
from bumpctl.services.telemetry import get_current_span, traced
from bumpctl.services.traversal import Enqueue, TraversalEngine, TraversalReport

log = structlog.get_logger(__name__)

OP_NAME = "propagate_version"


class PropagateService:
    """Propagate one version string across every reachable manifest.

    Parameters:
        version: Target version, already normalized (no leading ``v``).
        max_workers: Worker threads for the traversal engine.
    """

    def __init__(self, version: str, *, max_workers: int | None = None) -> None:
        self._version = version
        self._max_workers = max_workers

    @traced
    def propagate(self, root: Path) -> ServiceResult:
        """Rewrite the manifest at (or in) *root* and everything it reaches."""
        engine = TraversalEngine(self._process, max_workers=self._max_workers)
        report = engine.run(ManifestReference(root))

        span = get_current_span()
        if span is not None:
            span.annotate("manifests", len(report.succeeded))
            span.annotate("failures", len(report.failures))
            span.annotate("skipped", report.skipped)

        return self._to_result(root, report)

    def _process(self, identity: ManifestIdentity, enqueue: Enqueue) -> None:
        """One processing unit. Runs on a worker thread."""
        doc = read_manifest(identity.path)
        references = rewrite_manifest(
            doc,
            self._version,
            base_dir=identity.directory,
            manifest_path=identity.path,
        )
        for reference in references:
            enqueue(reference)
        write_manifest(identity.path, doc)
        log.debug(
            "manifest.updated",
            manifest=str(identity),
            path_dependencies=len(references),
        )

    def _to_result(self, root: Path, report: TraversalReport) -> ServiceResult:
        data = {
            "version": self._version,
            "root": str(root),
            "updated": sorted(str(identity) for identity in report.succeeded),
            "count": len(report.succeeded),
        }

        first = report.first_failure
        if first is None:
            return ServiceResult(ok=True, op=OP_NAME, data=data)

        error = first.error
        if isinstance(error, BumpError):
            code, message = error.code, str(error)
        else:
            code, message = "UNEXPECTED_ERROR", f"{first.path}: {error!r}"
        warnings = [
            f"also failed: {failure.error}" for failure in report.failures[1:]
        ]
        if report.skipped:
            warnings.append(
                f"{report.skipped} queued reference(s) skipped after first unit failure"
            )

        return ServiceResult(
            ok=False,
            op=OP_NAME,
            data=data,
            warnings=warnings,
            error=ServiceError(
                code=code,
                message=message,
                detail={
                    "path": str(first.path),
                    "failures": len(report.failures),
                },
            ),
        )
