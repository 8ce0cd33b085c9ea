"""Traversal engine — exactly-once processing over a path-dependency graph.

A single dispatcher loop drains a work queue of raw references. Each
reference is resolved to a :class:`ManifestIdentity` and claimed in the
engine's :class:`ClaimedSet`; only the winner of a claim spawns a unit on
the ThreadPoolExecutor. Units push the references they discover back onto
the same queue. Resolution only reads filesystem metadata, so it runs on
the dispatcher thread alongside the claim.

States per identity: unseen -> claimed -> running -> succeeded | failed.
Only unseen -> claimed is contended, and :meth:`ClaimedSet.claim` makes it
a single atomic check-and-insert.

INVARIANT: At most one unit ever exists per identity. Claims are never
released, so diamonds and cycles terminate.

INVARIANT: Unit failures never cancel running siblings. After the first
unit failure, references still waiting in the queue are dropped unspawned.
A reference that fails to resolve is recorded but drops nothing.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from bumpctl.domain.manifest import ManifestIdentity, ManifestReference
from bumpctl.infrastructure.resolver import resolve_reference

logger = logging.getLogger(__name__)

Enqueue = Callable[[ManifestReference], None]
UnitFn = Callable[[ManifestIdentity, Enqueue], None]
ResolveFn = Callable[[ManifestReference], ManifestIdentity]


class ClaimedSet:
    """Thread-safe set of identities that have been handed to a unit."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._claimed: set[ManifestIdentity] = set()

    def claim(self, identity: ManifestIdentity) -> bool:
        """Insert *identity*; return True only for the first caller."""
        with self._lock:
            if identity in self._claimed:
                return False
            self._claimed.add(identity)
            return True

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)


@dataclass(frozen=True)
class UnitFailure:
    """One failed reference: resolution failures have no identity."""

    reference: ManifestReference
    identity: ManifestIdentity | None
    error: Exception

    @property
    def path(self) -> Path:
        if self.identity is not None:
            return self.identity.path
        return getattr(self.error, "path", None) or self.reference.path


@dataclass
class TraversalReport:
    """Outcome of one traversal.

    Attributes:
        succeeded: Identities whose unit completed, in completion order.
        failures: Failures in the order they were observed.
        skipped: References dropped from the queue after the first unit failure.
    """

    succeeded: list[ManifestIdentity] = field(default_factory=list)
    failures: list[UnitFailure] = field(default_factory=list)
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def first_failure(self) -> UnitFailure | None:
        return self.failures[0] if self.failures else None

    @property
    def first_error(self) -> Exception | None:
        first = self.first_failure
        return first.error if first is not None else None


class TraversalEngine:
    """Queue + claimed-set + worker pool. One instance per run.

    Parameters:
        unit: Called once per claimed identity on a worker thread with the
            identity and an ``enqueue`` callback for discovered references.
        resolve: Reference -> identity conversion (run on the dispatcher).
        max_workers: ThreadPoolExecutor worker count (None: executor default).
    """

    def __init__(
        self,
        unit: UnitFn,
        *,
        resolve: ResolveFn = resolve_reference,
        max_workers: int | None = None,
    ) -> None:
        self._unit = unit
        self._resolve = resolve
        self._max_workers = max_workers
        self.claimed = ClaimedSet()

        # None is the shutdown sentinel, posted when outstanding drops to zero.
        self._queue: queue.Queue[ManifestReference | None] = queue.Queue()
        self._lock = threading.Lock()
        self._outstanding = 0
        self._unit_failed = False
        self._report = TraversalReport()
        self._started = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, root: ManifestReference) -> TraversalReport:
        """Process *root* and everything reachable from it; block until done."""
        if self._started:
            msg = "TraversalEngine instances are single-use"
            raise RuntimeError(msg)
        self._started = True

        self.enqueue(root)
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="bumpctl-unit"
        ) as executor:
            while True:
                reference = self._queue.get()
                if reference is None:
                    break
                self._dispatch(reference, executor)
        return self._report

    def enqueue(self, reference: ManifestReference) -> None:
        """Queue a reference for dispatch. Safe to call from any unit."""
        with self._lock:
            self._outstanding += 1
        self._queue.put(reference)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _dispatch(self, reference: ManifestReference, executor: ThreadPoolExecutor) -> None:
        """Resolve, claim, and spawn. Runs on the dispatcher thread only."""
        if self._unit_has_failed():
            with self._lock:
                self._report.skipped += 1
            logger.debug("Dropping %s after earlier unit failure", reference.path)
            self._release()
            return

        try:
            identity = self._resolve(reference)
        except Exception as exc:
            self._record_failure(UnitFailure(reference, None, exc))
            self._release()
            return

        if not self.claimed.claim(identity):
            logger.debug("Already claimed: %s", identity)
            self._release()
            return

        # The reference's outstanding slot now belongs to the unit.
        executor.submit(self._run_unit, reference, identity)

    def _run_unit(self, reference: ManifestReference, identity: ManifestIdentity) -> None:
        try:
            self._unit(identity, self.enqueue)
        except Exception as exc:
            self._record_failure(UnitFailure(reference, identity, exc))
        else:
            with self._lock:
                self._report.succeeded.append(identity)
        finally:
            self._release()

    def _unit_has_failed(self) -> bool:
        with self._lock:
            return self._unit_failed

    def _record_failure(self, failure: UnitFailure) -> None:
        with self._lock:
            first = not self._report.failures
            self._report.failures.append(failure)
            if failure.identity is not None:
                self._unit_failed = True
        if first:
            logger.debug("Unit failed for %s: %s", failure.path, failure.error)
        else:
            logger.warning("Additional failure for %s: %s", failure.path, failure.error)

    def _release(self) -> None:
        with self._lock:
            self._outstanding -= 1
            finished = self._outstanding == 0
        if finished:
            self._queue.put(None)
