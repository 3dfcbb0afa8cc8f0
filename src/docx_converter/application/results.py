"""Application-layer result objects."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeAlias

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    """Terminal status of a single conversion."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why a conversion failed.

    ``ENVIRONMENT`` marks host problems (engine missing or not executable),
    everything else is specific to the document or its destination.
    """

    ENVIRONMENT = "environment"
    CONTENT = "content"
    DIRECTORY = "directory"
    UNREADABLE = "unreadable"
    TIMEOUT = "timeout"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class WorkItem:
    """One source document paired with its mirrored destination."""

    source_path: Path
    dest_path: Path


@dataclass(frozen=True)
class ConversionOutcome:
    """Structured conversion outcome for one work item."""

    item: WorkItem
    status: OutcomeStatus
    diagnostic: str | None = None
    failure_kind: FailureKind | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED

    @classmethod
    def success(cls, item: WorkItem, diagnostic: str | None = None) -> ConversionOutcome:
        """Build a successful outcome, keeping engine warnings if any."""
        return cls(item=item, status=OutcomeStatus.SUCCEEDED, diagnostic=diagnostic)

    @classmethod
    def failure(
        cls, item: WorkItem, diagnostic: str, kind: FailureKind
    ) -> ConversionOutcome:
        """Build a failed outcome; a diagnostic is always required."""
        return cls(
            item=item,
            status=OutcomeStatus.FAILED,
            diagnostic=diagnostic or "conversion failed",
            failure_kind=kind,
        )


@dataclass(frozen=True)
class FailureRecord:
    """Failure entry listed in the final report."""

    source_path: Path
    diagnostic: str
    kind: FailureKind


@dataclass(frozen=True)
class DiscoveryErrorRecord:
    """A subtree or entry that could not be processed during discovery."""

    path: Path
    diagnostic: str


@dataclass(frozen=True)
class DiscoveryResult:
    """Work items and non-fatal errors produced by a tree walk."""

    items: tuple[WorkItem, ...]
    errors: tuple[DiscoveryErrorRecord, ...] = ()


@dataclass(frozen=True)
class RunReport:
    """Summary of one batch run.

    Raises
    ------
    ValueError
        If the counts do not add up.
    """

    total: int
    succeeded: int
    failed: int
    failures: tuple[FailureRecord, ...] = ()
    discovery_errors: tuple[DiscoveryErrorRecord, ...] = ()

    def __post_init__(self) -> None:
        if self.total != self.succeeded + self.failed:
            raise ValueError(
                f"inconsistent report: total={self.total} "
                f"succeeded={self.succeeded} failed={self.failed}"
            )
        if self.failed != len(self.failures):
            raise ValueError("failed count does not match failure records")

    @property
    def ok(self) -> bool:
        """``True`` when no work item failed."""
        return self.failed == 0


OutcomeListener: TypeAlias = Callable[[ConversionOutcome], None]


class ReportBuilder:
    """Thread-safe accumulator for conversion outcomes."""

    def __init__(
        self,
        total: int,
        discovery_errors: Iterable[DiscoveryErrorRecord] = (),
        listener: OutcomeListener | None = None,
    ) -> None:
        self._total = total
        self._discovery_errors = tuple(discovery_errors)
        self._listener = listener
        self._lock = threading.Lock()
        self._succeeded = 0
        self._failures: list[FailureRecord] = []

    def record(self, outcome: ConversionOutcome) -> None:
        """Append one outcome and notify the listener under the lock."""
        with self._lock:
            if outcome.succeeded:
                self._succeeded += 1
            else:
                self._failures.append(
                    FailureRecord(
                        source_path=outcome.item.source_path,
                        diagnostic=outcome.diagnostic or "conversion failed",
                        kind=outcome.failure_kind or FailureKind.UNEXPECTED,
                    )
                )
            if self._listener is not None:
                try:
                    self._listener(outcome)
                except Exception:
                    logger.exception(
                        "progress listener failed for %s", outcome.item.source_path
                    )

    def finalize(self) -> RunReport:
        """Freeze accumulated outcomes into a report."""
        with self._lock:
            return RunReport(
                total=self._total,
                succeeded=self._succeeded,
                failed=len(self._failures),
                failures=tuple(self._failures),
                discovery_errors=self._discovery_errors,
            )
