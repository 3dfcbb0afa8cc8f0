"""Unit tests for outcome and report objects."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from docx_converter.application.results import (
    ConversionOutcome,
    DiscoveryErrorRecord,
    FailureKind,
    FailureRecord,
    OutcomeStatus,
    ReportBuilder,
    RunReport,
    WorkItem,
)


def _item(name: str) -> WorkItem:
    return WorkItem(source_path=Path("src") / name, dest_path=Path("out") / name)


def test_failure_outcome_always_has_diagnostic() -> None:
    """Fall back to a generic diagnostic when none is supplied."""
    outcome = ConversionOutcome.failure(_item("a.md"), "", FailureKind.CONTENT)

    assert outcome.status is OutcomeStatus.FAILED
    assert outcome.diagnostic == "conversion failed"
    assert not outcome.succeeded


def test_report_rejects_inconsistent_counts() -> None:
    """Enforce total == succeeded + failed."""
    with pytest.raises(ValueError, match="inconsistent report"):
        RunReport(total=3, succeeded=1, failed=1, failures=(
            FailureRecord(Path("a.md"), "x", FailureKind.CONTENT),
        ))


def test_report_rejects_missing_failure_records() -> None:
    """Require one failure record per failed item."""
    with pytest.raises(ValueError, match="failure records"):
        RunReport(total=1, succeeded=0, failed=1)


def test_builder_accumulates_and_notifies() -> None:
    """Count outcomes, keep failure order, and forward to the listener."""
    seen: list[str] = []
    builder = ReportBuilder(
        total=3,
        discovery_errors=[DiscoveryErrorRecord(Path("locked"), "denied")],
        listener=lambda outcome: seen.append(outcome.item.source_path.name),
    )
    builder.record(ConversionOutcome.success(_item("a.md")))
    builder.record(ConversionOutcome.failure(_item("b.md"), "bad", FailureKind.CONTENT))
    builder.record(
        ConversionOutcome.failure(_item("c.md"), "no pandoc", FailureKind.ENVIRONMENT)
    )

    report = builder.finalize()

    assert (report.total, report.succeeded, report.failed) == (3, 1, 2)
    assert [f.source_path.name for f in report.failures] == ["b.md", "c.md"]
    assert report.failures[1].kind is FailureKind.ENVIRONMENT
    assert report.discovery_errors[0].path == Path("locked")
    assert seen == ["a.md", "b.md", "c.md"]


def test_builder_is_thread_safe() -> None:
    """Concurrent records are all counted."""
    total = 200
    builder = ReportBuilder(total=total)

    def _worker(offset: int) -> None:
        for i in range(offset, total, 4):
            builder.record(ConversionOutcome.success(_item(f"{i}.md")))

    threads = [threading.Thread(target=_worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    report = builder.finalize()
    assert report.succeeded == total
    assert report.ok


def test_builder_survives_failing_listener() -> None:
    """A listener error is logged and does not lose the outcome."""

    def _broken(outcome: ConversionOutcome) -> None:
        raise BrokenPipeError(32, "Broken pipe")

    builder = ReportBuilder(total=2, listener=_broken)
    builder.record(ConversionOutcome.success(_item("a.md")))
    builder.record(ConversionOutcome.failure(_item("b.md"), "bad", FailureKind.CONTENT))

    report = builder.finalize()
    assert (report.total, report.succeeded, report.failed) == (2, 1, 1)
