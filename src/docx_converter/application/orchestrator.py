"""Batch orchestrator: discover, mirror, dispatch, aggregate."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from concurrent import futures
from dataclasses import replace
from pathlib import Path

from docx_converter.application.discovery import discover_work_items
from docx_converter.application.ports import DocumentConverter
from docx_converter.application.results import (
    ConversionOutcome,
    FailureKind,
    OutcomeListener,
    ReportBuilder,
    RunReport,
    WorkItem,
)
from docx_converter.errors import DirectoryCreationError, InputRootError
from docx_converter.schemas import BatchConfig
from docx_converter.types import ExclusionPredicate

logger = logging.getLogger(__name__)


def create_executor(workers: int) -> futures.Executor | None:
    """Return a bounded thread pool, or ``None`` to run in the calling thread."""
    if workers <= 1:
        return None
    return futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="docx-convert")


def ensure_parent_directory(dest_path: Path) -> Path:
    """Create the destination's parent chain if missing.

    Safe under concurrent calls for the same directory.

    Raises
    ------
    DirectoryCreationError
        If the directory cannot be created.
    """
    parent = dest_path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(
            f"cannot create directory {parent}: {exc.strerror or exc}"
        ) from exc
    return parent


def check_input_root(input_root: Path) -> None:
    """Validate the input root before any work item is created.

    Raises
    ------
    InputRootError
        If the root does not exist, is not a directory, or cannot be listed.
    """
    if not input_root.exists():
        raise InputRootError(f"input root does not exist: {input_root}")
    if not input_root.is_dir():
        raise InputRootError(f"input root is not a directory: {input_root}")
    if not os.access(input_root, os.R_OK | os.X_OK):
        raise InputRootError(f"input root is not readable: {input_root}")


class BatchOrchestrator:
    """Convert every eligible document under an input root.

    Parameters
    ----------
    config : BatchConfig
        Validated batch configuration (roots, extensions, skip rules, pool size).
    converter : DocumentConverter
        Engine adapter invoked once per work item.
    progress : OutcomeListener | None, optional
        Called with each outcome as it is recorded. Calls are serialised.
    extra_rules : Iterable[ExclusionPredicate], optional
        Additional skip rules over input-root-relative paths.
    """

    def __init__(
        self,
        config: BatchConfig,
        converter: DocumentConverter,
        *,
        progress: OutcomeListener | None = None,
        extra_rules: Iterable[ExclusionPredicate] = (),
    ) -> None:
        self._config = config
        self._converter = converter
        self._progress = progress
        self._extra_rules = tuple(extra_rules)
        self._converter_name = getattr(converter, "name", type(converter).__name__)

    @property
    def config(self) -> BatchConfig:
        return self._config

    def run(self) -> RunReport:
        """Run the batch and return its report.

        Raises
        ------
        InputRootError
            If the input root itself is unusable. No other error aborts the run.
        """
        check_input_root(self._config.input_root)
        discovery = discover_work_items(self._config, self._extra_rules)
        builder = ReportBuilder(
            total=len(discovery.items),
            discovery_errors=discovery.errors,
            listener=self._progress,
        )
        logger.info(
            "converting %d document(s) from %s to %s with %s (workers=%d)",
            len(discovery.items),
            self._config.input_root,
            self._config.output_root,
            self._converter_name,
            self._config.workers,
        )

        executor = create_executor(self._config.workers)
        if executor is None:
            for item in discovery.items:
                builder.record(self.process(item))
        else:
            with executor:
                pending = [
                    executor.submit(self._process_and_record, builder, item)
                    for item in discovery.items
                ]
                for future in futures.as_completed(pending):
                    future.result()

        report = builder.finalize()
        logger.info(
            "batch finished: %d total, %d succeeded, %d failed",
            report.total,
            report.succeeded,
            report.failed,
        )
        return report

    def process(self, item: WorkItem) -> ConversionOutcome:
        """Convert one work item; never raises for per-item problems."""
        if not os.access(item.source_path, os.R_OK):
            return ConversionOutcome.failure(
                item, f"source is not readable: {item.source_path}", FailureKind.UNREADABLE
            )
        try:
            ensure_parent_directory(item.dest_path)
        except DirectoryCreationError as exc:
            return ConversionOutcome.failure(item, str(exc), FailureKind.DIRECTORY)

        try:
            outcome = self._converter.convert(item.source_path, item.dest_path)
        except Exception as exc:
            logger.exception("converter %s raised for %s", self._converter_name, item.source_path)
            return ConversionOutcome.failure(
                item, f"{type(exc).__name__}: {exc}", FailureKind.UNEXPECTED
            )
        if not isinstance(outcome, ConversionOutcome):
            logger.error(
                "converter %s returned %s for %s",
                self._converter_name,
                type(outcome).__name__,
                item.source_path,
            )
            return ConversionOutcome.failure(
                item,
                f"converter returned {type(outcome).__name__}, expected ConversionOutcome",
                FailureKind.UNEXPECTED,
            )
        if outcome.item != item:
            outcome = replace(outcome, item=item)
        return outcome

    def _process_and_record(self, builder: ReportBuilder, item: WorkItem) -> None:
        builder.record(self.process(item))
