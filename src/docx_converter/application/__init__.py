"""Application-layer use-cases, option and result objects."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from docx_converter.application.options import EngineOptions, ExclusionOptions
from docx_converter.application.ports import DocumentConverter
from docx_converter.application.results import (
    ConversionOutcome,
    FailureKind,
    OutcomeListener,
    OutcomeStatus,
    RunReport,
    WorkItem,
)
from docx_converter.schemas import BatchConfig
from docx_converter.types import ExclusionPredicate


def build_batch_config(
    *,
    input_root: Path | None = None,
    output_root: Path | None = None,
    source_extension: str = ".md",
    target_extension: str = ".docx",
    workers: int = 1,
    exclusions: ExclusionOptions = ExclusionOptions(),
) -> BatchConfig:
    """Build a validated batch configuration via lazy use-case import."""
    from docx_converter.application.use_cases import build_batch_config as _impl

    return _impl(
        input_root=input_root,
        output_root=output_root,
        source_extension=source_extension,
        target_extension=target_extension,
        workers=workers,
        exclusions=exclusions,
    )


def convert_tree(
    *,
    config: BatchConfig,
    converter: DocumentConverter,
    progress: OutcomeListener | None = None,
    extra_rules: Iterable[ExclusionPredicate] = (),
) -> RunReport:
    """Convert a document tree via lazy use-case import."""
    from docx_converter.application.use_cases import convert_tree as _impl

    return _impl(
        config=config,
        converter=converter,
        progress=progress,
        extra_rules=extra_rules,
    )


def create_converter(
    *,
    engine: str = "pandoc",
    options: EngineOptions = EngineOptions(),
    engine_modules: Iterable[str] | None = None,
) -> DocumentConverter:
    """Resolve a conversion engine via lazy use-case import."""
    from docx_converter.application.use_cases import create_converter as _impl

    return _impl(engine=engine, options=options, engine_modules=engine_modules)


__all__ = [
    "BatchConfig",
    "ConversionOutcome",
    "DocumentConverter",
    "EngineOptions",
    "ExclusionOptions",
    "FailureKind",
    "OutcomeStatus",
    "RunReport",
    "WorkItem",
    "build_batch_config",
    "convert_tree",
    "create_converter",
]
