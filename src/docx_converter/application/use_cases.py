"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from docx_converter.application.options import EngineOptions, ExclusionOptions
from docx_converter.application.orchestrator import BatchOrchestrator, ensure_parent_directory
from docx_converter.application.ports import DocumentConverter
from docx_converter.application.results import (
    ConversionOutcome,
    FailureKind,
    OutcomeListener,
    RunReport,
    WorkItem,
)
from docx_converter.errors import ConfigurationError, DirectoryCreationError
from docx_converter.plugins.registry import DEFAULT_ENGINE, create_default_registry
from docx_converter.schemas import BatchConfig
from docx_converter.types import ExclusionPredicate

DEFAULT_OUTPUT_DIRNAME = "word"


def build_batch_config(
    *,
    input_root: Path | None = None,
    output_root: Path | None = None,
    source_extension: str = ".md",
    target_extension: str = ".docx",
    workers: int = 1,
    exclusions: ExclusionOptions = ExclusionOptions(),
) -> BatchConfig:
    """Resolve defaults once and validate the batch configuration.

    ``input_root`` defaults to the current directory and ``output_root`` to
    ``<input_root>/word``.

    Raises
    ------
    ConfigurationError
        If validation fails.
    """
    resolved_input = input_root if input_root is not None else Path.cwd()
    resolved_output = (
        output_root if output_root is not None else resolved_input / DEFAULT_OUTPUT_DIRNAME
    )
    try:
        return BatchConfig(
            input_root=resolved_input,
            output_root=resolved_output,
            source_extension=source_extension,
            target_extension=target_extension,
            workers=workers,
            readme_match=exclusions.readme_match,
            exclude_nested_readmes=exclusions.exclude_nested_readmes,
            exclude_patterns=tuple(exclusions.patterns),
            skip_hidden=exclusions.skip_hidden,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid batch configuration: {exc}") from exc


def create_converter(
    *,
    engine: str = DEFAULT_ENGINE,
    options: EngineOptions = EngineOptions(),
    engine_modules: Iterable[str] | None = None,
) -> DocumentConverter:
    """Use-case: resolve an engine by name and bind it to ``options``."""
    registry = create_default_registry(extra_modules=engine_modules)
    return registry.create(engine, options)


def convert_tree(
    *,
    config: BatchConfig,
    converter: DocumentConverter,
    progress: OutcomeListener | None = None,
    extra_rules: Iterable[ExclusionPredicate] = (),
) -> RunReport:
    """Use-case: convert every eligible document under ``config.input_root``."""
    orchestrator = BatchOrchestrator(
        config,
        converter,
        progress=progress,
        extra_rules=extra_rules,
    )
    return orchestrator.run()


def convert_file(
    *,
    source_path: Path,
    dest_path: Path,
    converter: DocumentConverter,
) -> ConversionOutcome:
    """Use-case: convert a single document, creating the destination directory."""
    item = WorkItem(source_path=source_path, dest_path=dest_path)
    try:
        ensure_parent_directory(dest_path)
    except DirectoryCreationError as exc:
        return ConversionOutcome.failure(item, str(exc), FailureKind.DIRECTORY)
    return converter.convert(source_path, dest_path)
