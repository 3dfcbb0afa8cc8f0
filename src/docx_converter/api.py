"""Public conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from typing import Optional

from docx_converter.application.options import EngineOptions, ExclusionOptions
from docx_converter.application.ports import DocumentConverter
from docx_converter.application.results import ConversionOutcome, OutcomeListener, RunReport
from docx_converter.application.use_cases import build_batch_config
from docx_converter.application.use_cases import convert_file
from docx_converter.application.use_cases import convert_tree
from docx_converter.application.use_cases import create_converter
from docx_converter.types import ReadmeMatch


def build_engine_options(
    pandoc_path: str = "pandoc",
    source_format: str = "markdown",
    target_format: str = "docx",
    extra_args: Optional[Iterable[str]] = None,
    timeout: Optional[float] = None,
) -> EngineOptions:
    """Build typed engine options from command/API params."""
    return EngineOptions(
        executable=pandoc_path,
        source_format=source_format,
        target_format=target_format,
        extra_args=tuple(extra_args or ()),
        timeout=timeout,
    )


def convert_markdown_tree(
    input_root: Optional[Path] = None,
    output_root: Optional[Path] = None,
    engine: str = "pandoc",
    engine_modules: Optional[Iterable[str]] = None,
    pandoc_path: str = "pandoc",
    source_format: str = "markdown",
    target_format: str = "docx",
    source_extension: str = ".md",
    target_extension: str = ".docx",
    workers: int = 1,
    timeout: Optional[float] = None,
    exclude_patterns: Optional[Iterable[str]] = None,
    skip_hidden: bool = False,
    readme_match: ReadmeMatch = "filename",
    exclude_nested_readmes: bool = False,
    extra_args: Optional[Iterable[str]] = None,
    converter: Optional[DocumentConverter] = None,
    progress: Optional[OutcomeListener] = None,
) -> RunReport:
    """Convert every Markdown document under ``input_root`` into a mirrored tree.

    A custom ``converter`` bypasses engine resolution entirely.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid.
    EngineError
        If the engine cannot be resolved.
    InputRootError
        If the input root is missing or unreadable.
    """
    config = build_batch_config(
        input_root=input_root,
        output_root=output_root,
        source_extension=source_extension,
        target_extension=target_extension,
        workers=workers,
        exclusions=ExclusionOptions(
            readme_match=readme_match,
            exclude_nested_readmes=exclude_nested_readmes,
            patterns=tuple(exclude_patterns or ()),
            skip_hidden=skip_hidden,
        ),
    )
    if converter is None:
        converter = create_converter(
            engine=engine,
            options=build_engine_options(
                pandoc_path=pandoc_path,
                source_format=source_format,
                target_format=target_format,
                extra_args=extra_args,
                timeout=timeout,
            ),
            engine_modules=engine_modules,
        )
    return convert_tree(config=config, converter=converter, progress=progress)


def convert_markdown_file(
    source_path: Path,
    dest_path: Path,
    engine: str = "pandoc",
    pandoc_path: str = "pandoc",
    source_format: str = "markdown",
    target_format: str = "docx",
    timeout: Optional[float] = None,
    extra_args: Optional[Iterable[str]] = None,
    converter: Optional[DocumentConverter] = None,
) -> ConversionOutcome:
    """Convert a single Markdown document."""
    if converter is None:
        converter = create_converter(
            engine=engine,
            options=build_engine_options(
                pandoc_path=pandoc_path,
                source_format=source_format,
                target_format=target_format,
                extra_args=extra_args,
                timeout=timeout,
            ),
        )
    return convert_file(source_path=source_path, dest_path=dest_path, converter=converter)
