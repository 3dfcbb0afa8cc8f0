"""Batch Markdown-to-Word conversion through pluggable engines."""

from __future__ import annotations

from pathlib import Path

from docx_converter.application.results import (
    ConversionOutcome,
    FailureKind,
    OutcomeStatus,
    RunReport,
    WorkItem,
)
from docx_converter.errors import (
    ConfigurationError,
    ConversionError,
    DocxConverterError,
    EngineError,
    InputRootError,
)

__version__ = "0.1.0"


def convert_markdown_tree(
    input_root: Path | None = None,
    output_root: Path | None = None,
    **kwargs: object,
) -> RunReport:
    """Convert a Markdown tree into a mirrored ``.docx`` tree.

    Parameters
    ----------
    input_root : Path | None, optional
        Directory scanned recursively. Defaults to the current directory.
    output_root : Path | None, optional
        Root of the mirrored tree. Defaults to ``<input_root>/word``.
    **kwargs : object
        Forwarded to :func:`docx_converter.api.convert_markdown_tree`.

    Returns
    -------
    RunReport
        Totals plus one record per failed document.
    """
    from .api import convert_markdown_tree as _impl

    return _impl(input_root=input_root, output_root=output_root, **kwargs)


__all__ = [
    "ConfigurationError",
    "ConversionError",
    "ConversionOutcome",
    "DocxConverterError",
    "EngineError",
    "FailureKind",
    "InputRootError",
    "OutcomeStatus",
    "RunReport",
    "WorkItem",
    "__version__",
    "convert_markdown_tree",
]
