"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from docx_converter.application.results import ConversionOutcome


@runtime_checkable
class DocumentConverter(Protocol):
    """Convert one source document into one destination document.

    Implementations must not raise for expected failures (missing engine,
    malformed document, non-zero engine exit); those resolve to a failed
    ``ConversionOutcome`` carrying a diagnostic.
    """

    name: str

    def convert(self, source_path: Path, dest_path: Path) -> ConversionOutcome:
        """Convert ``source_path`` and write the result to ``dest_path``."""
