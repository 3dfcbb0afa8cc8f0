"""Engine plugin protocol for pluggable conversion engines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from docx_converter.application.options import EngineOptions
from docx_converter.application.ports import DocumentConverter


@runtime_checkable
class EnginePlugin(Protocol):
    """Protocol implemented by conversion engine plugins."""

    name: str
    description: str

    def is_available(self, options: EngineOptions) -> bool:
        """Check whether the engine can run on this host.

        Parameters
        ----------
        options : EngineOptions
            Engine configuration (e.g. the executable to look for).

        Returns
        -------
        bool
            ``True`` if the engine's runtime requirements are present.
        """

    def create(self, options: EngineOptions) -> DocumentConverter:
        """Build a converter bound to ``options``.

        Parameters
        ----------
        options : EngineOptions
            Engine configuration.

        Returns
        -------
        DocumentConverter
            Ready-to-use converter.
        """
