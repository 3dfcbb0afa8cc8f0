"""Built-in conversion engine plugins."""

from __future__ import annotations

import importlib.util
import shutil
from dataclasses import asdict

from pydantic import ValidationError

from docx_converter.adapters.converters import PandocConverter, PypandocConverter
from docx_converter.application.options import EngineOptions
from docx_converter.errors import EngineError
from docx_converter.schemas import PandocEngineConfig


def _validated(options: EngineOptions) -> EngineOptions:
    """Validate engine options through ``PandocEngineConfig``."""
    try:
        config = PandocEngineConfig(**asdict(options))
    except ValidationError as exc:
        raise EngineError(f"Invalid engine options: {exc}") from exc
    return EngineOptions(**config.model_dump())


class PandocEnginePlugin:
    """Run the pandoc executable as a subprocess."""

    name = "pandoc"
    description = "pandoc executable on PATH (subprocess per document)"

    def is_available(self, options: EngineOptions) -> bool:
        return shutil.which(options.executable) is not None

    def create(self, options: EngineOptions) -> PandocConverter:
        return PandocConverter(_validated(options))


class PypandocEnginePlugin:
    """Run pandoc through the pypandoc library."""

    name = "pypandoc"
    description = "pypandoc library wrapper (requires the pypandoc extra)"

    def is_available(self, options: EngineOptions) -> bool:
        del options
        return importlib.util.find_spec("pypandoc") is not None

    def create(self, options: EngineOptions) -> PypandocConverter:
        return PypandocConverter(_validated(options))
