"""Engine registry and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from docx_converter.application.options import EngineOptions
from docx_converter.application.ports import DocumentConverter
from docx_converter.errors import EngineError
from docx_converter.plugins.base import EnginePlugin
from docx_converter.plugins.builtins import PandocEnginePlugin, PypandocEnginePlugin

DEFAULT_ENGINE = "pandoc"


class EngineRegistry:
    """Registry for conversion engine plugins."""

    def __init__(self) -> None:
        self._plugins: dict[str, EnginePlugin] = {}

    def register(self, plugin: EnginePlugin) -> None:
        """Register plugin instance by unique name.

        Parameters
        ----------
        plugin : EnginePlugin
            Plugin instance to register. A later registration under the same
            name replaces the earlier one.

        Raises
        ------
        EngineError
            If plugin does not provide a valid name.
        """
        name = getattr(plugin, "name", "").strip()
        if not name:
            raise EngineError("Engine plugin must define a non-empty 'name'.")
        self._plugins[name] = plugin

    def names(self) -> list[str]:
        """Return registered engine names, sorted."""
        return sorted(self._plugins.keys())

    def get(self, name: str) -> EnginePlugin:
        """Get plugin by name.

        Raises
        ------
        EngineError
            If the engine name is not registered.
        """
        try:
            return self._plugins[name]
        except KeyError as exc:
            raise EngineError(
                f"Unknown engine '{name}'. Available engines: {', '.join(self.names())}"
            ) from exc

    def create(self, name: str, options: EngineOptions) -> DocumentConverter:
        """Instantiate the named engine with ``options``."""
        return self.get(name).create(options)

    def load_module(self, module_or_path: str) -> None:
        """Load engine providers from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            engines from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Raises
    ------
    EngineError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise EngineError(f"Unable to load engine module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise EngineError(f"Unable to load engine module from {candidate}: {exc}") from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise EngineError(
            f"Unable to import engine module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: EngineRegistry) -> None:
    """Register engines exposed by ``register_engines``, ``ENGINES`` or ``ENGINE``."""
    if hasattr(module, "register_engines"):
        module.register_engines(registry)
        return

    engines_obj = getattr(module, "ENGINES", None)
    if engines_obj is not None:
        for plugin in engines_obj:
            registry.register(plugin)
        return

    engine_obj = getattr(module, "ENGINE", None)
    if engine_obj is not None:
        registry.register(engine_obj)
        return

    raise EngineError(
        "Engine module must expose register_engines(registry), ENGINES, or ENGINE."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> EngineRegistry:
    """Create a registry with built-in engines plus ``extra_modules``."""
    registry = EngineRegistry()
    registry.register(PandocEnginePlugin())
    registry.register(PypandocEnginePlugin())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
