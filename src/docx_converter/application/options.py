"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from docx_converter.types import ReadmeMatch


@dataclass(frozen=True)
class ExclusionOptions:
    """Skip rules applied during tree discovery.

    The root-level ``README`` rule is always active; these options only
    widen it or add further rules.
    """

    readme_match: ReadmeMatch = "filename"
    exclude_nested_readmes: bool = False
    patterns: tuple[str, ...] = ()
    skip_hidden: bool = False


@dataclass(frozen=True)
class EngineOptions:
    """Conversion engine configuration."""

    executable: str = "pandoc"
    source_format: str = "markdown"
    target_format: str = "docx"
    extra_args: tuple[str, ...] = ()
    timeout: float | None = None
