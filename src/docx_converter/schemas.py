"""Pydantic schemas for runtime validation of batch configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _validate_extension(value: str) -> str:
    if not value.startswith(".") or len(value) < 2:
        raise ValueError("extension must start with '.' and name a suffix, e.g. '.md'.")
    if "." in value[1:] or "/" in value or "\\" in value:
        raise ValueError("extension must be a single suffix without separators.")
    return value


class BatchConfig(BaseModel):
    """Validated configuration for one batch run.

    Both roots are resolved to absolute paths on construction so discovery
    and destination containment checks compare like with like.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_root: Path
    output_root: Path
    source_extension: str = ".md"
    target_extension: str = ".docx"
    workers: int = Field(default=1, ge=1, le=64)
    readme_match: Literal["filename", "stem"] = "filename"
    exclude_nested_readmes: bool = False
    exclude_patterns: tuple[str, ...] = ()
    skip_hidden: bool = False

    @field_validator("input_root", "output_root")
    @classmethod
    def _resolve_root(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @field_validator("source_extension", "target_extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        return _validate_extension(value)

    @field_validator("exclude_patterns")
    @classmethod
    def _check_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not pattern.strip() for pattern in value):
            raise ValueError("exclude patterns cannot be empty.")
        return value

    @model_validator(mode="after")
    def _check_roots(self) -> BatchConfig:
        if self.input_root == self.output_root and (
            self.source_extension == self.target_extension
        ):
            raise ValueError(
                "output_root must differ from input_root when source and "
                "target extensions are identical."
            )
        return self


class PandocEngineConfig(BaseModel):
    """Validated options for pandoc-backed engines."""

    model_config = ConfigDict(extra="forbid")

    executable: str = "pandoc"
    source_format: str = "markdown"
    target_format: str = "docx"
    extra_args: tuple[str, ...] = ()
    timeout: float | None = Field(default=None, gt=0.0)

    @field_validator("executable", "source_format", "target_format")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("value cannot be empty.")
        return cleaned
