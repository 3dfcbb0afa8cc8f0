"""Unit tests for application use-case contracts."""

from __future__ import annotations

from pathlib import Path

import pytest

from docx_converter.adapters.converters import PandocConverter, PypandocConverter
from docx_converter.application import use_cases
from docx_converter.application.options import EngineOptions, ExclusionOptions
from docx_converter.application.results import FailureKind
from docx_converter.errors import ConfigurationError, EngineError


def test_build_batch_config_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Default to the current directory and its ``word`` subdirectory."""
    monkeypatch.chdir(tmp_path)

    config = use_cases.build_batch_config()

    assert config.input_root == tmp_path.resolve()
    assert config.output_root == tmp_path.resolve() / "word"
    assert config.source_extension == ".md"
    assert config.target_extension == ".docx"
    assert config.workers == 1


def test_build_batch_config_forwards_exclusions(tmp_path: Path) -> None:
    """Carry exclusion options into the validated config."""
    config = use_cases.build_batch_config(
        input_root=tmp_path,
        output_root=tmp_path / "out",
        workers=3,
        exclusions=ExclusionOptions(
            readme_match="stem",
            exclude_nested_readmes=True,
            patterns=("drafts/*",),
            skip_hidden=True,
        ),
    )

    assert config.readme_match == "stem"
    assert config.exclude_nested_readmes is True
    assert config.exclude_patterns == ("drafts/*",)
    assert config.skip_hidden is True
    assert config.workers == 3


def test_build_batch_config_wraps_validation_error(tmp_path: Path) -> None:
    """Surface pydantic failures as ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Invalid batch configuration"):
        use_cases.build_batch_config(input_root=tmp_path, source_extension="md")


def test_create_converter_resolves_builtin_engines() -> None:
    """Resolve built-in engines by name with bound options."""
    pandoc = use_cases.create_converter(options=EngineOptions(timeout=5.0))
    assert isinstance(pandoc, PandocConverter)
    assert pandoc.options.timeout == 5.0

    assert isinstance(use_cases.create_converter(engine="pypandoc"), PypandocConverter)


def test_create_converter_unknown_engine() -> None:
    """Reject unknown engine names."""
    with pytest.raises(EngineError, match="Unknown engine 'libreoffice'"):
        use_cases.create_converter(engine="libreoffice")


def test_convert_file_creates_parent_directory(tmp_path: Path, fake_converter: type) -> None:
    """Single-file conversion creates the destination directory first."""
    source = tmp_path / "a.md"
    source.write_text("hello")
    dest = tmp_path / "out" / "nested" / "a.docx"

    outcome = use_cases.convert_file(
        source_path=source, dest_path=dest, converter=fake_converter()
    )

    assert outcome.succeeded
    assert dest.read_text() == "converted:hello"


def test_convert_file_reports_directory_failure(tmp_path: Path, fake_converter: type) -> None:
    """Return a failed outcome when the destination directory is blocked."""
    source = tmp_path / "a.md"
    source.write_text("hello")
    (tmp_path / "out").write_text("file in the way")
    converter = fake_converter()

    outcome = use_cases.convert_file(
        source_path=source, dest_path=tmp_path / "out" / "a.docx", converter=converter
    )

    assert outcome.failure_kind is FailureKind.DIRECTORY
    assert converter.calls == []
