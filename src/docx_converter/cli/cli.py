#!/usr/bin/env python3
"""
docx_converter.cli.cli

Typer-based CLI for converting a tree of Markdown documents to Word.

Examples
--------
Convert the current directory into ./word:

    convert-to-docx convert

Convert ./docs into ./build/docx with four workers and a timeout:

    convert-to-docx convert docs build/docx --workers 4 --timeout 60

Pass extra pandoc arguments (use ``=`` so they are not read as options):

    convert-to-docx convert docs --pandoc-arg=--toc
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from docx_converter.application.results import ConversionOutcome, RunReport
from docx_converter.errors import DocxConverterError

app = typer.Typer(
    name="convert-to-docx",
    help="Convert a tree of Markdown documents to Word (.docx) with pandoc.",
    no_args_is_help=True,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ENGINE_MODULE_HELP = "Engine module import path or file path (repeatable)."


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly fatal error.

    Parameters
    ----------
    exc : Exception
        Exception raised before or during the batch.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _echo_outcome(outcome: ConversionOutcome) -> None:
    """Print one progress line per converted document."""
    item = outcome.item
    if outcome.succeeded:
        typer.secho(f"✓ Converted {item.source_path} -> {item.dest_path}", fg=typer.colors.GREEN)
        return
    kind = outcome.failure_kind.value if outcome.failure_kind else "unknown"
    typer.secho(
        f"✗ Failed {item.source_path} [{kind}]: {outcome.diagnostic}",
        fg=typer.colors.RED,
        err=True,
    )


def _echo_report(report: RunReport) -> None:
    """Print the final summary and every failure."""
    typer.echo("")
    typer.echo(
        f"Done: {report.total} total, {report.succeeded} succeeded, {report.failed} failed"
    )
    for failure in report.failures:
        typer.echo(f"  - {failure.source_path} [{failure.kind.value}]: {failure.diagnostic}")
    for error in report.discovery_errors:
        typer.echo(f"  ! skipped {error.path}: {error.diagnostic}")


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="DOCX_CONVERTER_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Initialize logging and shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    log_level : str, default="WARNING"
        Root logging level.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level '{log_level}'.")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_root: Path | None = typer.Argument(
        None, help="Directory scanned recursively (default: current directory)."
    ),
    output_root: Path | None = typer.Argument(
        None, help="Root of the mirrored output tree (default: <input_root>/word)."
    ),
    engine: str = typer.Option(
        "pandoc", "--engine", envvar="DOCX_CONVERTER_ENGINE", help="Conversion engine name."
    ),
    engine_module: list[str] | None = typer.Option(
        None, "--engine-module", help=ENGINE_MODULE_HELP
    ),
    pandoc_path: str = typer.Option(
        "pandoc",
        "--pandoc-path",
        envvar="DOCX_CONVERTER_PANDOC",
        help="pandoc executable name or path.",
    ),
    source_format: str = typer.Option("markdown", "--from", help="pandoc input format."),
    target_format: str = typer.Option("docx", "--to", help="pandoc output format."),
    source_ext: str = typer.Option(".md", "--source-ext", help="Source file extension (case-sensitive)."),
    target_ext: str = typer.Option(".docx", "--target-ext", help="Output file extension."),
    workers: int = typer.Option(
        1, "--workers", min=1, envvar="DOCX_CONVERTER_WORKERS", help="Concurrent conversions."
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        envvar="DOCX_CONVERTER_TIMEOUT",
        help="Per-document timeout in seconds.",
    ),
    exclude: list[str] | None = typer.Option(
        None, "--exclude", help="Glob matched against relative paths and names (repeatable)."
    ),
    skip_hidden: bool = typer.Option(
        False, "--skip-hidden", help="Skip dot-prefixed files and directories."
    ),
    readme_match: str = typer.Option(
        "filename",
        "--readme-match",
        help="Match the README skip rule on the full 'filename' or the 'stem' only.",
    ),
    exclude_nested_readmes: bool = typer.Option(
        False, "--exclude-nested-readmes", help="Skip README files at every depth."
    ),
    pandoc_arg: list[str] | None = typer.Option(
        None, "--pandoc-arg", help="Extra pandoc argument, e.g. --pandoc-arg=--toc (repeatable)."
    ),
) -> None:
    """Convert every Markdown document under INPUT_ROOT into a mirrored tree.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_root : Path | None
        Directory scanned recursively.
    output_root : Path | None
        Root of the mirrored output tree.
    workers : int, default=1
        Size of the bounded worker pool.
    timeout : float | None, default=None
        Per-document timeout; a hung conversion becomes a failure.

    Notes
    -----
    - Exits 0 when every document converted, 1 when any failed, 2 when the
      input root or configuration is unusable.
    - ``README.md`` directly under INPUT_ROOT is always skipped.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    if readme_match not in {"filename", "stem"}:
        raise typer.BadParameter("--readme-match must be 'filename' or 'stem'.")

    try:
        from docx_converter.api import convert_markdown_tree

        report = convert_markdown_tree(
            input_root=input_root,
            output_root=output_root,
            engine=engine,
            engine_modules=engine_module,
            pandoc_path=pandoc_path,
            source_format=source_format,
            target_format=target_format,
            source_extension=source_ext,
            target_extension=target_ext,
            workers=workers,
            timeout=timeout,
            exclude_patterns=exclude,
            skip_hidden=skip_hidden,
            readme_match="stem" if readme_match == "stem" else "filename",
            exclude_nested_readmes=exclude_nested_readmes,
            extra_args=pandoc_arg,
            progress=_echo_outcome,
        )
    except DocxConverterError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    _echo_report(report)
    if not report.ok:
        raise typer.Exit(code=1)


@app.command("engines")
def engines_cmd(
    pandoc_path: str = typer.Option(
        "pandoc", "--pandoc-path", envvar="DOCX_CONVERTER_PANDOC", help="pandoc executable name or path."
    ),
    engine_module: list[str] | None = typer.Option(
        None, "--engine-module", help=ENGINE_MODULE_HELP
    ),
) -> None:
    """List registered conversion engines and whether they can run here."""
    from docx_converter.api import build_engine_options
    from docx_converter.plugins.registry import create_default_registry

    try:
        registry = create_default_registry(extra_modules=engine_module)
    except DocxConverterError as exc:
        raise typer.BadParameter(str(exc)) from exc

    options = build_engine_options(pandoc_path=pandoc_path)
    for name in registry.names():
        plugin = registry.get(name)
        state = "available" if plugin.is_available(options) else "unavailable"
        typer.echo(f"{name}: {state} - {plugin.description}")


@app.command("doctor")
def doctor_cmd(
    pandoc_path: str = typer.Option(
        "pandoc", "--pandoc-path", envvar="DOCX_CONVERTER_PANDOC", help="pandoc executable name or path."
    ),
) -> None:
    """Print installed toolchain versions."""
    import importlib.metadata as metadata

    from docx_converter.adapters.converters import PandocConverter
    from docx_converter.api import build_engine_options

    typer.echo(f"Python: {sys.version.split()[0]}")

    pandoc_version = PandocConverter(build_engine_options(pandoc_path=pandoc_path)).version()
    typer.echo(f"pandoc: {pandoc_version or '<not installed>'}")

    for module in ("pypandoc", "typer", "pydantic"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        from docx_converter.plugins.registry import create_default_registry

        registry = create_default_registry()
        typer.echo(f"engines: {', '.join(registry.names())}")
    except DocxConverterError:
        typer.echo("engines: <unavailable>")


if __name__ == "__main__":
    app()
