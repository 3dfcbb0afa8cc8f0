"""Engine adapters implementing the ``DocumentConverter`` port."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from docx_converter.application.options import EngineOptions
from docx_converter.application.results import ConversionOutcome, FailureKind, WorkItem
from docx_converter.errors import (
    ConversionError,
    ConversionTimeoutError,
    DocxConverterError,
    EngineInvocationError,
)

logger = logging.getLogger(__name__)

PANDOC_INSTALL_HINT = "Install it from https://pandoc.org/installing.html (macOS: brew install pandoc)."


def failure_kind_for(exc: DocxConverterError) -> FailureKind:
    """Map an adapter error onto the reported failure kind."""
    if isinstance(exc, EngineInvocationError):
        return FailureKind.ENVIRONMENT
    if isinstance(exc, ConversionTimeoutError):
        return FailureKind.TIMEOUT
    if isinstance(exc, ConversionError):
        return FailureKind.CONTENT
    return FailureKind.UNEXPECTED


class PandocConverter:
    """Convert documents by running the pandoc executable.

    Parameters
    ----------
    options : EngineOptions | None, optional
        Executable, formats, extra arguments and per-item timeout.
    """

    name = "pandoc"

    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options = options or EngineOptions()

    def resolve_executable(self) -> str:
        """Locate the pandoc binary.

        Raises
        ------
        EngineInvocationError
            If the executable cannot be found.
        """
        resolved = shutil.which(self.options.executable)
        if resolved is None:
            raise EngineInvocationError(
                f"pandoc executable '{self.options.executable}' not found. {PANDOC_INSTALL_HINT}"
            )
        return resolved

    def build_command(self, executable: str, source_path: Path, dest_path: Path) -> list[str]:
        """Build the pandoc argument vector for one document."""
        return [
            executable,
            str(source_path),
            "-f",
            self.options.source_format,
            "-t",
            self.options.target_format,
            "-o",
            str(dest_path),
            *self.options.extra_args,
        ]

    def convert(self, source_path: Path, dest_path: Path) -> ConversionOutcome:
        """Convert one document.

        Parameters
        ----------
        source_path : Path
            Source document.
        dest_path : Path
            Destination file; its parent must already exist.

        Returns
        -------
        ConversionOutcome
            Failed outcomes carry pandoc's stderr, or the exit status when
            stderr is empty. Successful outcomes keep any warnings.
        """
        item = WorkItem(source_path=source_path, dest_path=dest_path)
        try:
            warnings = self._run(source_path, dest_path)
        except DocxConverterError as exc:
            logger.debug("pandoc failed for %s: %s", source_path, exc)
            return ConversionOutcome.failure(item, str(exc), failure_kind_for(exc))
        return ConversionOutcome.success(item, diagnostic=warnings)

    def version(self) -> str | None:
        """Return pandoc's version line, or ``None`` when unavailable."""
        try:
            executable = self.resolve_executable()
            completed = subprocess.run(
                [executable, "--version"],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=10,
                check=False,
            )
        except (EngineInvocationError, OSError, subprocess.TimeoutExpired):
            return None
        if completed.returncode != 0 or not completed.stdout:
            return None
        return completed.stdout.splitlines()[0].strip()

    def _run(self, source_path: Path, dest_path: Path) -> str | None:
        executable = self.resolve_executable()
        command = self.build_command(executable, source_path, dest_path)
        timeout = self.options.timeout
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ConversionTimeoutError(f"pandoc timed out after {timeout:g}s") from exc
        except OSError as exc:
            raise EngineInvocationError(f"cannot run {executable}: {exc}") from exc

        stderr = (completed.stderr or "").strip()
        if completed.returncode != 0:
            raise ConversionError(stderr or f"pandoc exited with status {completed.returncode}")
        return stderr or None


class PypandocConverter:
    """Convert documents through the ``pypandoc`` library.

    Notes
    -----
    Requires the ``pypandoc`` extra. pypandoc offers no timeout, so
    ``EngineOptions.timeout`` is ignored here.
    """

    name = "pypandoc"

    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options = options or EngineOptions()

    def convert(self, source_path: Path, dest_path: Path) -> ConversionOutcome:
        """Convert one document, mapping pypandoc errors onto outcomes."""
        item = WorkItem(source_path=source_path, dest_path=dest_path)
        try:
            self._run(source_path, dest_path)
        except DocxConverterError as exc:
            logger.debug("pypandoc failed for %s: %s", source_path, exc)
            return ConversionOutcome.failure(item, str(exc), failure_kind_for(exc))
        return ConversionOutcome.success(item)

    def _run(self, source_path: Path, dest_path: Path) -> None:
        try:
            import pypandoc
        except ImportError as exc:
            raise EngineInvocationError(
                "pypandoc is not installed. Install extra: .[pypandoc]"
            ) from exc

        try:
            pypandoc.convert_file(
                str(source_path),
                self.options.target_format,
                format=self.options.source_format,
                outputfile=str(dest_path),
                extra_args=list(self.options.extra_args),
            )
        except OSError as exc:
            # pypandoc raises OSError when it cannot locate a pandoc binary.
            raise EngineInvocationError(f"{exc} {PANDOC_INSTALL_HINT}") from exc
        except RuntimeError as exc:
            raise ConversionError(str(exc).strip() or "pypandoc conversion failed") from exc
