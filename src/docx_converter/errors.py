"""Exception hierarchy for batch document conversion."""

from __future__ import annotations


class DocxConverterError(Exception):
    """Base error for the converter package.

    Attributes
    ----------
    exit_code : int
        Process exit code used by the CLI when the error is fatal.
    """

    exit_code: int = 1


class InputRootError(DocxConverterError):
    """Input root is missing, not a directory, or unreadable."""

    exit_code = 2


class ConfigurationError(DocxConverterError):
    """Batch configuration failed validation."""

    exit_code = 2


class EngineError(DocxConverterError):
    """Conversion engine could not be resolved or loaded."""

    exit_code = 2


class DiscoveryError(DocxConverterError):
    """A subtree could not be walked or a destination escaped the output root."""


class DirectoryCreationError(DocxConverterError):
    """Destination parent directory could not be created."""


class EngineInvocationError(DocxConverterError):
    """Conversion engine binary is missing or could not be started."""


class ConversionError(DocxConverterError):
    """Engine ran but reported a failure for the document."""


class ConversionTimeoutError(ConversionError):
    """Engine did not finish within the per-item timeout."""
