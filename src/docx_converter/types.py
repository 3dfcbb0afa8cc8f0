"""Shared type aliases for converter modules."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Literal, TypeAlias

ReadmeMatch: TypeAlias = Literal["filename", "stem"]

# Receives a path relative to the input root; ``True`` excludes the file.
ExclusionPredicate: TypeAlias = Callable[[Path], bool]
