#!/usr/bin/env python3
"""Example engine plugin that copies sources verbatim instead of converting.

Useful for dry runs of a large tree: the mirrored layout, skip rules and
report are produced without invoking pandoc.

    convert-to-docx convert docs out --engine copy \
        --engine-module examples/plain_copy_engine.py --target-ext .txt
"""

from __future__ import annotations

import shutil
from pathlib import Path

from docx_converter.application.options import EngineOptions
from docx_converter.application.results import ConversionOutcome, FailureKind, WorkItem


class PlainCopyConverter:
    """Copy each source file to its destination."""

    name = "copy"

    def convert(self, source_path: Path, dest_path: Path) -> ConversionOutcome:
        item = WorkItem(source_path=source_path, dest_path=dest_path)
        try:
            shutil.copyfile(source_path, dest_path)
        except OSError as exc:
            return ConversionOutcome.failure(item, f"copy failed: {exc}", FailureKind.CONTENT)
        return ConversionOutcome.success(item)


class PlainCopyEnginePlugin:
    """Register the copy engine."""

    name = "copy"
    description = "copy sources verbatim (dry run, no pandoc)"

    def is_available(self, options: EngineOptions) -> bool:
        del options
        return True

    def create(self, options: EngineOptions) -> PlainCopyConverter:
        del options
        return PlainCopyConverter()


ENGINE = PlainCopyEnginePlugin()
