"""Shared pytest configuration, marker assignment, and test doubles."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from docx_converter.application.results import ConversionOutcome, FailureKind, WorkItem


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class FakeConverter:
    """In-process converter that writes a marker file instead of a real docx."""

    name = "fake"

    def __init__(
        self,
        fail_on: Callable[[Path], bool] | None = None,
        diagnostic: str = "pandoc: could not parse document",
        kind: FailureKind = FailureKind.CONTENT,
    ) -> None:
        self.fail_on = fail_on
        self.diagnostic = diagnostic
        self.kind = kind
        self.calls: list[tuple[Path, Path]] = []
        self._lock = threading.Lock()

    def convert(self, source_path: Path, dest_path: Path) -> ConversionOutcome:
        with self._lock:
            self.calls.append((source_path, dest_path))
        item = WorkItem(source_path=source_path, dest_path=dest_path)
        if self.fail_on is not None and self.fail_on(source_path):
            return ConversionOutcome.failure(item, self.diagnostic, self.kind)
        dest_path.write_text(f"converted:{source_path.read_text()}", encoding="utf-8")
        return ConversionOutcome.success(item)


@pytest.fixture
def fake_converter() -> type[FakeConverter]:
    """Expose the fake converter class to tests."""
    return FakeConverter


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
    """Build a source tree from ``{relative_path: content}`` under ``tmp_path/src``."""

    def _make(files: Mapping[str, str]) -> Path:
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make
