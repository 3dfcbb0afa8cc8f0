#!/usr/bin/env python3
"""Build a small Markdown tree, convert it through the API, and check the report."""

from __future__ import annotations

from pathlib import Path

from docx_converter import convert_markdown_tree


def main() -> None:
    """Run the batch API with explicit pass/fail checks."""
    input_root = Path("outputs") / "docs"
    output_root = Path("outputs") / "word"
    (input_root / "guide").mkdir(parents=True, exist_ok=True)
    (input_root / "README.md").write_text("# Skipped at the root\n", encoding="utf-8")
    (input_root / "index.md").write_text("# Index\n\nHello *world*.\n", encoding="utf-8")
    (input_root / "guide" / "install.md").write_text("## Install\n\n1. one\n", encoding="utf-8")

    report = convert_markdown_tree(
        input_root,
        output_root,
        workers=2,
        timeout=120.0,
    )
    print(f"{report.succeeded}/{report.total} converted into {output_root}")
    for failure in report.failures:
        print(f"FAIL {failure.source_path} [{failure.kind.value}]: {failure.diagnostic}")

    if not report.ok:
        raise SystemExit("FAIL: some documents did not convert.")
    if (output_root / "README.docx").exists():
        raise SystemExit("FAIL: root README.md should have been skipped.")
    print("PASS: tree converted.")


if __name__ == "__main__":
    main()
