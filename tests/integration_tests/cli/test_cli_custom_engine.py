"""CLI integration tests for custom engine modules.

Notes
-----
Exercises the engine registration hook used by the CLI with the copy
engine shipped under ``examples/``.

"""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from docx_converter.cli import cli as cli_module

runner = CliRunner()

ENGINE_MODULE = Path(__file__).resolve().parents[3] / "examples" / "plain_copy_engine.py"


def _tree(root: Path) -> Path:
    files = {
        "README.md": "# project readme",
        "index.md": "# index",
        "guide/install.md": "# install",
        "guide/README.md": "# guide readme",
        "guide/deep/notes.md": "# notes",
        "assets/logo.png": "png",
        "drafts/wip.md": "# wip",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def test_cli_custom_engine_mirrors_tree(tmp_path: Path) -> None:
    """Convert a realistic tree end to end through a file-loaded engine."""
    root = _tree(tmp_path / "docs")
    out = tmp_path / "out"

    result = runner.invoke(
        cli_module.app,
        [
            "convert",
            str(root),
            str(out),
            "--engine",
            "copy",
            "--engine-module",
            str(ENGINE_MODULE),
            "--exclude",
            "drafts/*",
            "--workers",
            "3",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Done: 4 total, 4 succeeded, 0 failed" in result.output
    produced = sorted(p.relative_to(out).as_posix() for p in out.rglob("*.docx"))
    assert produced == [
        "guide/README.docx",
        "guide/deep/notes.docx",
        "guide/install.docx",
        "index.docx",
    ]
    assert (out / "guide" / "install.docx").read_text(encoding="utf-8") == "# install"
    assert not (out / "README.docx").exists()
    assert not (out / "assets").exists()


def test_cli_custom_engine_default_output_rerun(tmp_path: Path, monkeypatch) -> None:
    """Rerunning into the default ./word tree reports the same totals."""
    root = _tree(tmp_path / "docs")
    monkeypatch.chdir(root)
    args = [
        "convert",
        "--engine",
        "copy",
        "--engine-module",
        str(ENGINE_MODULE),
        "--target-ext",
        ".md",
    ]

    first = runner.invoke(cli_module.app, args)
    second = runner.invoke(cli_module.app, args)

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "Done: 5 total, 5 succeeded, 0 failed" in first.output
    assert "Done: 5 total, 5 succeeded, 0 failed" in second.output
    assert (root / "word" / "guide" / "deep" / "notes.md").exists()


def test_cli_engines_lists_custom_engine() -> None:
    """List engines loaded from an extra module."""
    result = runner.invoke(
        cli_module.app, ["engines", "--engine-module", str(ENGINE_MODULE)]
    )

    assert result.exit_code == 0
    assert "copy: available - copy sources verbatim" in result.output
