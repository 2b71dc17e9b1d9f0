"""Tests for the watchbuild command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from watchbuild.cli.app import app

runner = CliRunner()

_PLUGINS = '''
from watchbuild.core.errors import BuildError
from watchbuild.core.ports.plugin import CallingConvention


class ShoutPlugin:
    def compile(self, file):
        return file.data.upper()


class SuffixPlugin:
    calling_convention = CallingConvention.CALLBACK

    def minify(self, data, path, done):
        done(None, data.strip() + ";")


class BrokenPlugin:
    def compile(self, file):
        raise BuildError("Compiling", "unexpected end of input")
'''


@pytest.fixture
def plugins_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "sample_plugins.py").write_text(_PLUGINS, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return "sample_plugins"


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.js"
    path.write_text("let x = 1\n", encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "args",
    [[], ["summarize"], ["invoke"]],
    ids=["root", "summarize", "invoke"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestSummarize:
    def test_prints_summary_line(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "pass.json"
        snapshot.write_text(
            json.dumps(
                {
                    "start_time": 1000,
                    "assets": [{"path": "assets/img.png", "copy_time": 1001}],
                    "generated_files": [
                        {
                            "path": "public/app.js",
                            "source_files": [
                                {"path": "app/a.js", "compilation_time": 1002},
                                {"path": "app/b.js", "compilation_time": 1003},
                                {"path": "app/c.js", "compilation_time": 10},
                            ],
                        }
                    ],
                    "disposed": {"generated": [], "source_paths": []},
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["summarize", str(snapshot), "--now", "1250"])

        assert result.exit_code == 0
        assert result.output.strip() == "compiled 2 files and 1 cached into app.js, copied img.png in 250 ms"

    def test_missing_snapshot(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["summarize", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Snapshot not found" in result.output

    def test_invalid_snapshot(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "pass.json"
        snapshot.write_text('{"assets": []}', encoding="utf-8")

        result = runner.invoke(app, ["summarize", str(snapshot)])

        assert result.exit_code == 1
        assert "Invalid snapshot" in result.output


class TestInvoke:
    def test_direct_plugin(self, plugins_module: str, source_file: Path) -> None:
        result = runner.invoke(app, ["invoke", f"{plugins_module}:ShoutPlugin", str(source_file)])
        assert result.exit_code == 0
        assert "LET X = 1" in result.output

    def test_callback_plugin_with_method(self, plugins_module: str, source_file: Path) -> None:
        result = runner.invoke(
            app, ["invoke", f"{plugins_module}:SuffixPlugin", str(source_file), "--method", "minify"]
        )
        assert result.exit_code == 0
        assert "let x = 1;" in result.output

    def test_plugin_failure_is_reported(self, plugins_module: str, source_file: Path) -> None:
        result = runner.invoke(app, ["invoke", f"{plugins_module}:BrokenPlugin", str(source_file)])
        assert result.exit_code == 1
        output = " ".join(result.output.split())
        assert "Compiling of" in output
        assert "failed. unexpected end of input" in output

    def test_rejects_malformed_plugin_spec(self, source_file: Path) -> None:
        result = runner.invoke(app, ["invoke", "no_colon_here", str(source_file)])
        assert result.exit_code != 0

    def test_rejects_unknown_class(self, plugins_module: str, source_file: Path) -> None:
        result = runner.invoke(app, ["invoke", f"{plugins_module}:Missing", str(source_file)])
        assert result.exit_code != 0

    def test_rejects_unknown_hook(self, plugins_module: str, source_file: Path) -> None:
        result = runner.invoke(
            app, ["invoke", f"{plugins_module}:ShoutPlugin", str(source_file), "--method", "lint"]
        )
        assert result.exit_code != 0

    def test_missing_source_file(self, plugins_module: str, tmp_path: Path) -> None:
        result = runner.invoke(app, ["invoke", f"{plugins_module}:ShoutPlugin", str(tmp_path / "nope.js")])
        assert result.exit_code == 1
        assert "File not found" in result.output
