"""Tests for the cintrospect structs command."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cintrospect.structs import app

runner = CliRunner()


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestStructsCommand:
    def test_table(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        src = _write(tmp_path / "a.h", "struct Point { int x; int y; };\n")
        result = runner.invoke(app, [str(src)])
        assert result.exit_code == 0
        assert "Point" in result.stdout
        assert "int x, int y" in result.stdout

    def test_json_multiple_files(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        a = _write(tmp_path / "a.h", "struct A { int a; };\n")
        b = _write(tmp_path / "b.h", "typedef struct _B { long b; char *s; } B;\n")
        result = runner.invoke(app, [str(a), str(b), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [d["file"] for d in data] == [str(a), str(b)]
        assert data[0]["structs"][0]["name"] == "A"
        assert data[1]["structs"][0] == {
            "name": "B",
            "fields": [
                {"typename": "long", "name": "b"},
                {"typename": "char*", "name": "s"},
            ],
        }

    def test_no_structs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        src = _write(tmp_path / "f.c", "int f(void) { return 0; }\n")
        result = runner.invoke(app, [str(src)])
        assert result.exit_code == 0
        assert "no structs found" in result.output

    def test_warnings_shown_unless_quiet(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        src = _write(tmp_path / "bad.h", "struct Broken { int ; };\nstruct Ok { int z; };\n")
        loud = runner.invoke(app, [str(src)])
        assert loud.exit_code == 0
        assert "W001" in loud.output
        quiet = runner.invoke(app, [str(src), "--quiet"])
        assert quiet.exit_code == 0
        assert "W001" not in quiet.output
        assert "Ok" in quiet.output

    def test_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [str(tmp_path / "missing.h")])
        assert result.exit_code == 0
        assert "couldn't open" in result.output

    def test_strict(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        good = _write(tmp_path / "good.h", "struct A { int a; };\n")
        bad = _write(tmp_path / "bad.h", "struct Broken { int ; };\n")
        assert runner.invoke(app, [str(good), "--strict"]).exit_code == 0
        result = runner.invoke(app, [str(good), str(bad), "--strict"])
        assert result.exit_code == 1
        assert "bad.h" in result.output

    def test_strict_json(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        bad = _write(tmp_path / "bad.h", "typedef int myint;\n")
        result = runner.invoke(app, [str(bad), "--strict", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data[0]["diagnostics"]["warnings"][0]["code"] == "W002"

    def test_missing_file_reported_once(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [str(tmp_path / "nope.h")])
        assert result.exit_code == 0
        assert result.output.count("couldn't open") == 1

    def test_unknown_encoding_in_config(self, tmp_path: Path) -> None:
        (tmp_path / "cintrospect.toml").write_text('[parser]\nencoding = "bogus"\n')
        src = _write(tmp_path / "a.h", "struct A { int a; };\n")
        result = runner.invoke(app, [str(src), "--config", str(tmp_path)])
        assert result.exit_code == 1
        assert "unknown encoding" in result.output
