"""Tests for the shared CLI helpers in cintrospect.cli."""

import json
from pathlib import Path

import pytest
import typer

from cintrospect.cli import error_exit, get_config, json_print
from cintrospect.config import CONFIG_NAME

# ---------------------------------------------------------------------------
# error_exit()
# ---------------------------------------------------------------------------


class TestErrorExit:
    def test_plain_stderr_and_exit(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            error_exit("something broke")
        assert exc_info.value.exit_code == 1
        captured = capsys.readouterr()
        assert "something broke" in captured.err
        assert captured.out == ""

    def test_custom_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            error_exit("fatal", code=2)
        assert exc_info.value.exit_code == 2

    def test_markup_in_message_is_literal(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit):
            error_exit("bad [dump] section")
        assert "[dump]" in capsys.readouterr().err

    def test_json_mode_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit):
            error_exit("bad input", json_mode=True)
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"error": "bad input"}
        assert captured.err == ""


# ---------------------------------------------------------------------------
# json_print()
# ---------------------------------------------------------------------------


class TestJsonPrint:
    def test_dict_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        json_print({"name": "Point", "fields": []})
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"name": "Point", "fields": []}
        assert captured.err == ""

    def test_list_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        json_print([{"name": "A"}, {"name": "B"}])
        data = json.loads(capsys.readouterr().out)
        assert [d["name"] for d in data] == ["A", "B"]


# ---------------------------------------------------------------------------
# get_config()
# ---------------------------------------------------------------------------


class TestGetConfig:
    def test_explicit_dir(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_NAME).write_text("[dump]\nprefix = 'x_'\n")
        assert get_config(str(tmp_path)).dump_prefix == "x_"

    def test_missing_dir_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit):
            get_config(str(tmp_path / "nope"))
        assert "not found" in capsys.readouterr().err

    def test_invalid_config_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / CONFIG_NAME).write_text("[dump\n")
        with pytest.raises(typer.Exit) as exc_info:
            get_config(str(tmp_path), json_mode=True)
        assert exc_info.value.exit_code == 1
        assert "error" in json.loads(capsys.readouterr().out)
