"""Tests for cintrospect.utils."""

import os
from pathlib import Path

import pytest

from cintrospect.utils import atomic_write_text


def test_atomic_write_text_success(tmp_path: Path) -> None:
    f = tmp_path / "dump.c"
    atomic_write_text(f, "void f(void) {}\n")
    assert f.read_text() == "void f(void) {}\n"
    assert [p.name for p in tmp_path.iterdir()] == ["dump.c"]


def test_atomic_write_text_creates_parents(tmp_path: Path) -> None:
    f = tmp_path / "gen" / "sub" / "dump.c"
    atomic_write_text(f, "x")
    assert f.read_text() == "x"


def test_atomic_write_text_overwrite(tmp_path: Path) -> None:
    f = tmp_path / "dump.c"
    f.write_text("old")
    atomic_write_text(f, "new")
    assert f.read_text() == "new"


def test_atomic_write_text_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    f = tmp_path / "dump.c"

    def mock_replace(*args, **kwargs):
        raise OSError("Simulated crash")

    monkeypatch.setattr(os, "replace", mock_replace)

    with pytest.raises(OSError, match="Simulated crash"):
        atomic_write_text(f, "bad")

    assert not f.exists()
    assert list(tmp_path.iterdir()) == []
