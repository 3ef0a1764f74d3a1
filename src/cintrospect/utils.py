"""Shared utilities for cintrospect."""

import contextlib
import os
import tempfile
from pathlib import Path


def atomic_write_text(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """Write *text* to *filepath* so readers never see a half-written file.

    Missing parent directories are created.  The text goes to a temporary
    file in the same directory which then replaces *filepath*.
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{filepath.name}.", suffix=".tmp", dir=filepath.parent
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as fh:
            fh.write(text)
        os.replace(tmp_name, filepath)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
