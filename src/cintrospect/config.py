"""Project configuration loader for cintrospect.

Reads an optional ``cintrospect.toml`` from the project root and exposes its
settings as simple attributes.  Without a config file every tool runs on the
built-in defaults.

Example ``cintrospect.toml``::

    [parser]
    encoding = "latin-1"

    [dump]
    prefix = "dump_"
    fallback = "%p"
    include_stdio = true

    [dump.formats]
    short = "%hd"
    "unsigned" = "%u"

Usage in a tool::

    from cintrospect.config import load_config
    cfg = load_config()
    cfg.format_for("long")      # "%ld"
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import,no-redef]

CONFIG_NAME = "cintrospect.toml"

DEFAULT_FORMATS: Dict[str, str] = {
    "int": "%d",
    "long": "%ld",
}


@dataclass
class ProjectConfig:
    """Parsed project configuration."""

    # Directory the config was loaded from (cwd when running on defaults)
    root: Path

    # --- [parser] ---
    encoding: str = "utf-8"

    # --- [dump] ---
    dump_prefix: str = "var_dump_"
    fallback_format: str = "%x"
    include_stdio: bool = False
    formats: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FORMATS))

    def format_for(self, typename: str) -> str:
        """Return the printf conversion for a field of type *typename*."""
        return self.formats.get(typename, self.fallback_format)


def _find_root(start: Optional[Path] = None) -> Path:
    """Walk up from *start* (or cwd) to find cintrospect.toml.

    Raises ``FileNotFoundError`` when no parent directory contains one.
    """
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while True:
        if (candidate / CONFIG_NAME).exists():
            return candidate
        if candidate == candidate.parent:
            break
        candidate = candidate.parent
    raise FileNotFoundError(f"Could not find {CONFIG_NAME} in any parent of the current directory.")


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise ValueError(f"[{name}] in {CONFIG_NAME} must be a table")
    return value


def _typed(section: Dict[str, Any], key: str, kind: type, default: Any, where: str) -> Any:
    value = section.get(key, default)
    if not isinstance(value, kind):
        raise ValueError(f"{where}.{key} must be of type {kind.__name__}, got {value!r}")
    return value


def load_config(root: Optional[Path] = None) -> ProjectConfig:
    """Load cintrospect.toml.

    Args:
        root: Directory holding the config.  Auto-detected if ``None``; when
              nothing is found the defaults are returned.

    Raises:
        ValueError: the file is not valid TOML or a setting has the wrong type.
    """
    try:
        root = _find_root(root)
    except FileNotFoundError:
        return ProjectConfig(root=Path.cwd())

    toml_path = root / CONFIG_NAME
    if not toml_path.exists():
        return ProjectConfig(root=root)

    try:
        with open(toml_path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid {toml_path}: {exc}") from exc

    parser = _section(raw, "parser")
    dump = _section(raw, "dump")

    encoding = _typed(parser, "encoding", str, "utf-8", "parser")
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ValueError(f"parser.encoding: unknown encoding {encoding!r}") from exc

    formats = dict(DEFAULT_FORMATS)
    extra = dump.get("formats", {})
    if not isinstance(extra, dict):
        raise ValueError(f"[dump.formats] in {CONFIG_NAME} must be a table")
    for typename, spec in extra.items():
        if not isinstance(spec, str):
            raise ValueError(f"dump.formats.{typename} must be a string, got {spec!r}")
        formats[typename] = spec

    return ProjectConfig(
        root=root,
        encoding=encoding,
        dump_prefix=_typed(dump, "prefix", str, "var_dump_", "dump"),
        fallback_format=_typed(dump, "fallback", str, "%x", "dump"),
        include_stdio=_typed(dump, "include_stdio", bool, False, "dump"),
        formats=formats,
    )
