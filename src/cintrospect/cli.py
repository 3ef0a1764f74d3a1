"""Shared CLI utilities for cintrospect tools.

Provides the common ``--config`` option, config loading, and standardised
output / error helpers so that every command reports errors and prints JSON
the same way.

Usage in a tool::

    import typer
    from cintrospect.cli import ConfigOption, get_config, error_exit, json_print

    app = typer.Typer()

    @app.command()
    def main(config_dir: str | None = ConfigOption) -> None:
        cfg = get_config(config_dir, json_mode=False)
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from cintrospect.config import ProjectConfig, load_config

# Re-usable Typer option for --config
ConfigOption: str | None = typer.Option(
    None,
    "--config",
    "-c",
    help="Directory containing cintrospect.toml (default: search upward from cwd).",
)


_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}", soft_wrap=True)
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def get_config(config_dir: str | None = None, *, json_mode: bool = False) -> ProjectConfig:
    """Load the project config, exiting with an error if it is invalid."""
    root = Path(config_dir) if config_dir else None
    if root is not None and not root.is_dir():
        error_exit(f"Config directory not found: {root}", json_mode=json_mode)
    try:
        return load_config(root)
    except ValueError as exc:
        error_exit(str(exc), json_mode=json_mode)
