"""diagnostics.py – Optional diagnostic channel for struct parsing.

The parser is lenient: malformed constructs are skipped and an unreadable file
yields zero structs.  Attach a :class:`ParseReport` to see what was skipped
without changing which structs are produced.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

# Diagnostic codes
SOURCE_UNAVAILABLE = "E001"
MALFORMED_STRUCT = "W001"
MALFORMED_TYPEDEF = "W002"

err_console = Console(stderr=True)


@dataclass
class ParseReport:
    """Errors and warnings accumulated while parsing one source."""

    filepath: Path | None = None
    errors: list[tuple[int, str, str]] = field(default_factory=list)
    warnings: list[tuple[int, str, str]] = field(default_factory=list)

    def error(self, line: int, code: str, msg: str) -> None:
        """Record an error diagnostic at *line*."""
        self.errors.append((line, code, msg))

    def warning(self, line: int, code: str, msg: str) -> None:
        """Record a warning diagnostic at *line*."""
        self.warnings.append((line, code, msg))

    @property
    def passed(self) -> bool:
        """True if nothing at all was recorded."""
        return not self.errors and not self.warnings

    def display(self, quiet: bool = False) -> None:
        """Print errors (and optionally warnings) to stderr.

        Open failures are skipped; :func:`~cintrospect.struct_parser.parse_c_file`
        has already printed them.
        """
        rel = self.filepath.name if self.filepath is not None else "<text>"
        for line, code, msg in self.errors:
            if code == SOURCE_UNAVAILABLE:
                continue
            err_console.print(f"  [bold]{rel}[/bold]:{line}: [red]{code}[/red]: {escape(msg)}")
        if not quiet:
            for line, code, msg in self.warnings:
                err_console.print(f"  [bold]{rel}[/bold]:{line}: [yellow]{code}[/yellow]: {escape(msg)}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "file": str(self.filepath) if self.filepath is not None else None,
            "errors": [{"line": ln, "code": c, "message": m} for ln, c, m in self.errors],
            "warnings": [{"line": ln, "code": c, "message": m} for ln, c, m in self.warnings],
            "passed": self.passed,
        }
