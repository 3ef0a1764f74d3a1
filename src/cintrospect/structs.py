"""structs.py - List the structs declared in C/C++ files.

Prints one table per file (struct name, field count, fields) or, with
``--json``, a list of ``{"file", "structs", "diagnostics"}`` objects.
Constructs the parser had to skip are shown as warnings unless ``--quiet``.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cintrospect.cli import ConfigOption, error_exit, get_config, json_print
from cintrospect.diagnostics import ParseReport
from cintrospect.struct_parser import parse_c_file
from cintrospect.structures import CStruct

app = typer.Typer(
    help="List struct declarations found in C/C++ files.",
    rich_markup_mode="rich",
)

out_console = Console()


def _fields_text(struct: CStruct) -> str:
    return ", ".join(f"{f.typename} {f.name}" for f in struct.fields)


def _print_table(path: Path, structs: list[CStruct]) -> None:
    tbl = Table(title=str(path), show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Struct", style="bold")
    tbl.add_column("Fields", justify="right")
    tbl.add_column("Members", style="dim")
    for s in structs:
        tbl.add_row(s.name, str(len(s.fields)), _fields_text(s))
    out_console.print(tbl)


@app.command()
def main(
    files: list[Path] = typer.Argument(..., help="C/C++ source or header files"),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with an error if anything was skipped"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors, not warnings"),
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
    config_dir: str | None = ConfigOption,
) -> None:
    """List the structs declared in FILES."""
    cfg = get_config(config_dir, json_mode=json_output)

    results: list[tuple[Path, list[CStruct], ParseReport]] = []
    for path in files:
        report = ParseReport(filepath=path)
        with parse_c_file(path, encoding=cfg.encoding, report=report) as it:
            results.append((path, list(it), report))

    if json_output:
        json_print(
            [
                {
                    "file": str(path),
                    "structs": [s.to_dict() for s in structs],
                    "diagnostics": report.to_dict(),
                }
                for path, structs, report in results
            ]
        )
    else:
        for path, structs, report in results:
            if structs:
                _print_table(path, structs)
            else:
                typer.echo(f"{path}: no structs found", err=True)
            report.display(quiet=quiet)

    if strict:
        failed = [str(path) for path, _, report in results if not report.passed]
        if failed and json_output:
            # diagnostics are already part of the JSON document
            raise typer.Exit(code=1)
        if failed:
            error_exit(f"Diagnostics reported for {len(failed)} file(s): {', '.join(failed)}")
