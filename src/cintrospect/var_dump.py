"""var_dump.py - Generate C printf dump functions for parsed structs.

For every struct found in the input file a function is emitted that prints
each field with a printf conversion chosen from its declared type::

    void var_dump_Point (struct Point * var) {
      printf ("struct Point = {\\n");
      printf ("  x = %d\\n",var->x);
      printf ("}\\n");
    }

``int`` maps to ``%d``, ``long`` to ``%ld`` and every other type, pointers
included, to ``%x``.  The mapping, the fallback and the function prefix can be
changed in ``cintrospect.toml``.
"""

from collections.abc import Iterable
from pathlib import Path

import typer

from cintrospect.cli import ConfigOption, error_exit, get_config, json_print
from cintrospect.config import ProjectConfig
from cintrospect.diagnostics import ParseReport
from cintrospect.struct_parser import parse_c_file
from cintrospect.structures import CStruct
from cintrospect.utils import atomic_write_text

app = typer.Typer(
    help="Generate C var-dump functions for the structs declared in a file.",
    rich_markup_mode="rich",
)


def format_specifier(typename: str, cfg: ProjectConfig | None = None) -> str:
    """Return the printf conversion used to print a field of type *typename*."""
    if cfg is not None:
        return cfg.format_for(typename)
    if typename == "int":
        return "%d"
    if typename == "long":
        return "%ld"
    return "%x"


def render_var_dump(struct: CStruct, cfg: ProjectConfig | None = None) -> str:
    """Return the C source of the dump function for *struct*."""
    prefix = cfg.dump_prefix if cfg is not None else "var_dump_"
    name = struct.name
    lines = [
        f"void {prefix}{name} (struct {name} * var) {{",
        f'  printf ("struct {name} = {{\\n");',
    ]
    for fld in struct.fields:
        spec = format_specifier(fld.typename, cfg)
        lines.append(f'  printf ("  {fld.name} = {spec}\\n",var->{fld.name});')
    lines.append('  printf ("}\\n");')
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_structs(
    structs: Iterable[CStruct],
    cfg: ProjectConfig | None = None,
    *,
    include_stdio: bool = False,
) -> str:
    """Return the dump functions for all *structs*, in order."""
    header = "#include <stdio.h>\n\n" if include_stdio else ""
    return header + "".join(render_var_dump(s, cfg) for s in structs)


@app.command()
def main(
    source: str | None = typer.Argument(None, help="C/C++ source or header file"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Write generated code to this file instead of stdout"
    ),
    include_stdio: bool = typer.Option(
        False, "--include-stdio", help="Prefix the output with #include <stdio.h>"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with an error if anything was skipped"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
    config_dir: str | None = ConfigOption,
) -> None:
    """Generate var-dump functions for every struct in SOURCE."""
    if source is None:
        error_exit("Source file argument is required", json_mode=json_output)
    if json_output and output is not None:
        error_exit("--json and --output cannot be combined", json_mode=True)

    cfg = get_config(config_dir, json_mode=json_output)
    report = ParseReport()
    with parse_c_file(source, encoding=cfg.encoding, report=report) as it:
        structs = list(it)

    if strict and not report.passed:
        if not json_output:
            report.display()
        error_exit(
            f"{len(report.errors)} error(s), {len(report.warnings)} warning(s) in {source}",
            json_mode=json_output,
        )

    code = render_structs(structs, cfg, include_stdio=include_stdio or cfg.include_stdio)

    if json_output:
        json_print(
            {
                "file": source,
                "structs": [s.to_dict() for s in structs],
                "code": code,
                "diagnostics": report.to_dict(),
            }
        )
        return

    if output is None:
        typer.echo(code, nl=False)
        return

    out_path = Path(output)
    try:
        atomic_write_text(out_path, code)
    except OSError as exc:
        error_exit(f"Failed to write {out_path}: {exc}")
    typer.echo(f"Wrote {len(structs)} dump functions to {out_path}", err=True)


def main_entry() -> None:
    """Package entry point for ``cintrospect-dump``."""
    app()
