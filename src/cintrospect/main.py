"""main.py – Umbrella CLI entry point for cintrospect.

Registers the subcommand modules as flat ``app.command()`` entries, so each
tool module stays runnable on its own while sharing one ``cintrospect``
executable.
"""

import typer

from cintrospect import structs, var_dump

app = typer.Typer(
    help="Extract struct layouts from C/C++ sources and generate dump code.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  cintrospect structs include/*.h      List the structs a header declares
  cintrospect dump types.h -o dump.c   Generate var_dump_<Name>() functions

[dim]Settings are read from cintrospect.toml when one is found in the current
directory or a parent.  Run 'cintrospect <cmd> --help' for details.[/dim]""",
)

app.command(name="structs", help="List struct declarations found in C/C++ files.")(structs.main)
app.command(name="dump", help="Generate C var-dump functions for parsed structs.")(var_dump.main)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
