"""CLI entry point for gsh-script.

Invoked as::

    gsh-script [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m gsh.cli.main

Commands
--------
tokens      Print the token stream of a script
parse       Dump the parsed AST as canonical text, JSON or YAML
check       Report every lexical and syntactic diagnostic
fmt         Format a script to canonical style
grammar     Print the EBNF grammar reference
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from gsh.ast.nodes import Program
    from gsh.diagnostics import Diagnostic

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read a gsh source file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _print_diagnostics(diagnostics: list["Diagnostic"], path: str) -> None:
    table = Table(title=f"Diagnostics: {path}", show_lines=True)
    table.add_column("Kind", style="bold", min_width=6)
    table.add_column("Location", min_width=10)
    table.add_column("Message")
    for d in diagnostics:
        color = "magenta" if d.kind.name == "LEX" else "red"
        table.add_row(f"[{color}]{d.kind.name}[/{color}]", f"{d.line}:{d.column}", Text(d.message))
    err_console.print(table)


def _parse_or_exit(source: str, path: str) -> "Program":
    """Parse gsh source, printing diagnostics and exiting on failure."""
    from gsh.parser import ParseErrorCollection, parse

    try:
        return parse(source)
    except ParseErrorCollection as exc:
        err_console.print(f"[red]Parse errors[/red] in {path}:")
        for diagnostic in exc.diagnostics:
            err_console.print(f"  {diagnostic}", markup=False)
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="gsh-script")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Lexer, parser and formatter for the gsh agentic-shell scripting language."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from gsh import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]gsh-script[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# tokens command
# ---------------------------------------------------------------------------


@cli.command(name="tokens")
@click.argument("file", type=click.Path(exists=False))
def tokens_command(file: str) -> None:
    """Print the token stream of a gsh script.

    FILE is the path to the .gsh file to tokenize.
    """
    from gsh.lexer import Lexer

    source = _read_source(file)
    lexer = Lexer(source)
    tokens = lexer.tokenize()

    table = Table(title=f"Tokens: {file}")
    table.add_column("Location", min_width=8)
    table.add_column("Type", style="cyan")
    table.add_column("Literal")
    for tok in tokens:
        table.add_row(f"{tok.line}:{tok.column}", tok.type.name, Text(repr(tok.literal)))
    console.print(table)

    if lexer.sink.has_errors:
        _print_diagnostics(list(lexer.sink), file)
        sys.exit(1)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False))
def check_command(file: str) -> None:
    """Report every lexical and syntactic problem in a gsh script.

    FILE is the path to the .gsh file to check.
    """
    from gsh.parser import parse_program

    source = _read_source(file)
    program, diagnostics = parse_program(source)

    if not diagnostics:
        console.print(
            f"[green]OK[/green] {file}: {len(program.statements)} statement(s), no issues found"
        )
        return

    _print_diagnostics(diagnostics, file)
    err_console.print(f"\n[bold]Summary:[/bold] {len(diagnostics)} error(s)")
    sys.exit(1)


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False))
@click.option("--check", is_flag=True, default=False, help="Check if file is already formatted")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
def fmt_command(file: str, check: bool, in_place: bool) -> None:
    """Format a gsh script to canonical style.

    FILE is the path to the .gsh file to format.

    Without --check or --in-place, prints the formatted output to stdout.
    Comments are not preserved.
    """
    import gsh

    source = _read_source(file)
    program = _parse_or_exit(source, file)
    formatted = gsh.format(program)

    if check:
        if formatted == source:
            console.print(f"[green]OK[/green] {file} already formatted")
            return
        console.print(f"[yellow]NEEDS FORMATTING[/yellow] {file}")
        sys.exit(1)
    elif in_place:
        Path(file).write_text(formatted, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {file}")
    else:
        click.echo(formatted, nl=False)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"], case_sensitive=False),
    default="json",
    help="AST output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(file: str, output_format: str, output: str | None) -> None:
    """Parse a gsh script and dump the AST.

    FILE is the path to the .gsh file to parse.
    """
    from gsh.ast import AstSerializer

    source = _read_source(file)
    program = _parse_or_exit(source, file)

    serializer = AstSerializer()
    output_format = output_format.lower()
    if output_format == "json":
        text = serializer.to_json(program, indent=2)
    elif output_format == "yaml":
        text = serializer.to_yaml(program)
    else:
        text = str(program) + "\n"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]AST written to[/green] {output}")
    elif output_format == "text":
        click.echo(text, nl=False)
    else:
        console.print(Syntax(text, output_format, line_numbers=True))


# ---------------------------------------------------------------------------
# grammar command
# ---------------------------------------------------------------------------


@cli.command(name="grammar")
def grammar_command() -> None:
    """Print the EBNF grammar reference."""
    from gsh.grammar import FULL_GRAMMAR

    click.echo(FULL_GRAMMAR.strip())


if __name__ == "__main__":
    cli()
