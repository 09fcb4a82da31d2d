"""Main CLI entry point for deity.

Generates values from expressions on the command line.
"""

import asyncio
import json
import logging
import sys
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from deity import __version__
from deity.engine.driver import IterationDriver
from deity.expressions.parser import NUMBER_RANGE_PATTERN, parse
from deity.generators.faker_kinds import register_faker_kinds
from deity.generators.registry import get_global_generator_registry
from deity.options.base import Options
from deity.options.loader import load_options

console = Console()

# Arguments that builtin composite kinds parse as nested expressions
NESTED_ARGUMENTS = {
    "oneOf": 0,
    "array": 0,
    "repeat": 1,
}


@click.group()
@click.version_option(version=__version__, prog_name="deity")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """deity - Generate random values from compact expressions.

    Expressions look like int:1-10, 3*(char:A-F) or array:(int:1-5):(boolean).
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    register_faker_kinds()


@cli.command()
@click.argument("expressions", nargs=-1, required=True)
@click.option("--iterations", "-n", type=int, help="Number of values to generate per expression (default 10)")
@click.option("--letters", "-l", help="Alphabet for the string kind, a range (A-Z) or characters")
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--options", "-o", "options_path", type=click.Path(exists=True), help="YAML file with options")
@click.option("--json", "as_json", is_flag=True, help="Print JSON lines instead of a table")
@click.pass_context
def generate(
    ctx: click.Context,
    expressions: tuple[str, ...],
    iterations: int | None,
    letters: str | None,
    seed: int | None,
    options_path: str | None,
    as_json: bool,
) -> None:
    """Generate values from one or more expressions.

    Each iteration draws one value per expression.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        options = _build_options(options_path, iterations, letters, seed)

        driver = IterationDriver(list(expressions), lambda *values: list(values), options)
        rows = driver.run()
        if driver.is_asynchronous:
            rows = asyncio.run(rows)

        if as_json:
            for row in rows:
                click.echo(json.dumps(row if len(row) > 1 else row[0], default=str))
            return

        table = Table(title="Generated Values")
        table.add_column("#", justify="right", style="dim")
        for expression in expressions:
            table.add_column(escape(expression), style="cyan")

        for i, row in enumerate(rows, start=1):
            table.add_row(str(i), *(_format_value(value) for value in row))

        console.print(table)

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command("parse")
@click.argument("expression")
@click.pass_context
def parse_expression(ctx: click.Context, expression: str) -> None:
    """Show how an expression is parsed.

    Nested expressions of the builtin composite kinds are expanded.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        tree = Tree(f"[bold]{escape(expression)}[/bold]")
        _add_parse_tree(tree, expression)
        console.print(tree)

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
def list_kinds() -> None:
    """List available generator kinds."""
    registry = get_global_generator_registry()

    table = Table(title="Generator Kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Mode")
    table.add_column("Implementation")

    for generator_kind in registry:
        mode = "[yellow]async[/yellow]" if generator_kind.asynchronous else "sync"
        table.add_row(generator_kind.name, mode, getattr(generator_kind.factory, "__name__", "-"))

    console.print(table)


def _build_options(
    options_path: str | None,
    iterations: int | None,
    letters: str | None,
    seed: int | None,
) -> Options:
    """Merge an options file with command line overrides."""
    options = load_options(options_path) if options_path else Options(iterations=10)

    overrides: dict[str, Any] = {}
    if iterations is not None:
        overrides["iterations"] = iterations
    if letters is not None:
        overrides["letters"] = letters
    if seed is not None:
        overrides["seed"] = seed

    if not overrides:
        return options
    return Options(**{**options.model_dump(), **overrides})


def _add_parse_tree(tree: Tree, expression: str) -> None:
    """Add the parsed kind and arguments of an expression to a tree."""
    invocation = parse(expression)
    branch = tree.add(f"[cyan]{escape(invocation.kind)}[/cyan]")

    first_nested = NESTED_ARGUMENTS.get(invocation.kind)
    if invocation.kind == "string" and invocation.arguments:
        if not NUMBER_RANGE_PATTERN.match(invocation.arguments[0]):
            first_nested = 0

    for i, argument in enumerate(invocation.arguments):
        if first_nested is not None and i >= first_nested:
            _add_parse_tree(branch, argument)
        else:
            branch.add(f"[green]{escape(repr(argument))}[/green]")


def _format_value(value: Any) -> str:
    """Format a generated value for a table cell."""
    if isinstance(value, str):
        return escape(value)
    return escape(json.dumps(value, default=str))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
