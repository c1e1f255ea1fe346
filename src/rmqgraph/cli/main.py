"""Main CLI entry point for rmqgraph."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rmqgraph import __version__
from rmqgraph.core.config import DEFAULT_FORMAT, RenderConfig
from rmqgraph.core.errors import RmqGraphError
from rmqgraph.core.schema import load_definitions
from rmqgraph.generators.rendering import render
from rmqgraph.pipeline import GraphBuild, build_graph

# The artifact owns stdout; everything else goes to stderr
console = Console(stderr=True)


def print_summary(build: GraphBuild) -> None:
    table = Table(title="Topology Summary")
    table.add_column("VHost", style="cyan")
    table.add_column("Exchanges", justify="right")
    table.add_column("Queues", justify="right")
    table.add_column("Bindings", justify="right")
    table.add_column("DLX", justify="right", style="red")

    for row in build.summary():
        table.add_row(
            escape(row.vhost),
            str(row.exchanges),
            str(row.queues),
            str(row.bindings),
            str(row.dead_letter_bindings),
        )

    console.print(table)


def write_output(data: bytes, output: Path | None) -> None:
    if output is None:
        click.echo(data, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"[green]Generated:[/green] {output}")


@click.command()
@click.version_option(version=__version__, prog_name="rmqgraph")
@click.option(
    "--format",
    "-f",
    "output_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Output format: dot, mermaid, or any Graphviz format (png, svg, pdf, ...). Case-insensitive.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file. STDOUT if not given.",
)
@click.option(
    "--order-first",
    metavar="NAMES",
    help="Comma-separated queue/exchange names to render first, in priority order.",
)
@click.option(
    "--order-last",
    metavar="NAMES",
    help="Comma-separated queue/exchange names to render last, in the given order.",
)
@click.option("-v", "--verbose", is_flag=True, help="Print a per-vhost summary to stderr")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
def cli(
    output_format: str,
    output: Path | None,
    order_first: str | None,
    order_last: str | None,
    verbose: bool,
    file: Path,
) -> None:
    """
    Visualize a RabbitMQ definitions export as a graph.

    FILE is the JSON export (rabbitmqctl export_definitions or the
    management UI). Each vhost becomes a cluster; dead-letter routing is
    drawn as red edges from queues to their dead-letter exchange.

    Depending on the schema complexity, the --order-first/--order-last
    effect may be limited.

    Examples:

        # DOT to stdout
        rmqgraph definitions.json

        # SVG with the entry exchange leftmost
        rmqgraph -f svg -o topology.svg --order-first orders definitions.json
    """
    config = RenderConfig.from_options(
        output_format=output_format,
        output=output,
        order_first=order_first,
        order_last=order_last,
    )

    try:
        definitions = load_definitions(file)
        build = build_graph(definitions, config)
        for message in build.diagnostics:
            console.print(f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False)
        data = render(build.document, config.output_format)
    except RmqGraphError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise SystemExit(1)

    if verbose:
        print_summary(build)

    write_output(data, config.output)


if __name__ == "__main__":
    cli()
