"""
Halting analysis CLI main entry point.

The main Typer application that provides all CLI commands.
"""

import logging

import typer

from halting.cli.output import Formatter, OutputFormat
from halting.config.settings import get_settings

# Create main app
app = typer.Typer(
    name="halting",
    help="Quorum network halting analysis",
    no_args_is_help=True,
)

from halting.cli.commands import analyze, graph

app.command("analyze")(analyze.analyze)
app.command("graph")(graph.graph)


# Global options
@app.callback()
def main(
    ctx: typer.Context,
    output: str = typer.Option(
        None,
        "--output", "-o",
        help="Output format (human, json)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
):
    """
    Halting analysis for federated quorum networks.

    Finds the nodes whose single failure cascades until the home node halts.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.resolve_log_level(verbose),
        format=settings.log_format,
    )

    ctx.ensure_object(dict)

    try:
        output_format = OutputFormat((output or settings.default_output_format).lower())
    except ValueError:
        output_format = OutputFormat.HUMAN

    ctx.obj["formatter"] = Formatter(
        format=output_format,
        verbose=verbose,
    )
    ctx.obj["verbose"] = verbose
