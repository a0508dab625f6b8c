"""
Graph command for halting CLI.

Shows the normalized dependency graph built from a topology file.
"""

from pathlib import Path
from typing import Optional

import typer

from halting.cli.output import Formatter
from halting.config.settings import get_settings
from halting.errors import ConfigurationError
from halting.graph.normalizer import build_analysis_graph
from halting.topology.loader import load_topology


def graph(
    ctx: typer.Context,
    topology: Path = typer.Argument(
        ...,
        help="Topology file (JSON or YAML)",
    ),
    home: Optional[str] = typer.Option(
        None,
        "--home",
        help="Home node id (distances are computed from it)",
    ),
):
    """
    Show quorum dependencies and dependents for every node.

    Examples:
        halting graph network.json
        halting -v graph network.yaml --home GCKI
    """
    formatter: Formatter = ctx.obj["formatter"]

    try:
        nodes = load_topology(topology, home=home or get_settings().default_home)
        formatter.print_graph(build_analysis_graph(nodes))
    except ConfigurationError as e:
        formatter.error(str(e), code="CONFIGURATION_ERROR")
        raise typer.Exit(1)
