"""
Analyze command for halting CLI.

Runs the single-node failure analysis over a topology file.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from halting.analysis.driver import HaltingAnalyzer
from halting.cli.output import Formatter
from halting.config.settings import get_settings
from halting.errors import ConfigurationError, UnsupportedConfigurationError
from halting.telemetry.config import configure_telemetry, shutdown_telemetry
from halting.topology.loader import load_topology

logger = logging.getLogger(__name__)

EXIT_CONFIGURATION_ERROR = 1
EXIT_UNSUPPORTED = 2


def analyze(
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
    fault_set_size: Optional[int] = typer.Option(
        None,
        "--fault-set-size", "-n",
        help="Nodes failed together per pass (only 1 is supported)",
    ),
):
    """
    Report nodes whose failure halts the home node.

    Examples:
        halting analyze network.json
        halting analyze network.yaml --home GCKI
        halting -o json analyze network.json
    """
    formatter: Formatter = ctx.obj["formatter"]
    settings = get_settings()

    if fault_set_size is None:
        fault_set_size = settings.default_fault_set_size

    if settings.telemetry_enabled:
        configure_telemetry()

    try:
        nodes = load_topology(topology, home=home or settings.default_home)
        formatter.debug(f"Loaded {len(nodes)} nodes from {topology}")

        report = HaltingAnalyzer(nodes, fault_set_size=fault_set_size).run()
        formatter.print_report(report)

    except UnsupportedConfigurationError as e:
        logger.error(f"Unsupported analysis configuration: {e}")
        formatter.error(str(e), code="UNSUPPORTED_CONFIGURATION")
        raise typer.Exit(EXIT_UNSUPPORTED)
    except ConfigurationError as e:
        logger.error(f"Invalid network configuration: {e}")
        formatter.error(str(e), code="CONFIGURATION_ERROR")
        raise typer.Exit(EXIT_CONFIGURATION_ERROR)
    finally:
        shutdown_telemetry()
