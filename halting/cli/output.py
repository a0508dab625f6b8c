"""
CLI output formatting helpers.

Provides consistent formatting for human-readable and JSON output.
"""

import json
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from halting.analysis.driver import AnalysisReport
from halting.graph.models import AnalysisGraph, NestedRequirement, QuorumRequirement


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"


# Global console for errors
error_console = Console(stderr=True)


class Formatter:
    """Output formatter with support for multiple formats."""

    def __init__(
        self,
        format: OutputFormat = OutputFormat.HUMAN,
        verbose: bool = False,
        color: bool = True,
    ):
        """
        Initialize formatter.

        Args:
            format: Output format (human or json)
            verbose: Enable verbose output
            color: Enable colored output
        """
        self.format = format
        self.verbose = verbose
        self.color = color
        self.console = Console(no_color=not color)

    def error(self, message: str, code: Optional[str] = None, details: Optional[dict] = None):
        """Display error message."""
        if self.format == OutputFormat.JSON:
            output = {
                "status": "error",
                "error": {
                    "message": message,
                    "code": code or "ERROR",
                    "details": details,
                },
            }
            print(json.dumps(output, indent=2, default=str))
        else:
            error_console.print(f"[red]✗[/red] {message}")
            if code:
                error_console.print(f"  [dim]Code:[/dim] {code}")
            if details:
                for key, value in details.items():
                    error_console.print(f"  [dim]{key}:[/dim] {value}")

    def info(self, message: str):
        """Display info message."""
        if self.format != OutputFormat.JSON:
            self.console.print(f"[blue]ℹ[/blue] {message}")

    def debug(self, message: str):
        """Display debug message (only in verbose mode)."""
        if self.verbose and self.format != OutputFormat.JSON:
            self.console.print(f"[dim][DEBUG][/dim] {message}")

    def print_json(self, data: Any):
        """Print data as JSON."""
        print(json.dumps(data, indent=2, default=str))

    def print_report(self, report: AnalysisReport):
        """Print halting analysis results."""
        if self.format == OutputFormat.JSON:
            self.print_json(report.to_dict())
            return

        summary = report.to_dict()
        if report.is_resilient:
            verdict = "[green]✓ No single node failure halts the home node[/green]"
        else:
            verdict = f"[red]✗ {len(report.failures)} node(s) can halt the home node[/red]"

        self.console.print()
        self.console.print(Panel.fit(
            f"{verdict}\n"
            f"  [dim]Home:[/dim] [cyan]{summary['home']}[/cyan]\n"
            f"  [dim]Nodes:[/dim] {report.node_count}\n"
            f"  [dim]Passes:[/dim] {report.passes_run}",
            title="Halting Analysis",
        ))

        if report.is_resilient:
            return

        table = Table(title="Failure Cases")
        table.add_column("Vulnerable", style="cyan")
        table.add_column("Affected")
        table.add_column("Count")

        for failure in summary["failures"]:
            table.add_row(
                ", ".join(failure["vulnerable_nodes"]),
                ", ".join(failure["affected_nodes"]),
                str(len(failure["affected_nodes"])),
            )

        self.console.print(table)
        if self.verbose:
            self.console.print(f"\n[dim]Duration: {report.duration_ms:.1f} ms[/dim]")

    def print_graph(self, graph: AnalysisGraph):
        """Print the normalized dependency graph."""
        if self.format == OutputFormat.JSON:
            self.print_json(graph.to_dict())
            return

        table = Table(title="Analysis Graph")
        table.add_column("Node", style="cyan")
        table.add_column("Threshold")
        table.add_column("Depends On")
        table.add_column("Dependents")

        for node in graph:
            name = f"{node.name} [dim](home)[/dim]" if node is graph.home else node.name
            table.add_row(
                name,
                str(node.requirement.threshold),
                ", ".join(dict.fromkeys(node.requirement.referenced_names())) or "-",
                ", ".join(dict.fromkeys(node.dependents_names)) or "-",
            )

        self.console.print(table)

        if self.verbose:
            tree = Tree(f"[cyan]{graph.home.name}[/cyan]")
            self._add_requirement_nodes(tree, graph.home.requirement)
            self.console.print(tree)

    def _add_requirement_nodes(self, tree: Tree, requirement: QuorumRequirement):
        """Recursively add requirement entries to tree."""
        branch = tree.add(f"[dim]threshold {requirement.threshold}[/dim]")
        for entry in requirement.entries:
            if isinstance(entry, NestedRequirement):
                self._add_requirement_nodes(branch, entry.requirement)
            else:
                branch.add(entry.name)
