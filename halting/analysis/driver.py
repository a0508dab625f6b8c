"""
Halting analysis driver.

Fails each node of the network in isolation and reports the ones whose
failure cascades until the home node halts.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from halting.analysis.evaluator import QuorumEvaluator
from halting.analysis.propagator import CascadePropagator
from halting.analysis.state import PassState
from halting.errors import ConfigurationError, UnsupportedConfigurationError
from halting.graph.models import AnalysisGraph
from halting.graph.normalizer import build_analysis_graph
from halting.telemetry.config import get_meter
from halting.telemetry.decorators import trace_sync

logger = logging.getLogger(__name__)

SUPPORTED_FAULT_SET_SIZE = 1

_meter = get_meter(__name__)
_passes_counter = _meter.create_counter(
    "halting.passes",
    description="Failure simulation passes run",
)
_failures_counter = _meter.create_counter(
    "halting.failure_cases",
    description="Failure cases in which the home node halted",
)


def _node_id(network_node: Any) -> str:
    return getattr(network_node, "node", str(network_node))


@dataclass
class HaltingFailure:
    """A set of nodes whose failure takes down the home node."""

    # The nodes which can go down and cause the home node to halt
    vulnerable_nodes: list[Any] = field(default_factory=list)
    # The nodes which go down in response to the vulnerable nodes
    affected_nodes: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "vulnerable_nodes": [_node_id(n) for n in self.vulnerable_nodes],
            "affected_nodes": [_node_id(n) for n in self.affected_nodes],
        }


@dataclass
class AnalysisReport:
    """Result of a full halting analysis run."""

    home: Any
    failures: list[HaltingFailure] = field(default_factory=list)
    node_count: int = 0
    passes_run: int = 0
    duration_ms: float = 0.0

    @property
    def is_resilient(self) -> bool:
        """True when no single node failure halts the home node."""
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "home": _node_id(self.home),
            "node_count": self.node_count,
            "passes_run": self.passes_run,
            "duration_ms": self.duration_ms,
            "resilient": self.is_resilient,
            "failures": [f.to_dict() for f in self.failures],
        }


class HaltingAnalyzer:
    """
    Run single-node failure simulations over an analysis graph.

    The graph is built once and never modified afterwards; every pass gets
    its own PassState, so passes do not influence each other.
    """

    def __init__(
        self,
        nodes: Sequence[Any],
        fault_set_size: int = SUPPORTED_FAULT_SET_SIZE,
    ):
        """
        Initialize analyzer.

        Args:
            nodes: Caller nodes exposing ``node``, ``qset`` and ``distance``
            fault_set_size: Number of nodes failed per pass (only 1 is supported)

        Raises:
            UnsupportedConfigurationError: If fault_set_size is not 1
            ConfigurationError: If the network graph is unusable
        """
        if fault_set_size != SUPPORTED_FAULT_SET_SIZE:
            # TODO: enumerate fault sets of size N once combinatorial passes are designed
            raise UnsupportedConfigurationError(
                f"Halting analysis only supports a fault set size of "
                f"{SUPPORTED_FAULT_SET_SIZE}, got {fault_set_size}"
            )
        self.fault_set_size = fault_set_size
        self.graph: AnalysisGraph = build_analysis_graph(nodes)
        self.evaluator = QuorumEvaluator(self.graph)
        self.propagator = CascadePropagator(self.graph, self.evaluator)

    def simulate_failure(self, name: str) -> PassState:
        """
        Fail a single node and propagate the consequences.

        Args:
            name: Name of the node to fail

        Returns:
            PassState describing which nodes died

        Raises:
            ConfigurationError: If no node has this name
        """
        node = self.graph.get(name)
        if node is None:
            raise ConfigurationError(f"No node named {name} in analysis graph")

        state = PassState(candidate=name)
        state.mark_dead(node)
        self.propagator.propagate(node, state)
        return state

    def check_failure(self, name: str) -> Optional[HaltingFailure]:
        """
        Check whether failing a node halts the home node.

        Returns:
            HaltingFailure if the home node dies, otherwise None
        """
        state = self.simulate_failure(name)
        if state.is_live(self.graph.home.name):
            return None
        return HaltingFailure(
            vulnerable_nodes=[self.graph.nodes[name].network_node],
            affected_nodes=state.affected_nodes(),
        )

    @trace_sync("halting.analysis.run")
    def run(self) -> AnalysisReport:
        """
        Fail every node other than home, one at a time.

        Returns:
            AnalysisReport with failure cases in graph construction order
        """
        start_time = time.perf_counter()
        report = AnalysisReport(
            home=self.graph.home.network_node,
            node_count=len(self.graph),
        )

        for candidate in self.graph.candidates():
            failure = self.check_failure(candidate.name)
            report.passes_run += 1
            _passes_counter.add(1)

            if failure is None:
                logger.debug(f"Failing {candidate.name} leaves home node live")
                continue

            report.failures.append(failure)
            _failures_counter.add(1)
            logger.info(
                f"Failing {candidate.name} halts home node "
                f"{self.graph.home.name} ({len(failure.affected_nodes)} affected)"
            )

        report.duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Halting analysis complete: {report.passes_run} passes, "
            f"{len(report.failures)} failure cases"
        )
        return report


def halting_analysis(
    nodes: Sequence[Any],
    fault_set_size: int = SUPPORTED_FAULT_SET_SIZE,
) -> list[HaltingFailure]:
    """
    Run the halting analysis on a network graph.

    Fails each node other than home in isolation and reports every failure
    that cascades, through unmet quorum thresholds, to the home node.

    Args:
        nodes: Caller nodes exposing ``node``, ``qset`` and ``distance``
        fault_set_size: Number of nodes failed per pass (only 1 is supported)

    Returns:
        List of failure cases

    Raises:
        ConfigurationError: If the network graph is unusable
        UnsupportedConfigurationError: If fault_set_size is not 1
    """
    return HaltingAnalyzer(nodes, fault_set_size).run().failures
