"""
Cascade propagation for halting analysis.

Handles the spread of a node failure through the dependents graph, marking
every dependent whose quorum can no longer be met as dead.
"""

import logging
from typing import Iterator, Optional

from halting.analysis.evaluator import QuorumEvaluator
from halting.analysis.state import PassState
from halting.graph.models import AnalysisGraph, AnalysisNode

logger = logging.getLogger(__name__)


class CascadePropagator:
    """
    Propagate a node failure to its dependents.

    When a node dies, this class:
    1. Visits each of its dependents in order
    2. Skips dependents that are already dead
    3. Re-evaluates the quorum of live dependents
    4. Marks failing dependents dead and records them as casualties
    5. Continues from each newly dead dependent before moving on

    The walk is depth first, like a recursive walk, but keeps its own stack
    of dependent iterators. Dead nodes are never revisited, so the stack is
    bounded by the number of nodes even when dependents form cycles.
    """

    def __init__(
        self,
        graph: AnalysisGraph,
        evaluator: Optional[QuorumEvaluator] = None,
    ):
        """
        Initialize cascade propagator.

        Args:
            graph: Analysis graph to propagate through
            evaluator: Quorum evaluator (created for ``graph`` if omitted)
        """
        self.graph = graph
        self.evaluator = evaluator or QuorumEvaluator(graph)

    def propagate(self, dead_node: AnalysisNode, state: PassState) -> None:
        """
        Propagate the failure of a node that has just died.

        Args:
            dead_node: Node that just transitioned from live to dead
            state: Pass state to update with further deaths and casualties
        """
        stack: list[tuple[str, Iterator[str]]] = [
            (dead_node.name, iter(dead_node.dependents_names))
        ]

        while stack:
            source_name, dependents = stack[-1]
            dependent_name = next(dependents, None)
            if dependent_name is None:
                stack.pop()
                continue

            if not state.is_live(dependent_name):
                continue

            dependent = self.graph.nodes[dependent_name]
            if self.evaluator.meets_threshold(dependent.requirement, state):
                continue

            state.mark_dead(dependent)
            state.record_casualty(dependent)
            logger.debug(
                f"Node {dependent_name} lost quorum "
                f"(depth={len(stack)}, source={source_name})"
            )
            stack.append((dependent_name, iter(dependent.dependents_names)))
