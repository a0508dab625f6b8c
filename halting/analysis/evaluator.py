"""
Quorum threshold evaluation.
"""

from typing import Callable

from halting.analysis.state import PassState
from halting.graph.models import AnalysisGraph, NestedRequirement, QuorumRequirement


class QuorumEvaluator:
    """Decide whether quorum requirements hold under a pass's liveness."""

    def __init__(self, graph: AnalysisGraph):
        self.graph = graph

    def meets_threshold(self, requirement: QuorumRequirement, state: PassState) -> bool:
        """
        Check a requirement and record every dead reference as a casualty.

        All entries are visited even once the threshold is decided, so the
        casualties recorded in ``state`` are complete. A satisfied nested
        requirement counts as one unit; a failed one records nothing itself,
        only its dead leaves are recorded.

        Args:
            requirement: Requirement to check
            state: Pass state providing liveness and collecting casualties

        Returns:
            True if at least ``threshold`` entries are satisfied
        """
        remaining = requirement.threshold
        for entry in requirement.entries:
            if isinstance(entry, NestedRequirement):
                if self.meets_threshold(entry.requirement, state):
                    remaining -= 1
            elif state.is_live(entry.name):
                remaining -= 1
            else:
                state.record_casualty(self.graph.nodes[entry.name])
        return remaining <= 0

    def is_satisfied(
        self,
        requirement: QuorumRequirement,
        is_live: Callable[[str], bool],
    ) -> bool:
        """
        Check a requirement without side effects, stopping once decided.

        Agrees with meets_threshold() for the same liveness.
        """
        remaining = requirement.threshold
        if remaining <= 0:
            return True
        for entry in requirement.entries:
            if isinstance(entry, NestedRequirement):
                satisfied = self.is_satisfied(entry.requirement, is_live)
            else:
                satisfied = is_live(entry.name)
            if satisfied:
                remaining -= 1
                if remaining <= 0:
                    return True
        return False
