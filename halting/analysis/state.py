"""
Per-pass liveness state for failure simulation.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from halting.graph.models import AnalysisNode


@dataclass
class PassState:
    """
    Liveness and casualties for one failure simulation pass.

    Every node starts live; a fresh PassState is the reset between passes.
    Nodes are only ever marked dead, never revived, within a pass.
    Casualties are keyed by node name, so each node is reported once in the
    order it was first recorded.
    """

    candidate: Optional[str] = None
    dead: set[str] = field(default_factory=set)
    casualties: dict[str, AnalysisNode] = field(default_factory=dict)

    def is_live(self, name: str) -> bool:
        """Check whether a node is still live in this pass."""
        return name not in self.dead

    def mark_dead(self, node: AnalysisNode) -> None:
        """Mark a node dead for the rest of this pass."""
        self.dead.add(node.name)

    def record_casualty(self, node: AnalysisNode) -> None:
        """Record a dead node for reporting."""
        self.casualties.setdefault(node.name, node)

    def affected_nodes(self) -> list[Any]:
        """Get the caller objects of every casualty other than the candidate."""
        return [
            node.network_node
            for name, node in self.casualties.items()
            if name != self.candidate
        ]
