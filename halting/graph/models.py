"""
Data models for halting analysis graphs.

Defines the caller-facing network node types and the internal analysis
graph the normalizer produces from them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union


@dataclass
class QuorumSet:
    """Quorum set as supplied by the caller (threshold over mixed validators)."""

    threshold: int
    validators: list[Union[str, "QuorumSet"]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "threshold": self.threshold,
            "validators": [
                v if isinstance(v, str) else v.to_dict() for v in self.validators
            ],
        }


@dataclass
class NetworkNode:
    """Node in the caller's network graph."""

    node: str
    qset: QuorumSet
    distance: int = 0  # Hops from the home node

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "node": self.node,
            "qset": self.qset.to_dict(),
            "distance": self.distance,
        }


class BuildState(str, Enum):
    """Construction state of an analysis node."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"  # Registered, quorum set still being walked
    COMPLETE = "complete"


@dataclass(frozen=True)
class DirectReference:
    """Quorum entry that is satisfied while the named node is live."""

    name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"type": "reference", "name": self.name}


@dataclass(frozen=True)
class NestedRequirement:
    """Quorum entry that counts as one unit when its own threshold is met."""

    requirement: "QuorumRequirement"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"type": "nested", "requirement": self.requirement.to_dict()}


QuorumEntry = Union[DirectReference, NestedRequirement]


@dataclass
class QuorumRequirement:
    """Threshold over an ordered list of quorum entries."""

    threshold: int
    entries: list[QuorumEntry] = field(default_factory=list)

    def add_reference(self, name: str) -> DirectReference:
        """Append a direct reference to a node."""
        entry = DirectReference(name)
        self.entries.append(entry)
        return entry

    def add_nested(self, threshold: int) -> "QuorumRequirement":
        """Append an empty nested requirement and return it for filling."""
        nested = QuorumRequirement(threshold=threshold)
        self.entries.append(NestedRequirement(nested))
        return nested

    def referenced_names(self) -> Iterator[str]:
        """Yield every referenced node name, depth first, in entry order."""
        for entry in self.entries:
            if isinstance(entry, NestedRequirement):
                yield from entry.requirement.referenced_names()
            else:
                yield entry.name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "threshold": self.threshold,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class AnalysisNode:
    """Internal node: requirement, inverse edges and the caller's object."""

    name: str
    requirement: QuorumRequirement
    network_node: Any
    dependents_names: list[str] = field(default_factory=list)
    build_state: BuildState = BuildState.PENDING

    def is_complete(self) -> bool:
        """Check whether the quorum set has been fully walked."""
        return self.build_state == BuildState.COMPLETE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "requirement": self.requirement.to_dict(),
            "dependents": list(self.dependents_names),
        }


@dataclass
class AnalysisGraph:
    """
    Normalized analysis graph.

    Nodes are kept in construction order, which is the order candidates are
    failed in by the analysis driver.
    """

    home: AnalysisNode
    nodes: dict[str, AnalysisNode] = field(default_factory=dict)

    def get(self, name: str) -> Optional[AnalysisNode]:
        """Look up a node by name."""
        return self.nodes.get(name)

    def candidates(self) -> list[AnalysisNode]:
        """Get every node other than home, in construction order."""
        return [n for n in self.nodes.values() if n is not self.home]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[AnalysisNode]:
        return iter(self.nodes.values())

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "home": self.home.name,
            "nodes": [n.to_dict() for n in self.nodes.values()],
        }
