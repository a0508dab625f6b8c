"""
Analysis graph construction.

Provides the caller-facing network types and the normalizer that turns them
into an analysis graph with resolved dependency edges.
"""

from halting.graph.models import (
    AnalysisGraph,
    AnalysisNode,
    BuildState,
    DirectReference,
    NestedRequirement,
    NetworkNode,
    QuorumEntry,
    QuorumRequirement,
    QuorumSet,
)
from halting.graph.normalizer import GraphNormalizer, build_analysis_graph

__all__ = [
    # Caller types
    "NetworkNode",
    "QuorumSet",
    # Analysis types
    "AnalysisGraph",
    "AnalysisNode",
    "BuildState",
    "DirectReference",
    "NestedRequirement",
    "QuorumEntry",
    "QuorumRequirement",
    # Construction
    "GraphNormalizer",
    "build_analysis_graph",
]
