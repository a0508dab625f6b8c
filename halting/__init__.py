"""
Halting analysis for federated quorum networks.

Fails each node of a quorum network in isolation and reports the failures
that cascade until the home node halts.
"""

__version__ = "0.1.0"

from halting.analysis import AnalysisReport, HaltingAnalyzer, HaltingFailure, halting_analysis
from halting.errors import (
    ConfigurationError,
    HaltingAnalysisError,
    TopologyFormatError,
    UnsupportedConfigurationError,
)
from halting.graph import NetworkNode, QuorumSet, build_analysis_graph

__all__ = [
    "__version__",
    # Analysis
    "AnalysisReport",
    "HaltingAnalyzer",
    "HaltingFailure",
    "halting_analysis",
    # Graph
    "NetworkNode",
    "QuorumSet",
    "build_analysis_graph",
    # Errors
    "ConfigurationError",
    "HaltingAnalysisError",
    "TopologyFormatError",
    "UnsupportedConfigurationError",
]
