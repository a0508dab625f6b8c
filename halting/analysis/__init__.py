"""
Failure simulation for halting analysis.

Provides quorum evaluation, cascade propagation and the driver that fails
each node in turn.
"""

from halting.analysis.state import PassState
from halting.analysis.evaluator import QuorumEvaluator
from halting.analysis.propagator import CascadePropagator
from halting.analysis.driver import (
    AnalysisReport,
    HaltingAnalyzer,
    HaltingFailure,
    halting_analysis,
)

__all__ = [
    "PassState",
    "QuorumEvaluator",
    "CascadePropagator",
    "AnalysisReport",
    "HaltingAnalyzer",
    "HaltingFailure",
    "halting_analysis",
]
