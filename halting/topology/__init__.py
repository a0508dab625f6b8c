"""
Topology documents for halting analysis.

Loads JSON or YAML network descriptions into analysis input.
"""

from halting.topology.loader import assign_distances, load_topology, parse_topology
from halting.topology.schemas import NodeSchema, QuorumSetSchema, TopologyDocument

__all__ = [
    "assign_distances",
    "load_topology",
    "parse_topology",
    "NodeSchema",
    "QuorumSetSchema",
    "TopologyDocument",
]
