"""
Graph normalization for halting analysis.

Converts the caller's network nodes into an AnalysisGraph with resolved,
deduplicated node identities and edges in both directions.
"""

import logging
from typing import Any, Iterator, Optional, Sequence

from halting.errors import ConfigurationError
from halting.graph.models import (
    AnalysisGraph,
    AnalysisNode,
    BuildState,
    QuorumRequirement,
)
from halting.telemetry.decorators import trace_sync

logger = logging.getLogger(__name__)


class GraphNormalizer:
    """
    Build the analysis graph from caller network nodes.

    Nodes are created lazily, starting at the home node. A node is
    registered and marked IN_PROGRESS before its quorum set is walked, so a
    reference back to it (a quorum cycle) only adds an edge instead of
    building it again. Construction uses an explicit stack of frames rather
    than recursion, and a newly built peer is linked back to the node that
    referenced it once its own walk completes.
    """

    def __init__(self, nodes: Sequence[Any]):
        """
        Initialize normalizer.

        Args:
            nodes: Caller nodes exposing ``node``, ``qset`` and ``distance``
        """
        self.network_nodes = list(nodes)
        self._index: dict[str, Any] = {}
        self._nodes: dict[str, AnalysisNode] = {}

        for network_node in self.network_nodes:
            name = network_node.node
            if name in self._index:
                logger.warning(f"Duplicate node {name} in network graph, keeping first")
                continue
            distance = network_node.distance
            if distance is None or distance < 0:
                raise ConfigurationError(
                    f"Bad network graph: node {name} has invalid distance {distance}"
                )
            self._index[name] = network_node

    def find_home(self) -> Any:
        """
        Locate the home node.

        Returns:
            The single caller node with distance 0

        Raises:
            ConfigurationError: If no node, or more than one, has distance 0
        """
        homes = [n for n in self._index.values() if n.distance == 0]
        if not homes:
            raise ConfigurationError("No node with distance 0 in halting analysis")
        if len(homes) > 1:
            names = ", ".join(n.node for n in homes)
            raise ConfigurationError(f"Multiple nodes with distance 0: {names}")
        return homes[0]

    def build(self) -> AnalysisGraph:
        """
        Build the analysis graph.

        Returns:
            AnalysisGraph holding exactly one node per distinct input id
        """
        home = self._build_from(self.find_home())

        # Nodes home cannot reach still get an entry, in input order
        for name, network_node in self._index.items():
            if name not in self._nodes:
                self._build_from(network_node)

        logger.debug(
            f"Built analysis graph: {len(self._nodes)} nodes, home={home.name}"
        )
        return AnalysisGraph(home=home, nodes=dict(self._nodes))

    def _build_from(self, network_node: Any) -> AnalysisNode:
        root = self._register(network_node)
        # Frame: (node being walked, its peer iterator, name to link back on completion)
        stack: list[tuple[AnalysisNode, Iterator[str], Optional[str]]] = [
            (root, self._walk(network_node.qset, root.requirement), None)
        ]

        while stack:
            current, peers, referrer = stack[-1]
            peer_name = next(peers, None)

            if peer_name is None:
                current.build_state = BuildState.COMPLETE
                stack.pop()
                if referrer is not None:
                    current.dependents_names.append(referrer)
                continue

            target = self._nodes.get(peer_name)
            if target is None:
                peer = self._resolve(peer_name)
                target = self._register(peer)
                stack.append((target, self._walk(peer.qset, target.requirement), current.name))
                continue

            if target.build_state == BuildState.IN_PROGRESS:
                logger.debug(f"Quorum cycle: {current.name} -> {target.name}")
            target.dependents_names.append(current.name)

        return root

    def _register(self, network_node: Any) -> AnalysisNode:
        entry = AnalysisNode(
            name=network_node.node,
            requirement=QuorumRequirement(threshold=network_node.qset.threshold),
            network_node=network_node,
        )
        entry.build_state = BuildState.IN_PROGRESS
        self._nodes[entry.name] = entry
        return entry

    def _resolve(self, name: str) -> Any:
        network_node = self._index.get(name)
        if network_node is None:
            raise ConfigurationError(f"Bad network graph: no node named {name}")
        return network_node

    def _walk(self, qset: Any, requirement: QuorumRequirement) -> Iterator[str]:
        """
        Mirror a caller quorum set into ``requirement``, yielding peer names.

        Nested sets become nested requirements and yield nothing themselves;
        only their leaves produce edges.
        """
        for validator in qset.validators:
            if isinstance(validator, str):
                # Resolve before recording the forward edge
                self._resolve(validator)
                requirement.add_reference(validator)
                yield validator
            else:
                nested = requirement.add_nested(validator.threshold)
                yield from self._walk(validator, nested)


@trace_sync("halting.build_analysis_graph")
def build_analysis_graph(nodes: Sequence[Any]) -> AnalysisGraph:
    """
    Build the analysis graph for a set of network nodes.

    Args:
        nodes: Caller nodes exposing ``node``, ``qset`` and ``distance``

    Returns:
        AnalysisGraph rooted at the home node

    Raises:
        ConfigurationError: If there is no single home node or a quorum set
            references an unknown node
    """
    return GraphNormalizer(nodes).build()
