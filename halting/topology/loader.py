"""
Topology loading for halting analysis.

Reads JSON or YAML topology documents into NetworkNode lists, assigning
distances from a home node when the document does not carry them.
"""

import json
import logging
from collections import deque
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from halting.errors import ConfigurationError, TopologyFormatError
from halting.graph.models import NetworkNode
from halting.topology.schemas import TopologyDocument

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def assign_distances(document: TopologyDocument, home: str) -> dict[str, int]:
    """
    Compute each node's distance from home over quorum references.

    Breadth first from ``home``, following the peers each node's quorum set
    references. Nodes home cannot reach get ``len(document.nodes)`` so they
    stay non-zero. References to unknown ids are left for the normalizer to
    report.

    Args:
        document: Validated topology document
        home: Id of the home node

    Returns:
        Distance per node id

    Raises:
        ConfigurationError: If home is not in the document
    """
    peers: dict[str, list[str]] = {}
    for node in document.nodes:
        peers.setdefault(node.id, node.qset.referenced_ids())

    if home not in peers:
        raise ConfigurationError(f"Home node {home} not found in topology")

    distances = {home: 0}
    queue = deque([home])
    while queue:
        current = queue.popleft()
        for peer in peers.get(current, []):
            if peer in peers and peer not in distances:
                distances[peer] = distances[current] + 1
                queue.append(peer)

    unreachable = len(document.nodes)
    for node_id in peers:
        if node_id not in distances:
            logger.debug(f"Node {node_id} is not reachable from home {home}")
            distances[node_id] = unreachable
    return distances


def parse_topology(data: Any, home: Optional[str] = None) -> list[NetworkNode]:
    """
    Validate a decoded topology document and build NetworkNode objects.

    Args:
        data: Decoded document, either a mapping or a bare node list
        home: Home node id; overrides the document's ``home`` and any
            distances it carries

    Returns:
        NetworkNode list in document order

    Raises:
        TopologyFormatError: If the document does not validate
        ConfigurationError: If no distances can be determined
    """
    if isinstance(data, list):
        data = {"nodes": data}
    if not isinstance(data, dict):
        raise TopologyFormatError(
            f"Topology must be a mapping or a node list, got {type(data).__name__}"
        )

    try:
        document = TopologyDocument.model_validate(data)
    except ValidationError as e:
        raise TopologyFormatError(f"Invalid topology document: {e}") from e

    home = home or document.home
    if home:
        distances = assign_distances(document, home)
    else:
        missing = [n.id for n in document.nodes if n.distance is None]
        if missing:
            raise ConfigurationError(
                f"Nodes without distance and no home node given: {', '.join(missing)}"
            )
        distances = {n.id: n.distance for n in document.nodes}

    return document.to_network_nodes(distances)


def load_topology(
    path: Union[str, Path],
    home: Optional[str] = None,
) -> list[NetworkNode]:
    """
    Load a topology file.

    Files ending in .yaml or .yml are read as YAML, anything else as JSON.

    Args:
        path: Topology file path
        home: Optional home node id (see parse_topology)

    Returns:
        NetworkNode list in file order

    Raises:
        TopologyFormatError: If the file cannot be read, decoded or validated
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TopologyFormatError(f"Cannot read topology file {path}: {e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise TopologyFormatError(f"Cannot parse topology file {path}: {e}") from e

    nodes = parse_topology(data, home=home)
    logger.info(f"Loaded {len(nodes)} nodes from {path}")
    return nodes
