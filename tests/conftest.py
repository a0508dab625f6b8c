"""
Pytest configuration and fixtures for halting analysis tests.

Provides small network topologies shared across test modules.
"""

import pytest

from halting.graph.models import NetworkNode, QuorumSet


def make_node(name: str, threshold: int = 0, validators=None, distance: int = 1) -> NetworkNode:
    """Create a network node with a flat or nested quorum set."""
    return NetworkNode(
        node=name,
        qset=QuorumSet(threshold=threshold, validators=list(validators or [])),
        distance=distance,
    )


@pytest.fixture
def tolerant_network():
    """Home needs 2 of A, B, C, so any single failure is absorbed."""
    return [
        make_node("H", 2, ["A", "B", "C"], distance=0),
        make_node("A"),
        make_node("B"),
        make_node("C"),
    ]


@pytest.fixture
def cascading_network():
    """Home needs A; B is unconnected."""
    return [
        make_node("H", 1, ["A"], distance=0),
        make_node("A"),
        make_node("B"),
    ]


@pytest.fixture
def chain_network():
    """Home needs X, X needs Y, Y needs Z."""
    return [
        make_node("H", 1, ["X"], distance=0),
        make_node("X", 1, ["Y"], distance=1),
        make_node("Y", 1, ["Z"], distance=2),
        make_node("Z", distance=3),
    ]


@pytest.fixture
def cyclic_network():
    """P and Q require each other; home requires P."""
    return [
        make_node("H", 1, ["P"], distance=0),
        make_node("P", 1, ["Q"], distance=1),
        make_node("Q", 1, ["P"], distance=2),
    ]


@pytest.fixture
def nested_network():
    """Home needs 2 of [A, inner(2 of B, C, D)]."""
    return [
        make_node(
            "H",
            2,
            ["A", QuorumSet(threshold=2, validators=["B", "C", "D"])],
            distance=0,
        ),
        make_node("A"),
        make_node("B"),
        make_node("C"),
        make_node("D"),
    ]


@pytest.fixture
def node_factory():
    """Expose make_node to tests that build their own topologies."""
    return make_node
