"""Tests for analysis graph construction."""

import pytest

from halting.errors import ConfigurationError
from halting.graph.models import (
    BuildState,
    DirectReference,
    NestedRequirement,
    QuorumSet,
)
from halting.graph.normalizer import GraphNormalizer, build_analysis_graph


class TestHomeNode:
    """Tests for locating the home node."""

    def test_missing_home_raises(self, node_factory):
        """Test a graph without a distance-0 node is rejected."""
        nodes = [node_factory("A", distance=1), node_factory("B", distance=2)]

        with pytest.raises(ConfigurationError, match="distance 0"):
            build_analysis_graph(nodes)

    def test_multiple_homes_raise(self, node_factory):
        """Test two distinct distance-0 nodes are rejected."""
        nodes = [node_factory("A", distance=0), node_factory("B", distance=0)]

        with pytest.raises(ConfigurationError, match="Multiple"):
            build_analysis_graph(nodes)

    def test_negative_distance_raises(self, node_factory):
        """Test negative distances are rejected."""
        nodes = [node_factory("H", distance=0), node_factory("A", distance=-1)]

        with pytest.raises(ConfigurationError, match="invalid distance"):
            build_analysis_graph(nodes)

    def test_home_is_first(self, cascading_network):
        """Test construction starts at the home node."""
        graph = build_analysis_graph(cascading_network)

        assert graph.home.name == "H"
        assert list(graph.nodes)[0] == "H"
        assert graph.home.network_node is cascading_network[0]


class TestConstruction:
    """Tests for node and edge construction."""

    def test_one_node_per_input_id(self, tolerant_network):
        """Test every input id gets exactly one analysis node."""
        graph = build_analysis_graph(tolerant_network)

        assert len(graph) == 4
        assert set(graph.nodes) == {"H", "A", "B", "C"}

    def test_unreachable_nodes_are_included(self, cascading_network):
        """Test nodes home cannot reach still appear after reachable ones."""
        graph = build_analysis_graph(cascading_network)

        assert list(graph.nodes) == ["H", "A", "B"]
        assert graph.nodes["B"].dependents_names == []

    def test_duplicate_ids_collapse(self, node_factory):
        """Test duplicate input ids keep the first occurrence."""
        first = node_factory("A")
        nodes = [node_factory("H", 1, ["A"], distance=0), first, node_factory("A", distance=5)]

        graph = build_analysis_graph(nodes)

        assert len(graph) == 2
        assert graph.nodes["A"].network_node is first

    def test_unknown_reference_raises(self, node_factory):
        """Test references to unknown ids are rejected."""
        nodes = [node_factory("H", 1, ["GHOST"], distance=0)]

        with pytest.raises(ConfigurationError, match="no node named GHOST"):
            build_analysis_graph(nodes)

    def test_unknown_reference_in_unreachable_node_raises(self, node_factory):
        """Test unreachable nodes are validated too."""
        nodes = [node_factory("H", distance=0), node_factory("A", 1, ["GHOST"])]

        with pytest.raises(ConfigurationError):
            build_analysis_graph(nodes)

    def test_edges_in_both_directions(self, tolerant_network):
        """Test forward references and dependents are recorded."""
        graph = build_analysis_graph(tolerant_network)

        assert graph.home.requirement.threshold == 2
        assert graph.home.requirement.entries == [
            DirectReference("A"),
            DirectReference("B"),
            DirectReference("C"),
        ]
        for name in ("A", "B", "C"):
            assert graph.nodes[name].dependents_names == ["H"]

    def test_nested_sets_create_no_edges(self, nested_network):
        """Test nested quorum sets become nested requirements."""
        graph = build_analysis_graph(nested_network)

        entries = graph.home.requirement.entries
        assert entries[0] == DirectReference("A")
        assert isinstance(entries[1], NestedRequirement)
        inner = entries[1].requirement
        assert inner.threshold == 2
        assert [e.name for e in inner.entries] == ["B", "C", "D"]
        assert list(graph.home.requirement.referenced_names()) == ["A", "B", "C", "D"]
        assert graph.nodes["C"].dependents_names == ["H"]

    def test_mixed_validators(self, node_factory):
        """Test peers and nested sets may be mixed in one list."""
        nodes = [
            node_factory(
                "H",
                2,
                [QuorumSet(threshold=1, validators=["A"]), "B"],
                distance=0,
            ),
            node_factory("A"),
            node_factory("B"),
        ]

        graph = build_analysis_graph(nodes)

        entries = graph.home.requirement.entries
        assert isinstance(entries[0], NestedRequirement)
        assert entries[1] == DirectReference("B")

    def test_all_nodes_complete(self, nested_network):
        """Test every node finishes construction."""
        graph = build_analysis_graph(nested_network)

        assert all(n.build_state == BuildState.COMPLETE for n in graph)


class TestCycles:
    """Tests for cyclic quorum references."""

    def test_mutual_dependency_terminates(self, cyclic_network):
        """Test two nodes requiring each other build once each."""
        graph = build_analysis_graph(cyclic_network)

        assert list(graph.nodes) == ["H", "P", "Q"]
        assert graph.nodes["P"].dependents_names == ["Q", "H"]
        assert graph.nodes["Q"].dependents_names == ["P"]

    def test_self_reference(self, node_factory):
        """Test a node listing itself in its own quorum."""
        nodes = [node_factory("H", 1, ["H"], distance=0)]

        graph = build_analysis_graph(nodes)

        assert graph.home.dependents_names == ["H"]
        assert graph.home.requirement.entries == [DirectReference("H")]

    def test_long_chain_does_not_recurse(self, node_factory):
        """Test reference chains deeper than the recursion limit build."""
        depth = 3000
        nodes = [node_factory("n0", 1, ["n1"], distance=0)]
        for i in range(1, depth):
            nodes.append(node_factory(f"n{i}", 1, [f"n{i + 1}"], distance=i))
        nodes.append(node_factory(f"n{depth}", distance=depth))

        graph = build_analysis_graph(nodes)

        assert len(graph) == depth + 1


class TestNormalizer:
    """Tests for GraphNormalizer directly."""

    def test_find_home(self, chain_network):
        """Test home lookup returns the caller's object."""
        normalizer = GraphNormalizer(chain_network)

        assert normalizer.find_home() is chain_network[0]

    def test_deterministic_order(self, nested_network):
        """Test identical input builds identically ordered graphs."""
        first = build_analysis_graph(nested_network)
        second = build_analysis_graph(nested_network)

        assert first.to_dict() == second.to_dict()
