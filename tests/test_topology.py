"""Tests for topology document loading."""

import json

import pytest
import yaml

from halting.errors import ConfigurationError, TopologyFormatError
from halting.graph.models import QuorumSet
from halting.topology.loader import assign_distances, load_topology, parse_topology
from halting.topology.schemas import TopologyDocument


@pytest.fixture
def stellar_document():
    """Topology using the short Stellar-style keys."""
    return {
        "home": "H",
        "nodes": [
            {"node": "H", "qset": {"t": 2, "v": ["A", {"t": 1, "v": ["B", "C"]}]}},
            {"node": "A", "qset": {"t": 1, "v": ["B"]}},
            {"node": "B", "qset": {"t": 0, "v": []}},
            {"node": "C"},
            {"node": "LONER"},
        ],
    }


class TestParseTopology:
    """Tests for parse_topology()."""

    def test_short_keys(self, stellar_document):
        """Test node/t/v aliases are accepted."""
        nodes = parse_topology(stellar_document)

        assert [n.node for n in nodes] == ["H", "A", "B", "C", "LONER"]
        home = nodes[0]
        assert home.qset.threshold == 2
        assert home.qset.validators[0] == "A"
        assert home.qset.validators[1] == QuorumSet(threshold=1, validators=["B", "C"])

    def test_long_keys(self):
        """Test full field names are accepted."""
        nodes = parse_topology({
            "nodes": [
                {"id": "H", "qset": {"threshold": 1, "validators": ["A"]}, "distance": 0},
                {"id": "A", "distance": 1},
            ],
        })

        assert [(n.node, n.distance) for n in nodes] == [("H", 0), ("A", 1)]
        assert nodes[1].qset == QuorumSet(threshold=0, validators=[])

    def test_bare_node_list(self):
        """Test a document may be just the node list."""
        nodes = parse_topology([{"id": "H", "distance": 0}])

        assert nodes[0].node == "H"

    def test_distances_from_home(self, stellar_document):
        """Test distances are assigned breadth first from home."""
        distances = {n.node: n.distance for n in parse_topology(stellar_document)}

        assert distances == {"H": 0, "A": 1, "B": 1, "C": 1, "LONER": 5}

    def test_home_argument_overrides_document(self, stellar_document):
        """Test an explicit home replaces the document's home."""
        distances = {n.node: n.distance for n in parse_topology(stellar_document, home="A")}

        assert distances["A"] == 0
        assert distances["B"] == 1
        assert distances["H"] == 5

    def test_unknown_home(self, stellar_document):
        """Test a home id missing from the document is rejected."""
        with pytest.raises(ConfigurationError, match="not found"):
            parse_topology(stellar_document, home="NOPE")

    def test_missing_distances_without_home(self):
        """Test distances are required when no home is given."""
        with pytest.raises(ConfigurationError, match="without distance"):
            parse_topology({"nodes": [{"id": "H"}]})

    def test_invalid_threshold(self):
        """Test negative thresholds fail validation."""
        with pytest.raises(TopologyFormatError):
            parse_topology({"nodes": [{"id": "H", "qset": {"t": -1}, "distance": 0}]})

    def test_invalid_shape(self):
        """Test non-mapping documents are rejected."""
        with pytest.raises(TopologyFormatError):
            parse_topology("nodes")

    def test_format_error_is_configuration_error(self):
        """Test format errors can be handled as configuration errors."""
        with pytest.raises(ConfigurationError):
            parse_topology({"nodes": [{"qset": {"t": 1}}]})


class TestAssignDistances:
    """Tests for assign_distances()."""

    def test_ignores_unknown_references(self):
        """Test unknown peers are skipped rather than raising."""
        document = TopologyDocument.model_validate({
            "nodes": [{"id": "H", "qset": {"t": 1, "v": ["GHOST", "A"]}}, {"id": "A"}],
        })

        assert assign_distances(document, "H") == {"H": 0, "A": 1}


class TestLoadTopology:
    """Tests for load_topology()."""

    def test_load_json(self, tmp_path, stellar_document):
        """Test JSON files load."""
        path = tmp_path / "network.json"
        path.write_text(json.dumps(stellar_document))

        nodes = load_topology(path)

        assert len(nodes) == 5

    def test_load_yaml(self, tmp_path, stellar_document):
        """Test YAML files load."""
        path = tmp_path / "network.yaml"
        path.write_text(yaml.safe_dump(stellar_document))

        nodes = load_topology(path)

        assert nodes[0].node == "H"
        assert nodes[0].distance == 0

    def test_missing_file(self, tmp_path):
        """Test unreadable files raise a format error."""
        with pytest.raises(TopologyFormatError, match="Cannot read"):
            load_topology(tmp_path / "missing.json")

    def test_bad_json(self, tmp_path):
        """Test undecodable files raise a format error."""
        path = tmp_path / "network.json"
        path.write_text("{not json")

        with pytest.raises(TopologyFormatError, match="Cannot parse"):
            load_topology(path)
