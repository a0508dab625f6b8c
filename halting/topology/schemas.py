"""
Pydantic schemas for topology documents.

A topology document lists network nodes with their quorum sets. Both the
long field names and the short Stellar-style keys (``node``, ``t``, ``v``)
are accepted.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from halting.graph.models import NetworkNode, QuorumSet


class QuorumSetSchema(BaseModel):
    """Quorum set: threshold over peer ids and nested quorum sets."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    threshold: int = Field(..., ge=0, alias="t", description="Entries that must agree")
    validators: list[Union[str, "QuorumSetSchema"]] = Field(
        default_factory=list,
        alias="v",
        description="Peer ids and nested quorum sets",
    )

    def to_quorum_set(self) -> QuorumSet:
        """Convert to the analysis input type."""
        return QuorumSet(
            threshold=self.threshold,
            validators=[
                v if isinstance(v, str) else v.to_quorum_set() for v in self.validators
            ],
        )

    def referenced_ids(self) -> list[str]:
        """Get every peer id in this set and its nested sets, in order."""
        ids: list[str] = []
        for validator in self.validators:
            if isinstance(validator, str):
                ids.append(validator)
            else:
                ids.extend(validator.referenced_ids())
        return ids


QuorumSetSchema.model_rebuild()


def _empty_quorum_set() -> QuorumSetSchema:
    return QuorumSetSchema(threshold=0)


class NodeSchema(BaseModel):
    """Network node entry in a topology document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1, alias="node", description="Unique node id")
    qset: QuorumSetSchema = Field(default_factory=_empty_quorum_set)
    distance: Optional[int] = Field(
        default=None,
        ge=0,
        description="Hops from the home node (0 for home)",
    )


class TopologyDocument(BaseModel):
    """Topology document: optional home id plus the node list."""

    model_config = ConfigDict(extra="ignore")

    home: Optional[str] = Field(default=None, description="Home node id")
    nodes: list[NodeSchema] = Field(default_factory=list)

    def to_network_nodes(self, distances: dict[str, int]) -> list[NetworkNode]:
        """
        Convert nodes to analysis input.

        Args:
            distances: Distance per node id

        Returns:
            NetworkNode list in document order
        """
        return [
            NetworkNode(
                node=n.id,
                qset=n.qset.to_quorum_set(),
                distance=distances[n.id],
            )
            for n in self.nodes
        ]
