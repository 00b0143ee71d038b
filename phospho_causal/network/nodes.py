"""
Node Definitions for Result Graphs

Two node types, one per projection:
1. Gene - all measurements of a gene collapsed into one node
2. Measurement - one node per antibody / site measurement
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..data.measurements import Measurement


@dataclass
class BaseNode:
    """Base class for all nodes."""

    id: str = ""
    type: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "type": self.type,
            "attributes": self.attributes,
        }

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, BaseNode):
            return self.id == other.id
        return False


@dataclass(eq=False)
class GeneNode(BaseNode):
    """
    Gene node of a gene-centric graph.

    Attributes
    ----------
    symbol : str
        Gene symbol, also the node id.
    total_protein_value : float, optional
        Aggregated total protein change drawn as the node background.
    site_data : list of Measurement
        Measurements drawn as decorations on the node.
    """

    type: str = "gene"
    symbol: str = ""
    total_protein_value: Optional[float] = None
    site_data: List[Measurement] = field(default_factory=list)

    def __post_init__(self):
        if not self.id:
            self.id = self.symbol
        if not self.symbol:
            self.symbol = self.id

    def add_site_data(self, measurement: Measurement) -> None:
        if measurement not in self.site_data:
            self.site_data.append(measurement)
            self.site_data.sort(key=lambda m: m.id)


@dataclass(eq=False)
class MeasurementNode(BaseNode):
    """
    Measurement node of a data-centric graph.

    Attributes
    ----------
    measurement : Measurement
        The measurement the node stands for; its id is the node id.
    """

    type: str = "measurement"
    measurement: Optional[Measurement] = None

    def __post_init__(self):
        if not self.id and self.measurement is not None:
            self.id = self.measurement.id

