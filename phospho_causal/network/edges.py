"""
Edge Definitions for Result Graphs

An edge is one relation that survived the causality search, drawn between
two genes or between the two measurements selected as its evidence.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from .nodes import BaseNode

if TYPE_CHECKING:
    from ..analyzer.verdicts import Verdict


@dataclass(eq=False)
class GraphEdge:
    """
    Represents an edge in a result graph.

    Attributes
    ----------
    source : BaseNode
        Source node.
    target : BaseNode
        Target node.
    interaction : str
        Interaction label written to the SIF file (the relation type).
    sign : int
        Relation sign, +1 or -1.
    verdicts : list of Verdict
        Verdicts drawn by this edge; more than one only when several
        relations collapse onto the same measurement pair.
    attributes : dict
        Visual attributes written to the format file.
    """

    source: BaseNode
    target: BaseNode
    interaction: str
    sign: int = 1
    verdicts: List["Verdict"] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> str:
        """Edge identifier shared by the SIF and format files."""
        return f"{self.source.id} {self.interaction} {self.target.id}"

    @property
    def ambiguous(self) -> bool:
        """True when every drawn verdict rests on an unknown site effect."""
        return bool(self.verdicts) and all(v.ambiguous for v in self.verdicts)

    def to_sif(self) -> str:
        return f"{self.source.id}\t{self.interaction}\t{self.target.id}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source.id,
            "target": self.target.id,
            "source_type": self.source.type,
            "target_type": self.target.type,
            "interaction": self.interaction,
            "sign": self.sign,
            "ambiguous": self.ambiguous,
            "relations": [str(v.relation) for v in self.verdicts],
            "attributes": self.attributes,
        }

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if isinstance(other, GraphEdge):
            return self.key == other.key
        return False
