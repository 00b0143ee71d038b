"""
Signed, directed relations of the reference network.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..data.measurements import Measurement
from ..data.rows import Effect


class RelationType(Enum):
    """
    Relation types with their sign and whether they act on specific sites.

    Phosphorylation-type relations change the level of target sites;
    expression-type relations change the total amount of the target protein.
    """

    UPREGULATES_EXPRESSION = ("upregulates-expression", 1, False)
    DOWNREGULATES_EXPRESSION = ("downregulates-expression", -1, False)
    PHOSPHORYLATES = ("phosphorylates", 1, True)
    DEPHOSPHORYLATES = ("dephosphorylates", -1, True)

    def __init__(self, label: str, sign: int, site_specific: bool):
        self.label = label
        self.sign = sign
        self.site_specific = site_specific

    @classmethod
    def from_label(cls, label: str) -> Optional["RelationType"]:
        """Relation type for a label, or None if unknown."""
        label = label.strip().lower()
        for rel_type in cls:
            if rel_type.label == label:
                return rel_type
        return None


@dataclass(frozen=True)
class Relation:
    """
    A signed, directed edge between two genes.

    Attributes
    ----------
    source : str
        Upstream gene symbol.
    target : str
        Downstream gene symbol.
    type : RelationType
        Relation type, which carries the sign.
    sites : tuple of str
        Target sites the relation acts on.
    source_sites : tuple of str
        Source sites the relation depends on, if annotated.
    source_site_effect : Effect
        Effect of ``source_sites`` on source activity.
    mediators : tuple of str
        Supporting references; not part of the relation identity.
    """

    source: str
    target: str
    type: RelationType
    sites: Tuple[str, ...] = ()
    source_sites: Tuple[str, ...] = ()
    source_site_effect: Effect = Effect.UNKNOWN
    mediators: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def sign(self) -> int:
        return self.type.sign

    @property
    def key(self) -> Tuple[str, str, str]:
        """Identity used for ordering and de-duplication."""
        return (self.source, self.type.label, self.target)

    @property
    def sort_key(self) -> Tuple:
        """Total order over relations, stable across runs."""
        return (
            self.source or "",
            self.type.label,
            self.target or "",
            self.sites,
            self.source_sites,
            self.source_site_effect.value,
        )

    @property
    def is_valid(self) -> bool:
        return bool(self.source and self.source.strip() and self.target and self.target.strip())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "type": self.type.label,
            "target": self.target,
            "sites": list(self.sites),
            "source_sites": list(self.source_sites),
            "source_site_effect": self.source_site_effect.name.lower(),
            "mediators": list(self.mediators),
        }

    def __str__(self):
        sites = f" [{';'.join(self.sites)}]" if self.sites else ""
        return f"{self.source} {self.type.label} {self.target}{sites}"


@dataclass(frozen=True)
class DecoratedRelation:
    """A relation together with the measurements of both endpoints."""

    relation: Relation
    source_data: Tuple[Measurement, ...] = field(default=())
    target_data: Tuple[Measurement, ...] = field(default=())

    @property
    def key(self) -> Tuple[str, str, str]:
        return self.relation.key
