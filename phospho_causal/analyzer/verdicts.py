"""
Verdicts of the causality search.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..data.measurements import Measurement
from ..network.relations import Relation


class VerdictStatus(str, Enum):
    """Outcome of evaluating one relation against the data."""

    CAUSAL_COMPATIBLE = "causal-compatible"
    CONFLICTING = "conflicting"
    INCONCLUSIVE = "inconclusive"


# Reasons recorded on inconclusive verdicts
NO_SOURCE_DATA = "no_source_data"
NO_TARGET_DATA = "no_target_data"
MODE_MISMATCH = "mode_mismatch"


@dataclass(frozen=True)
class Evidence:
    """
    A source/target measurement pair supporting a verdict.

    Attributes
    ----------
    source : Measurement
        Measurement on the relation source.
    target : Measurement
        Measurement on the relation target.
    source_effect : int
        Sign the source measurement contributes to source activity.
    source_distance, target_distance : float
        Residue distance to the annotated sites; ``inf`` when the
        measurement did not match an annotated site.
    ambiguous : bool
        The source site effect was unknown and assumed activating.
    """

    source: Measurement
    target: Measurement
    source_effect: int = 1
    source_distance: float = 0
    target_distance: float = 0
    ambiguous: bool = False

    @property
    def rank_key(self) -> Tuple:
        """Closest sites first, known effects before ambiguous ones, then ids."""
        return (
            self.target_distance,
            self.source_distance,
            self.ambiguous,
            self.source.id,
            self.target.id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.id,
            "target": self.target.id,
            "source_effect": self.source_effect,
            "source_distance": None if math.isinf(self.source_distance) else self.source_distance,
            "target_distance": None if math.isinf(self.target_distance) else self.target_distance,
            "ambiguous": self.ambiguous,
        }


@dataclass(frozen=True)
class Verdict:
    """
    Classification of one relation.

    Attributes
    ----------
    relation : Relation
        Evaluated relation.
    status : VerdictStatus
        Causal-compatible, conflicting or inconclusive.
    evidence : Evidence, optional
        Selected measurement pair; None for inconclusive verdicts.
    n_supporting : int
        Number of measurement pairs that qualified for the status.
    reason : str, optional
        Why the verdict is inconclusive.
    """

    relation: Relation
    status: VerdictStatus
    evidence: Optional[Evidence] = None
    n_supporting: int = 0
    reason: Optional[str] = None

    @property
    def is_conclusive(self) -> bool:
        return self.status != VerdictStatus.INCONCLUSIVE

    @property
    def source_data(self) -> Optional[Measurement]:
        return self.evidence.source if self.evidence else None

    @property
    def target_data(self) -> Optional[Measurement]:
        return self.evidence.target if self.evidence else None

    @property
    def ambiguous(self) -> bool:
        return bool(self.evidence and self.evidence.ambiguous)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "relation": self.relation.to_dict(),
            "status": self.status.value,
            "evidence": self.evidence.to_dict() if self.evidence else None,
            "n_supporting": self.n_supporting,
            "reason": self.reason,
        }


@dataclass
class SearchResult:
    """
    Verdicts that survived a search, with bookkeeping counters.

    Attributes
    ----------
    verdicts : list of Verdict
        Conclusive verdicts sorted by relation.
    n_relations : int
        Relations examined.
    n_malformed : int
        Relations skipped for a missing endpoint gene.
    n_inconclusive : int
        Relations without changed data on an endpoint.
    n_discarded : int
        Relations whose data disagree with the search mode.
    """

    verdicts: List[Verdict] = field(default_factory=list)
    n_relations: int = 0
    n_malformed: int = 0
    n_inconclusive: int = 0
    n_discarded: int = 0

    def __iter__(self) -> Iterator[Verdict]:
        return iter(self.verdicts)

    def __len__(self) -> int:
        return len(self.verdicts)

    @property
    def relations(self) -> List[Relation]:
        return [v.relation for v in self.verdicts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdicts": [v.to_dict() for v in self.verdicts],
            "statistics": {
                "n_relations": self.n_relations,
                "n_malformed": self.n_malformed,
                "n_inconclusive": self.n_inconclusive,
                "n_discarded": self.n_discarded,
                "n_verdicts": len(self.verdicts),
            },
        }
