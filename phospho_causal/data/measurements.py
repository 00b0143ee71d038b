"""
Typed measurements derived from raw rows.

A measurement is a protein-level or activity-level observation. Its change
status is computed on every access from the change detector bound to its
kind, so re-binding a detector with another threshold re-classifies every
measurement of that kind.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import numpy as np

from .rows import Effect, MeasurementRow

if TYPE_CHECKING:
    from .detectors import ChangeDetector


class MeasurementKind(str, Enum):
    """Kind tag used to bind change detectors."""

    PROTEIN = "protein"
    ACTIVITY = "activity"


class ChangeStatus(Enum):
    """Classified change of a measurement."""

    INCREASED = 1
    DECREASED = -1
    UNCHANGED = 0

    @property
    def sign(self) -> int:
        return self.value


@dataclass(eq=False)
class Measurement:
    """
    A measured entity with its bound change detector.

    Attributes
    ----------
    row : MeasurementRow
        Source row.
    kind : MeasurementKind
        Protein-level or activity-level.
    detector : ChangeDetector, optional
        Detector bound to ``kind``; without one the status is UNCHANGED.
    """

    row: MeasurementRow
    kind: MeasurementKind
    detector: Optional["ChangeDetector"] = field(default=None, repr=False)

    @classmethod
    def from_row(cls, row: MeasurementRow) -> "Measurement":
        kind = MeasurementKind.ACTIVITY if row.activity else MeasurementKind.PROTEIN
        return cls(row=row, kind=kind)

    @property
    def id(self) -> str:
        return self.row.id

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self.row.symbols

    @property
    def effect(self) -> Effect:
        return self.row.effect

    def sites_of(self, gene: str) -> Tuple[str, ...]:
        return self.row.sites_of(gene)

    @property
    def is_phospho(self) -> bool:
        return self.kind == MeasurementKind.PROTEIN and self.row.is_phospho

    @property
    def is_total_protein(self) -> bool:
        return self.kind == MeasurementKind.PROTEIN and not self.row.is_phospho

    @property
    def value(self) -> float:
        """Mean of the finite values, NaN when there is none."""
        values = np.asarray(self.row.values, dtype=float)
        finite = values[np.isfinite(values)]
        if finite.size == 0:
            return float("nan")
        return float(finite.mean())

    @property
    def change_status(self) -> ChangeStatus:
        if self.detector is None:
            return ChangeStatus.UNCHANGED
        return self.detector.get_change_status(self)

    @property
    def change_sign(self) -> int:
        return self.change_status.sign

    @property
    def is_changed(self) -> bool:
        return self.change_status != ChangeStatus.UNCHANGED

    def label(self) -> str:
        """Short human-readable description, e.g. ``AKT1 S473``."""
        parts = [
            f"{symbol} {'|'.join(self.sites_of(symbol))}".strip()
            for symbol in self.symbols
        ]
        return ", ".join(parts) if parts else self.id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "symbols": list(self.symbols),
            "sites": {s: list(self.sites_of(s)) for s in self.symbols if self.sites_of(s)},
            "effect": self.effect.name.lower(),
            "value": self.value,
            "status": self.change_status.name.lower(),
        }

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Measurement):
            return self.id == other.id
        return False
