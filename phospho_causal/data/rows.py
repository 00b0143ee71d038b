"""
Raw measurement rows as read from the platform and value files.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple


class Effect(Enum):
    """Known effect of a modification site on the activity of its protein."""

    ACTIVATING = 1
    INHIBITING = -1
    UNKNOWN = 0

    @property
    def sign(self) -> int:
        return self.value

    @classmethod
    def parse(cls, code: Optional[str]) -> "Effect":
        """
        Parse an effect code.

        ``+``, ``c``, ``1`` and ``activating`` mean activating; ``-``, ``i``,
        ``-1`` and ``inhibiting`` mean inhibiting; anything else is unknown.
        """
        if code is None:
            return cls.UNKNOWN
        code = str(code).strip().lower()
        if code in ACTIVATING_CODES:
            return cls.ACTIVATING
        if code in INHIBITING_CODES:
            return cls.INHIBITING
        return cls.UNKNOWN


ACTIVATING_CODES = frozenset({"+", "c", "1", "activating"})
INHIBITING_CODES = frozenset({"-", "i", "-1", "inhibiting"})

# Effect column value marking a row that measures protein activity
ACTIVITY_CODE = "a"


@dataclass(frozen=True)
class MeasurementRow:
    """
    One annotated row of a proteomics platform.

    Attributes
    ----------
    id : str
        Row (antibody) identifier.
    symbols : tuple of str
        Gene symbols the row measures.
    sites : tuple of tuple of str
        Site labels per symbol, aligned with ``symbols``. Empty for total
        protein rows.
    effect : Effect
        Effect of the measured sites on protein activity.
    values : tuple of float
        Measured values.
    activity : bool
        True if the row measures protein activity.
    """

    id: str
    symbols: Tuple[str, ...] = ()
    sites: Tuple[Tuple[str, ...], ...] = ()
    effect: Effect = Effect.UNKNOWN
    values: Tuple[float, ...] = ()
    activity: bool = False

    def sites_of(self, gene: str) -> Tuple[str, ...]:
        """Site labels measured on ``gene``."""
        for symbol, group in zip(self.symbols, self.sites):
            if symbol == gene:
                return group
        return ()

    @property
    def is_phospho(self) -> bool:
        return any(self.sites)

    def with_values(self, values: Iterable[float]) -> "MeasurementRow":
        return replace(self, values=tuple(float(v) for v in values))

    def with_effect(self, effect: Effect) -> "MeasurementRow":
        return replace(self, effect=effect)
