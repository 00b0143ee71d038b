"""
Color helpers for the format file.

Values map onto a blue - white - red scale; effects and relation signs map
onto fixed colors. Colors are written as ``"R G B"`` strings.
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from ..data.rows import Effect


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
DECREASE_COLOR = (40, 80, 255)
INCREASE_COLOR = (255, 40, 40)

ACTIVATING_BORDER = (0, 180, 20)
INHIBITING_BORDER = (180, 0, 20)

POSITIVE_EDGE_COLOR = (0, 130, 0)
NEGATIVE_EDGE_COLOR = (180, 0, 0)


def format_rgb(rgb: Tuple[int, int, int]) -> str:
    return " ".join(str(int(c)) for c in rgb)


def effect_color(effect: Effect) -> str:
    """Border color showing the effect of a site on protein activity."""
    if effect == Effect.ACTIVATING:
        return format_rgb(ACTIVATING_BORDER)
    if effect == Effect.INHIBITING:
        return format_rgb(INHIBITING_BORDER)
    return format_rgb(BLACK)


def sign_color(sign: int) -> str:
    return format_rgb(POSITIVE_EDGE_COLOR if sign > 0 else NEGATIVE_EDGE_COLOR)


class ValueColorScale:
    """
    Maps values onto the blue - white - red scale.

    Parameters
    ----------
    max_value : float
        Absolute value mapped to full saturation; larger values are clipped.
    """

    def __init__(self, max_value: float):
        if not np.isfinite(max_value) or max_value <= 0:
            max_value = 1.0
        self.max_value = float(max_value)

        self._anchors = np.array([-self.max_value, 0.0, self.max_value])
        self._channels = np.array([DECREASE_COLOR, WHITE, INCREASE_COLOR], dtype=float).T

    @classmethod
    def from_values(
        cls,
        values: Iterable[float],
        max_value: Optional[float] = None,
    ) -> "ValueColorScale":
        """Scale saturating at ``max_value`` or at the largest absolute value."""
        if max_value is not None:
            return cls(max_value)

        arr = np.abs(np.asarray(list(values), dtype=float))
        arr = arr[np.isfinite(arr)]
        return cls(float(arr.max()) if arr.size else 1.0)

    def rgb(self, value: Optional[float]) -> Tuple[int, int, int]:
        if value is None or not np.isfinite(value):
            return WHITE
        return tuple(
            int(round(np.interp(value, self._anchors, channel)))
            for channel in self._channels
        )

    def color(self, value: Optional[float]) -> str:
        return format_rgb(self.rgb(value))
