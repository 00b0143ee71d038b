"""
Change detectors.

A change detector maps a measurement value to a change status. Detectors
are bound per measurement kind by :class:`~phospho_causal.data.loader.ProteomicsLoader`.
"""

import math
from abc import ABC, abstractmethod

from .measurements import ChangeStatus, Measurement


class ChangeDetector(ABC):
    """Policy converting a measurement into a change status."""

    @abstractmethod
    def classify(self, value: float) -> ChangeStatus:
        """Classify a single value."""

    def get_change_status(self, measurement: Measurement) -> ChangeStatus:
        return self.classify(measurement.value)


class ThresholdDetector(ChangeDetector):
    """
    Detects a change when the value reaches a fixed threshold.

    ``value >= threshold`` is an increase, ``value <= -threshold`` a decrease,
    anything in between (and NaN) is unchanged.

    Parameters
    ----------
    threshold : float
        Non-negative significance threshold.
    """

    def __init__(self, threshold: float):
        if threshold < 0:
            raise ValueError(f"Threshold must be non-negative, got {threshold}")
        self.threshold = float(threshold)

    def classify(self, value: float) -> ChangeStatus:
        if value is None or math.isnan(value):
            return ChangeStatus.UNCHANGED
        if value >= self.threshold and value != 0:
            return ChangeStatus.INCREASED
        if value <= -self.threshold and value != 0:
            return ChangeStatus.DECREASED
        return ChangeStatus.UNCHANGED

    def __repr__(self):
        return f"ThresholdDetector(threshold={self.threshold})"
