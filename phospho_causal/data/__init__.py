"""
Proteomic measurements: raw rows, typed measurements and change detection.

The loader (``phospho_causal.data.loader``) depends on the network model and
is imported from its module directly.
"""

from .rows import Effect, MeasurementRow
from .measurements import ChangeStatus, Measurement, MeasurementKind
from .detectors import ChangeDetector, ThresholdDetector
from .sites import parse_site_position, site_distance, sites_match
from .reader import read_annotation, add_values
from .site_effects import SiteEffectDatabase

__all__ = [
    "Effect",
    "MeasurementRow",
    "ChangeStatus",
    "Measurement",
    "MeasurementKind",
    "ChangeDetector",
    "ThresholdDetector",
    "parse_site_position",
    "site_distance",
    "sites_match",
    "read_annotation",
    "add_values",
    "SiteEffectDatabase",
]
