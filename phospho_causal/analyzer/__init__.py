"""
Causality analysis

Evaluates signed network relations against proteomic measurements:
relation sign × source change × site effect must (causal search) or must
not (conflict search) agree with the target change.
"""

from .verdicts import Evidence, SearchResult, Verdict, VerdictStatus
from .searcher import CausalitySearcher

__all__ = [
    "CausalitySearcher",
    "Evidence",
    "SearchResult",
    "Verdict",
    "VerdictStatus",
]
