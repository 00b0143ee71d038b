"""
Modification site labels and residue distances.

Site labels look like ``S473`` or ``Y1068``: an optional residue letter
followed by the position. Proximity compares positions only, so ``S473`` and
``T475`` are two residues apart. Labels without a position only match an
identical label.
"""

import re
from typing import Iterable, Optional

_SITE_PATTERN = re.compile(r"^\s*[A-Za-z]*(\d+)\s*$")


def parse_site_position(label: str) -> Optional[int]:
    """Residue position of a site label, or None when it has none."""
    if not label:
        return None
    match = _SITE_PATTERN.match(label)
    if match is None:
        return None
    return int(match.group(1))


def site_distance(measured: Iterable[str], annotated: Iterable[str]) -> Optional[int]:
    """
    Smallest residue distance between two groups of site labels.

    Parameters
    ----------
    measured : iterable of str
        Site labels of a measurement.
    annotated : iterable of str
        Site labels annotated on a relation or in a site-effect table.

    Returns
    -------
    int or None
        0 for an identical label, otherwise the smallest position difference;
        None when no pair of labels is comparable.
    """
    measured = [s.strip() for s in measured if s and s.strip()]
    annotated = [s.strip() for s in annotated if s and s.strip()]

    if set(measured) & set(annotated):
        return 0

    best = None
    for m in measured:
        m_pos = parse_site_position(m)
        if m_pos is None:
            continue
        for a in annotated:
            a_pos = parse_site_position(a)
            if a_pos is None:
                continue
            d = abs(m_pos - a_pos)
            if best is None or d < best:
                best = d
    return best


def sites_match(
    measured: Iterable[str],
    annotated: Iterable[str],
    proximity_threshold: int = 0,
) -> bool:
    """True if any measured site is within ``proximity_threshold`` residues."""
    d = site_distance(measured, annotated)
    return d is not None and d <= proximity_threshold
