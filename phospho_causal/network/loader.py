"""
Signed network provider.

Reads a signed, directed network from a headerless tab-separated file::

    source  type              target  [mediators]  [sites]  [source_sites]  [source_effect]
    AKT1    phosphorylates    GSK3B   ...          S9
    MYC     upregulates-expression  CCND1
    PDPK1   phosphorylates    AKT1    ...          T308     S241            +

Target and source sites are separated by ``;``. The source site effect uses
the platform effect codes. Mediators are kept for reference only. Lines
sharing source, type and target are merged, joining their sites and
mediators.
"""

from pathlib import Path
from typing import Dict, Set, Tuple

from ..data.rows import Effect
from ..utils.io import read_table
from ..utils.logging import get_logger
from .relations import Relation, RelationType


logger = get_logger("network")

NETWORK_COLUMNS = [
    "source",
    "type",
    "target",
    "mediators",
    "sites",
    "source_sites",
    "source_effect",
]


class NetworkLoader:
    """
    Loads relations from a signed network file.

    Parameters
    ----------
    path : str or Path
        Network file, optionally gzip compressed (``.gz``).

    Attributes
    ----------
    skipped_lines : int
        Lines dropped for an unknown relation type or missing gene.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.skipped_lines = 0

    def load(self) -> Set[Relation]:
        """
        Read the network.

        Returns
        -------
        set of Relation
            Relations, one per (source, type, target).

        Raises
        ------
        FileNotFoundError
            If the network file does not exist.
        ProteomicsFileError
            If the file cannot be decoded or parsed.
        """
        df = read_table(self.path, comment="#", names=NETWORK_COLUMNS)

        self.skipped_lines = 0
        merged: Dict[Tuple[str, RelationType, str], Dict[str, dict]] = {}

        for row in df.itertuples(index=False):
            source, target = row.source.strip(), row.target.strip()
            rel_type = RelationType.from_label(row.type)
            if rel_type is None:
                # Header lines land here as well
                self.skipped_lines += 1
                continue
            if not source or not target:
                self.skipped_lines += 1
                continue

            entry = merged.setdefault(
                (source, rel_type, target),
                {"sites": {}, "mediators": {}, "source_sites": {}, "effects": set()},
            )
            _add_items(entry["sites"], row.sites)
            _add_items(entry["mediators"], row.mediators)
            _add_items(entry["source_sites"], row.source_sites)
            if row.source_sites.strip():
                entry["effects"].add(Effect.parse(row.source_effect))

        relations = {
            Relation(
                source=s,
                target=t,
                type=rt,
                sites=tuple(sorted(entry["sites"])),
                source_sites=tuple(sorted(entry["source_sites"])),
                source_site_effect=_merged_effect(entry["effects"]),
                mediators=tuple(sorted(entry["mediators"])),
            )
            for (s, rt, t), entry in merged.items()
        }

        if self.skipped_lines:
            logger.warning(f"Skipped {self.skipped_lines} unusable lines in {self.path}")
        logger.info(f"Loaded {len(relations)} signed relations from {self.path}")
        return relations


def _add_items(items: Dict[str, None], cell: str) -> None:
    for item in cell.split(";"):
        if item.strip():
            items[item.strip()] = None


def _merged_effect(effects: Set[Effect]) -> Effect:
    """Effect agreed on by all lines, unknown when they disagree."""
    if len(effects) == 1:
        return next(iter(effects))
    return Effect.UNKNOWN
