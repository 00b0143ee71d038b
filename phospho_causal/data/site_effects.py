"""
Site-effect table used to fill unknown site effects.

The table is tab-separated with ``gene``, ``site`` and ``effect`` columns,
effects coded as in the platform file.
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..utils.io import read_table
from ..utils.logging import get_logger
from .rows import Effect, MeasurementRow
from .sites import site_distance


logger = get_logger("site_effects")


class SiteEffectDatabase:
    """
    Known effects of modification sites on protein activity.

    Parameters
    ----------
    effects : dict, optional
        Mapping ``gene -> {site: Effect}``.
    """

    def __init__(self, effects: Optional[Dict[str, Dict[str, Effect]]] = None):
        self.effects: Dict[str, Dict[str, Effect]] = defaultdict(dict)
        for gene, sites in (effects or {}).items():
            for site, effect in sites.items():
                self.add(gene, site, effect)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        gene_column: str = "gene",
        site_column: str = "site",
        effect_column: str = "effect",
    ) -> "SiteEffectDatabase":
        df = read_table(path, required_columns=[gene_column, site_column, effect_column])

        db = cls()
        for record in df.to_dict(orient="records"):
            db.add(record[gene_column], record[site_column], Effect.parse(record[effect_column]))

        logger.info(f"Loaded {db.n_sites} site effects from {path}")
        return db

    def add(self, gene: str, site: str, effect: Effect) -> None:
        gene, site = gene.strip(), site.strip()
        if gene and site and effect != Effect.UNKNOWN:
            self.effects[gene][site] = effect

    @property
    def n_sites(self) -> int:
        return sum(len(sites) for sites in self.effects.values())

    def get_effect(
        self,
        gene: str,
        sites: Sequence[str],
        proximity_threshold: int = 0,
    ) -> Effect:
        """
        Effect of the annotated site nearest to any of ``sites``.

        Equidistant annotated sites with different effects give UNKNOWN.
        """
        known = self.effects.get(gene)
        if not known or not sites:
            return Effect.UNKNOWN

        best: Optional[int] = None
        found = set()
        for site, effect in known.items():
            d = site_distance(sites, [site])
            if d is None or d > proximity_threshold:
                continue
            if best is None or d < best:
                best, found = d, {effect}
            elif d == best:
                found.add(effect)

        if len(found) == 1:
            return found.pop()
        return Effect.UNKNOWN

    def fill_in_missing_effect(
        self,
        rows: Sequence[MeasurementRow],
        proximity_threshold: int = 0,
    ) -> List[MeasurementRow]:
        """
        Return rows where unknown site effects are filled from the table.

        A multi-gene row whose genes resolve to different effects keeps its
        unknown effect.

        Parameters
        ----------
        rows : sequence of MeasurementRow
            Rows to fill.
        proximity_threshold : int
            Residue distance tolerated between measured and annotated sites.

        Returns
        -------
        list of MeasurementRow
            Rows, with effects filled where possible.
        """
        filled = 0
        result = []
        for row in rows:
            if row.effect != Effect.UNKNOWN or row.activity or not row.is_phospho:
                result.append(row)
                continue

            effects = {
                self.get_effect(gene, row.sites_of(gene), proximity_threshold)
                for gene in row.symbols
                if row.sites_of(gene)
            }
            effects.discard(Effect.UNKNOWN)

            if len(effects) == 1:
                result.append(row.with_effect(effects.pop()))
                filled += 1
            else:
                result.append(row)

        logger.info(f"Filled in site effect for {filled} rows")
        return result

