"""
Measurement Loader

Turns raw rows into measurements, binds change detectors per measurement
kind and joins measurements onto the endpoints of network relations.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from ..network.relations import DecoratedRelation, Relation
from ..utils.logging import get_logger
from .detectors import ChangeDetector
from .measurements import Measurement, MeasurementKind
from .rows import MeasurementRow


logger = get_logger("loader")


class ProteomicsLoader:
    """
    Builds measurements from rows and decorates relations with them.

    Parameters
    ----------
    rows : iterable of MeasurementRow
        Rows produced by the file reader.

    Attributes
    ----------
    measurements : list of Measurement
        One measurement per valid row, in row order.
    skipped_rows : int
        Rows dropped for lacking an identifier or gene symbols.
    """

    def __init__(self, rows: Iterable[MeasurementRow]):
        self.measurements: List[Measurement] = []
        self.skipped_rows = 0
        self._detectors: Dict[MeasurementKind, ChangeDetector] = {}
        self._by_gene: Dict[str, List[Measurement]] = defaultdict(list)

        seen_ids = set()
        for row in rows:
            symbols = [s for s in row.symbols if s and s.strip()]
            if not row.id or not row.id.strip() or not symbols:
                self.skipped_rows += 1
                continue
            if row.id in seen_ids:
                logger.warning(f"Duplicate row id {row.id}, keeping the first occurrence")
                self.skipped_rows += 1
                continue
            seen_ids.add(row.id)

            measurement = Measurement.from_row(row)
            self.measurements.append(measurement)
            for symbol in dict.fromkeys(symbols):
                self._by_gene[symbol].append(measurement)

        for gene_data in self._by_gene.values():
            gene_data.sort(key=lambda m: m.id)

        if self.skipped_rows:
            logger.warning(f"Skipped {self.skipped_rows} rows without id, gene symbol or with a duplicate id")
        logger.info(
            f"Loaded {len(self.measurements)} measurements for {len(self._by_gene)} genes"
        )

    def associate_change_detector(
        self,
        detector: ChangeDetector,
        kind: MeasurementKind,
    ) -> None:
        """
        Bind a change detector to every measurement of ``kind``.

        A later call for the same kind replaces the earlier detector.
        """
        kind = MeasurementKind(kind)
        if kind in self._detectors:
            logger.debug(f"Replacing change detector for {kind.value} data")
        self._detectors[kind] = detector

        for measurement in self.measurements:
            if measurement.kind == kind:
                measurement.detector = detector

    def get_detector(self, kind: MeasurementKind) -> Optional[ChangeDetector]:
        return self._detectors.get(MeasurementKind(kind))

    def get_measurements(self, gene: str) -> Tuple[Measurement, ...]:
        """Measurements of a gene, sorted by id."""
        return tuple(self._by_gene.get(gene, ()))

    @property
    def genes(self) -> List[str]:
        return sorted(self._by_gene)

    def decorate_relations(self, relations: Iterable[Relation]) -> List[DecoratedRelation]:
        """
        Join measurements onto relation endpoints.

        The relations are left untouched; new decorated values are returned,
        sorted by relation key. Endpoints without data get empty tuples.

        Parameters
        ----------
        relations : iterable of Relation
            Network relations.

        Returns
        -------
        list of DecoratedRelation
            Decorated relations.
        """
        decorated = [
            DecoratedRelation(
                relation=relation,
                source_data=self.get_measurements(relation.source),
                target_data=self.get_measurements(relation.target),
            )
            for relation in relations
        ]
        decorated.sort(key=lambda d: d.relation.sort_key)

        n_with_data = sum(1 for d in decorated if d.source_data and d.target_data)
        logger.info(
            f"Decorated {len(decorated)} relations, {n_with_data} with data on both ends"
        )
        return decorated

