"""
Causality Searcher

Decides, for every decorated relation, whether the measurements on its two
endpoints agree with the relation sign (causal-compatible), disagree with it
(conflicting), or say nothing (inconclusive).

SIGN RULE
=========

For a source measurement with change sign D_s acting on source activity with
effect E (+1 for total protein and activity data, the site effect for
phosphoprotein data) and a relation of sign S, the expected target change is

    expected = S * E * D_s

A causal search keeps pairs where the observed target change equals the
expected one; a conflict search keeps the pairs where it does not.

SITE MATCHING
=============

When a relation annotates sites on an endpoint, a measurement matches if one
of its sites lies within ``site_proximity_threshold`` residues of an annotated
site. With ``force_site_matching`` only matching measurements count. Without
it every measurement of the endpoint counts, and matching ones are preferred
when choosing the evidence, so widening the tolerance never removes a
relation from the result.
"""

import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..data.measurements import Measurement, MeasurementKind
from ..data.rows import Effect
from ..data.sites import site_distance
from ..network.relations import DecoratedRelation, Relation
from ..utils.logging import ProgressLogger, get_logger
from .verdicts import (
    MODE_MISMATCH,
    NO_SOURCE_DATA,
    NO_TARGET_DATA,
    Evidence,
    SearchResult,
    Verdict,
    VerdictStatus,
)


logger = get_logger("searcher")

UNMATCHED = math.inf


@dataclass(frozen=True)
class _SourceCandidate:
    measurement: Measurement
    effect: int
    distance: float
    ambiguous: bool


@dataclass(frozen=True)
class _TargetCandidate:
    measurement: Measurement
    distance: float


class CausalitySearcher:
    """
    Searches causal or conflicting relations.

    Parameters
    ----------
    causal : bool
        True for a causal (compatible) search, False for a conflict search.
    force_site_matching : bool
        Only accept measurements whose sites match the sites annotated on
        the relation.
    site_proximity_threshold : int
        Residue distance tolerated when matching sites.
    add_in_unknown_signs : bool
        Let phosphoprotein measurements with unknown site effect act as
        activating, flagging the evidence as ambiguous.
    n_workers : int
        Worker threads used by :meth:`run`.
    """

    def __init__(
        self,
        causal: bool = True,
        force_site_matching: bool = False,
        site_proximity_threshold: int = 0,
        add_in_unknown_signs: bool = False,
        n_workers: int = 1,
    ):
        if site_proximity_threshold < 0:
            raise ValueError("site_proximity_threshold must be non-negative")
        if n_workers < 1:
            raise ValueError("n_workers must be at least 1")

        self.causal = causal
        self.force_site_matching = force_site_matching
        self.site_proximity_threshold = site_proximity_threshold
        self.add_in_unknown_signs = add_in_unknown_signs
        self.n_workers = n_workers

    @property
    def target_status(self) -> VerdictStatus:
        return VerdictStatus.CAUSAL_COMPATIBLE if self.causal else VerdictStatus.CONFLICTING

    def run(self, relations: Iterable[DecoratedRelation]) -> SearchResult:
        """
        Evaluate every relation and keep the conclusive verdicts.

        Parameters
        ----------
        relations : iterable of DecoratedRelation
            Decorated network relations.

        Returns
        -------
        SearchResult
            Verdicts sorted by relation, with counters.
        """
        relations = list(relations)
        result = SearchResult(n_relations=len(relations))

        valid = []
        for decorated in relations:
            if decorated.relation.is_valid:
                valid.append(decorated)
            else:
                result.n_malformed += 1

        if result.n_malformed:
            logger.warning(f"Skipped {result.n_malformed} relations missing an endpoint gene")

        mode = "causal" if self.causal else "conflicting"
        logger.info(
            f"Searching {mode} relations among {len(valid)} relations "
            f"(force_site_matching={self.force_site_matching}, "
            f"site_proximity_threshold={self.site_proximity_threshold}, "
            f"add_in_unknown_signs={self.add_in_unknown_signs})"
        )

        verdicts = self._evaluate_all(valid)
        verdicts.sort(key=lambda v: v.relation.sort_key)

        for verdict in verdicts:
            if verdict.is_conclusive:
                result.verdicts.append(verdict)
            elif verdict.reason == MODE_MISMATCH:
                result.n_discarded += 1
            else:
                result.n_inconclusive += 1

        logger.info(
            f"Found {len(result.verdicts)} {mode} relations "
            f"({result.n_inconclusive} inconclusive, {result.n_discarded} discarded)"
        )
        return result

    def _evaluate_all(self, relations: List[DecoratedRelation]) -> List[Verdict]:
        progress = ProgressLogger(len(relations), desc="Causality search", logger=logger)

        if self.n_workers == 1 or len(relations) < 2:
            verdicts = []
            for decorated in relations:
                verdicts.append(self.evaluate(decorated))
                progress.update()
            progress.close()
            return verdicts

        verdicts = []
        with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
            futures = [executor.submit(self.evaluate, d) for d in relations]
            for future in as_completed(futures):
                verdicts.append(future.result())
                progress.update()
        progress.close()
        return verdicts

    def evaluate(self, decorated: DecoratedRelation) -> Verdict:
        """
        Evaluate a single relation.

        Parameters
        ----------
        decorated : DecoratedRelation
            Relation with endpoint measurements.

        Returns
        -------
        Verdict
            Conclusive verdict for the search mode, or an inconclusive one
            with the reason.
        """
        relation = decorated.relation

        sources = self.select_source_data(decorated)
        if not sources:
            return Verdict(relation, VerdictStatus.INCONCLUSIVE, reason=NO_SOURCE_DATA)

        targets = self.select_target_data(decorated)
        if not targets:
            return Verdict(relation, VerdictStatus.INCONCLUSIVE, reason=NO_TARGET_DATA)

        supporting = []
        for source in sources:
            expected = relation.sign * source.effect * source.measurement.change_sign

            for target in targets:
                if target.measurement is source.measurement:
                    continue

                compatible = expected == target.measurement.change_sign
                if compatible == self.causal:
                    supporting.append(Evidence(
                        source=source.measurement,
                        target=target.measurement,
                        source_effect=source.effect,
                        source_distance=source.distance,
                        target_distance=target.distance,
                        ambiguous=source.ambiguous,
                    ))

        if not supporting:
            return Verdict(relation, VerdictStatus.INCONCLUSIVE, reason=MODE_MISMATCH)

        best = min(supporting, key=lambda e: e.rank_key)
        return Verdict(
            relation,
            self.target_status,
            evidence=best,
            n_supporting=len(supporting),
        )

    def select_source_data(self, decorated: DecoratedRelation) -> List[_SourceCandidate]:
        """Changed source measurements that can act as a cause."""
        relation = decorated.relation
        candidates = []

        for m in decorated.source_data:
            if not m.is_changed:
                continue

            distance, matched = self._match_sites(m, relation.source, relation.source_sites)
            if relation.source_sites and self.force_site_matching and not matched:
                continue

            effect = self._source_effect(m, relation)
            if effect is None:
                continue

            candidates.append(_SourceCandidate(m, effect[0], distance, effect[1]))

        return candidates

    def select_target_data(self, decorated: DecoratedRelation) -> List[_TargetCandidate]:
        """Changed target measurements that can show the effect of the relation."""
        relation = decorated.relation
        candidates = []

        for m in decorated.target_data:
            if not m.is_changed:
                continue

            if relation.type.site_specific:
                if m.kind != MeasurementKind.PROTEIN:
                    continue

                if relation.sites:
                    distance, matched = self._match_sites(m, relation.target, relation.sites)
                else:
                    matched = bool(m.sites_of(relation.target))
                    distance = 0 if matched else UNMATCHED

                if self.force_site_matching and not matched:
                    continue
            else:
                if not m.is_total_protein:
                    continue
                distance = 0

            candidates.append(_TargetCandidate(m, distance))

        return candidates

    def _match_sites(
        self,
        measurement: Measurement,
        gene: str,
        annotated: Tuple[str, ...],
    ) -> Tuple[float, bool]:
        """Ranking distance and whether the measurement matches the annotated sites."""
        if not annotated:
            return 0, True

        d = site_distance(measurement.sites_of(gene), annotated)
        if d is not None and d <= self.site_proximity_threshold:
            return d, True
        return UNMATCHED, False

    def _source_effect(
        self,
        measurement: Measurement,
        relation: Relation,
    ) -> Optional[Tuple[int, bool]]:
        """
        (effect sign, ambiguous) of a source measurement, None if unusable.

        An effect annotated on the relation applies only to a measurement of
        exactly the annotated site, independent of the proximity tolerance.
        """
        if not measurement.is_phospho:
            return 1, False

        if measurement.effect != Effect.UNKNOWN:
            return measurement.effect.sign, False

        if (
            relation.source_site_effect != Effect.UNKNOWN
            and relation.source_sites
            and site_distance(measurement.sites_of(relation.source), relation.source_sites) == 0
        ):
            return relation.source_site_effect.sign, False

        if self.add_in_unknown_signs:
            return 1, True

        return None
