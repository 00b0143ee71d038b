"""
Pipeline façade.

Reads the platform and value files, searches the signed network for
relations compatible (or conflicting) with the data and writes the result
graph as ``<prefix>.sif`` and ``<prefix>.format``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .analyzer.searcher import CausalitySearcher
from .analyzer.verdicts import SearchResult
from .data.detectors import ThresholdDetector
from .data.loader import ProteomicsLoader
from .data.measurements import MeasurementKind
from .data.reader import add_values, read_annotation
from .data.rows import MeasurementRow
from .data.site_effects import SiteEffectDatabase
from .exceptions import ConfigurationError
from .network.graph import GraphAssembler, GraphModel
from .network.loader import NetworkLoader
from .network.relations import Relation
from .network.writer import GraphWriter
from .utils.config import RunConfig
from .utils.logging import get_logger


logger = get_logger("pipeline")


@dataclass
class PipelineResult:
    """Outcome of one run."""

    search: SearchResult
    graph: GraphModel
    sif_path: Path
    format_path: Path


def load_rows(config: RunConfig) -> List[MeasurementRow]:
    """
    Read annotated measurement rows as described by ``config``.

    Unknown site effects are filled from ``site_effect_file`` when given.
    """
    if not config.platform_file or not config.values_file:
        raise ConfigurationError("Both platform_file and values_file are required")

    rows = read_annotation(
        config.platform_file,
        config.id_column,
        config.symbols_column,
        config.sites_column,
        config.effect_column,
    )
    rows = add_values(rows, config.values_file, config.id_column, [config.value_column], 0.0)

    site_effect_path = config.resolve_resource(config.site_effect_file)
    if site_effect_path is not None:
        db = SiteEffectDatabase.from_file(site_effect_path)
        rows = db.fill_in_missing_effect(rows, config.site_effect_proximity_threshold)

    return rows


def load_relations(config: RunConfig) -> Set[Relation]:
    """Load the signed network named by ``config``."""
    return NetworkLoader(config.resolve_resource(config.network_file)).load()


def generate_graphs_from_files(config: RunConfig) -> PipelineResult:
    """
    Run the whole pipeline from the files named in ``config``.

    Parameters
    ----------
    config : RunConfig
        Run parameters, including ``platform_file`` and ``values_file``.

    Returns
    -------
    PipelineResult
        Search result, graph and written paths.
    """
    config.validate()
    logger.info(f"Reading {config.platform_file} and {config.values_file}")
    rows = load_rows(config)
    return generate_graphs(rows, config)


def generate_graphs(
    rows: Iterable[MeasurementRow],
    config: RunConfig,
    relations: Optional[Iterable[Relation]] = None,
) -> PipelineResult:
    """
    Generate the result graph for already-read measurement rows.

    Parameters
    ----------
    rows : iterable of MeasurementRow
        Rows with values.
    config : RunConfig
        Run parameters.
    relations : iterable of Relation, optional
        Signed network; loaded from ``config.network_file`` when omitted.

    Returns
    -------
    PipelineResult
        Search result, graph and written paths.
    """
    config.validate()

    loader = ProteomicsLoader(rows)
    loader.associate_change_detector(
        ThresholdDetector(config.value_threshold), MeasurementKind.PROTEIN
    )
    loader.associate_change_detector(
        ThresholdDetector(config.activity_threshold), MeasurementKind.ACTIVITY
    )

    if relations is None:
        relations = load_relations(config)
    decorated = loader.decorate_relations(relations)

    searcher = CausalitySearcher(
        causal=config.causal,
        force_site_matching=config.site_match_strict,
        site_proximity_threshold=config.site_match_proximity_threshold,
        add_in_unknown_signs=config.add_in_unknown_effects,
        n_workers=config.n_workers,
    )
    search = searcher.run(decorated)

    assembler = GraphAssembler(
        search.verdicts,
        measurements=loader.measurements,
        use_gene_bg_for_total_protein=config.use_gene_bg_for_total_protein,
        max_color_value=config.max_color_value,
    )
    graph = assembler.build(gene_centric=config.gene_centric)

    sif_path, format_path = GraphWriter(graph).write(config.output_prefix)
    logger.info(f"Run complete: {len(search)} {config.graph_type} relations in the graph")
    return PipelineResult(search, graph, sif_path, format_path)
