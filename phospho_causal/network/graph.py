"""
Result Graph Core

Graph model and assembler turning causality verdicts into a gene-centric or
data-centric graph ready to be written for visualization.
"""

from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import numpy as np

from ..data.measurements import Measurement, MeasurementKind
from ..utils.logging import get_logger
from .colors import ValueColorScale, effect_color, format_rgb, sign_color, BLACK, WHITE
from .edges import GraphEdge
from .nodes import BaseNode, GeneNode, MeasurementNode

if TYPE_CHECKING:
    from ..analyzer.verdicts import Verdict


logger = get_logger("graph")


GENE_CENTRIC = "gene-centric"
DATA_CENTRIC = "data-centric"


class GraphModel:
    """
    Nodes and edges of one result graph.

    Edges are kept in insertion order and are unique by
    ``(source, interaction, target)``; adding an edge a second time merges
    its verdicts into the existing one.
    """

    def __init__(self, projection: str):
        """
        Initialize graph.

        Parameters
        ----------
        projection : str
            "gene-centric" or "data-centric".
        """
        if projection not in (GENE_CENTRIC, DATA_CENTRIC):
            raise ValueError(f"Unknown projection: {projection}")

        self.projection = projection
        self.nodes: Dict[str, BaseNode] = {}
        self.edges: List[GraphEdge] = []
        self._edge_index: Dict[str, GraphEdge] = {}

    def add_node(self, node: BaseNode) -> BaseNode:
        """Add a node, returning the stored node with the same id."""
        return self.nodes.setdefault(node.id, node)

    def get_node(self, node_id: str) -> Optional[BaseNode]:
        return self.nodes.get(node_id)

    def add_edge(self, edge: GraphEdge) -> GraphEdge:
        """Add an edge, merging with an existing edge of the same key."""
        edge.source = self.add_node(edge.source)
        edge.target = self.add_node(edge.target)

        existing = self._edge_index.get(edge.key)
        if existing is not None:
            for verdict in edge.verdicts:
                if verdict not in existing.verdicts:
                    existing.verdicts.append(verdict)
            return existing

        self.edges.append(edge)
        self._edge_index[edge.key] = edge
        return edge

    def get_edge(self, key: str) -> Optional[GraphEdge]:
        return self._edge_index.get(key)

    def sorted_nodes(self) -> List[BaseNode]:
        return [self.nodes[k] for k in sorted(self.nodes)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert graph to dictionary."""
        return {
            "projection": self.projection,
            "nodes": {node_id: node.to_dict() for node_id, node in sorted(self.nodes.items())},
            "edges": [edge.to_dict() for edge in self.edges],
            "statistics": {
                "n_nodes": len(self.nodes),
                "n_edges": len(self.edges),
            },
        }


class GraphAssembler:
    """
    Builds result graphs from verdicts.

    Parameters
    ----------
    verdicts : iterable of Verdict
        Conclusive verdicts of a causality search.
    measurements : iterable of Measurement, optional
        All loaded measurements. Used for the total protein background of
        gene nodes; without it only evidence measurements are considered.
    use_gene_bg_for_total_protein : bool
        Color gene nodes by their total protein change instead of drawing
        total protein measurements as decorations.
    max_color_value : float, optional
        Value mapped to full color saturation.
    """

    def __init__(
        self,
        verdicts: Iterable["Verdict"],
        measurements: Optional[Iterable[Measurement]] = None,
        use_gene_bg_for_total_protein: bool = True,
        max_color_value: Optional[float] = None,
    ):
        self.verdicts = sorted(
            (v for v in verdicts if v.is_conclusive and v.evidence is not None),
            key=lambda v: v.relation.sort_key,
        )
        self.use_gene_bg_for_total_protein = use_gene_bg_for_total_protein
        self.max_color_value = max_color_value

        self._by_gene: Dict[str, Dict[str, Measurement]] = defaultdict(dict)
        if measurements is not None:
            for m in measurements:
                for symbol in m.symbols:
                    self._by_gene[symbol][m.id] = m
        for verdict in self.verdicts:
            self._by_gene[verdict.relation.source][verdict.source_data.id] = verdict.source_data
            self._by_gene[verdict.relation.target][verdict.target_data.id] = verdict.target_data

    def total_protein_value(self, gene: str) -> Optional[float]:
        """Mean value of the changed total protein measurements of a gene."""
        data = sorted(self._by_gene.get(gene, {}).values(), key=lambda m: m.id)
        values = [m.value for m in data if m.is_total_protein and m.is_changed]
        if not values:
            return None
        return float(np.mean(values))

    def build_gene_centric(self) -> GraphModel:
        """
        Build a graph with one node per gene.

        Returns
        -------
        GraphModel
            Gene-centric graph.
        """
        graph = GraphModel(GENE_CENTRIC)

        for verdict in self.verdicts:
            relation = verdict.relation
            source = graph.add_node(GeneNode(symbol=relation.source))
            target = graph.add_node(GeneNode(symbol=relation.target))

            self._decorate_gene(source, verdict.source_data)
            self._decorate_gene(target, verdict.target_data)

            graph.add_edge(GraphEdge(
                source=source,
                target=target,
                interaction=relation.type.label,
                sign=relation.sign,
                verdicts=[verdict],
            ))

        if self.use_gene_bg_for_total_protein:
            for node in graph.nodes.values():
                node.total_protein_value = self.total_protein_value(node.id)

        self._assign_gene_attributes(graph)
        self._assign_edge_attributes(graph)

        logger.info(
            f"Built gene-centric graph: {len(graph.nodes)} genes, {len(graph.edges)} edges"
        )
        return graph

    def build_data_centric(self) -> GraphModel:
        """
        Build a graph with one node per evidence measurement.

        Returns
        -------
        GraphModel
            Data-centric graph.
        """
        graph = GraphModel(DATA_CENTRIC)

        for verdict in self.verdicts:
            source = graph.add_node(MeasurementNode(measurement=verdict.source_data))
            target = graph.add_node(MeasurementNode(measurement=verdict.target_data))

            graph.add_edge(GraphEdge(
                source=source,
                target=target,
                interaction=verdict.relation.type.label,
                sign=verdict.relation.sign,
                verdicts=[verdict],
            ))

        scale = ValueColorScale.from_values(
            (n.measurement.value for n in graph.nodes.values()),
            self.max_color_value,
        )
        for node in graph.nodes.values():
            m = node.measurement
            node.attributes = {
                "color": scale.color(m.value),
                "bordercolor": self._border_color(m),
                "tooltip": f"{m.label()} ({m.value:.3g})",
            }

        self._assign_edge_attributes(graph)

        logger.info(
            f"Built data-centric graph: {len(graph.nodes)} measurements, {len(graph.edges)} edges"
        )
        return graph

    def build(self, gene_centric: bool = True) -> GraphModel:
        return self.build_gene_centric() if gene_centric else self.build_data_centric()

    def _decorate_gene(self, node: GeneNode, measurement: Measurement) -> None:
        if self.use_gene_bg_for_total_protein and measurement.is_total_protein:
            return
        node.add_site_data(measurement)

    def _assign_gene_attributes(self, graph: GraphModel) -> None:
        values = []
        for node in graph.nodes.values():
            values.extend(m.value for m in node.site_data)
            if node.total_protein_value is not None:
                values.append(node.total_protein_value)
        scale = ValueColorScale.from_values(values, self.max_color_value)

        for node in graph.nodes.values():
            if node.total_protein_value is not None:
                background = scale.color(node.total_protein_value)
                tooltip = f"{node.symbol} (total protein {node.total_protein_value:.3g})"
            else:
                background = format_rgb(WHITE)
                tooltip = node.symbol

            node.attributes = {
                "color": background,
                "bordercolor": format_rgb(BLACK),
                "tooltip": tooltip,
                "rppasite": [
                    "|".join([
                        m.id,
                        _site_letter(m),
                        scale.color(m.value),
                        self._border_color(m),
                    ])
                    for m in node.site_data
                ],
            }

    @staticmethod
    def _assign_edge_attributes(graph: GraphModel) -> None:
        for edge in graph.edges:
            edge.attributes = {
                "color": sign_color(edge.sign),
                "width": "1" if edge.ambiguous else "2",
            }
            if graph.projection == DATA_CENTRIC:
                # Measurement ids hide the genes; name every merged relation
                edge.attributes["tooltip"] = "; ".join(
                    sorted(str(v.relation) for v in edge.verdicts)
                )

    @staticmethod
    def _border_color(m: Measurement) -> str:
        if m.is_phospho:
            return effect_color(m.effect)
        return format_rgb(BLACK)


def _site_letter(m: Measurement) -> str:
    """Decoration letter: p for phosphoprotein, a for activity, t for total protein."""
    if m.kind == MeasurementKind.ACTIVITY:
        return "a"
    return "p" if m.is_phospho else "t"
