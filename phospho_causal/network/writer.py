"""
Graph Writer

Serializes a result graph into a SIF file and its companion format file:

- ``<prefix>.sif``: ``source<TAB>interaction<TAB>target``, one line per edge.
- ``<prefix>.format``: ``node<TAB>id<TAB>attribute<TAB>value`` and
  ``edge<TAB>source interaction target<TAB>attribute<TAB>value`` lines.

Both files are replaced together or not at all.
"""

from pathlib import Path
from typing import List, Tuple

from ..exceptions import GraphWriteError
from ..utils.io import write_text_files_atomically
from ..utils.logging import get_logger
from .graph import GraphModel


logger = get_logger("writer")


class GraphWriter:
    """
    Writes a graph model as a SIF/format file pair.

    Parameters
    ----------
    graph : GraphModel
        Graph to write.
    """

    def __init__(self, graph: GraphModel):
        self.graph = graph

    def sif_lines(self) -> List[str]:
        return [edge.to_sif() for edge in self.graph.edges]

    def format_lines(self) -> List[str]:
        lines = []
        for node in self.graph.sorted_nodes():
            lines.extend(_attribute_lines("node", node.id, node.attributes))
        for edge in self.graph.edges:
            lines.extend(_attribute_lines("edge", edge.key, edge.attributes))
        return lines

    def check_integrity(self) -> None:
        """
        Ensure both files describe the same node set.

        Raises
        ------
        GraphWriteError
            If an edge endpoint is not a graph node or a node has no edge.
        """
        edge_nodes = set()
        for edge in self.graph.edges:
            edge_nodes.add(edge.source.id)
            edge_nodes.add(edge.target.id)

        missing = edge_nodes - set(self.graph.nodes)
        isolated = set(self.graph.nodes) - edge_nodes
        if missing or isolated:
            raise GraphWriteError(
                f"Graph is not referentially consistent: "
                f"missing nodes {sorted(missing)}, isolated nodes {sorted(isolated)}"
            )

    def write(self, output_prefix: str | Path) -> Tuple[Path, Path]:
        """
        Write ``<prefix>.sif`` and ``<prefix>.format``.

        Parameters
        ----------
        output_prefix : str or Path
            Path prefix of both files.

        Returns
        -------
        tuple of Path
            SIF and format file paths.

        Raises
        ------
        GraphWriteError
            If the pair could not be written; neither file should be trusted.
        """
        self.check_integrity()

        prefix = str(output_prefix)
        sif_path = Path(prefix + ".sif")
        format_path = Path(prefix + ".format")

        write_text_files_atomically({
            sif_path: _join(self.sif_lines()),
            format_path: _join(self.format_lines()),
        })

        logger.info(
            f"Wrote {len(self.graph.edges)} edges and {len(self.graph.nodes)} nodes "
            f"to {sif_path} and {format_path}"
        )
        return sif_path, format_path


def _attribute_lines(element: str, key: str, attributes: dict) -> List[str]:
    lines = []
    for name, value in attributes.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            lines.append(f"{element}\t{key}\t{name}\t{v}")
    return lines


def _join(lines: List[str]) -> str:
    return "".join(line + "\n" for line in lines)
