"""
Network Module

Signed reference network and the result graphs built on it:
Relations → decorated relations → (verdicts) → gene- or data-centric graphs
→ SIF/format files.
"""

from .relations import DecoratedRelation, Relation, RelationType
from .loader import NetworkLoader
from .nodes import BaseNode, GeneNode, MeasurementNode
from .edges import GraphEdge
from .graph import DATA_CENTRIC, GENE_CENTRIC, GraphAssembler, GraphModel
from .writer import GraphWriter

__all__ = [
    "DecoratedRelation",
    "Relation",
    "RelationType",
    "NetworkLoader",
    "BaseNode",
    "GeneNode",
    "MeasurementNode",
    "GraphEdge",
    "GraphAssembler",
    "GraphModel",
    "GraphWriter",
    "GENE_CENTRIC",
    "DATA_CENTRIC",
]
