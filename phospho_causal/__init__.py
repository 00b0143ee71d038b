"""
phospho-causal

Causal reasoning over proteomic and phosphoproteomic measurements:
measurements → signed network relations → compatible or conflicting
relations → gene- or data-centric graphs for visualization.
"""

__version__ = "1.0.0"

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
RESOURCE_DIR = PROJECT_ROOT / "resources"

# Submodule imports
from . import utils
from . import data
from . import network
from . import analyzer
from .pipeline import PipelineResult, generate_graphs, generate_graphs_from_files

__all__ = [
    "utils",
    "data",
    "network",
    "analyzer",
    "PipelineResult",
    "generate_graphs",
    "generate_graphs_from_files",
    "PROJECT_ROOT",
    "CONFIG_DIR",
    "RESOURCE_DIR",
]
