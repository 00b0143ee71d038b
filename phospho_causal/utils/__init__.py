"""
Utility functions for the causal proteomics pipeline.
"""

from .config import load_config, get_config, RunConfig
from .io import read_table, write_text_files_atomically
from .logging import setup_logger, get_logger, ProgressLogger

__all__ = [
    "load_config",
    "get_config",
    "RunConfig",
    "read_table",
    "write_text_files_atomically",
    "setup_logger",
    "get_logger",
    "ProgressLogger",
]
