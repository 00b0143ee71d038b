"""
Exception types raised by the pipeline.

I/O problems abort a run, configuration problems are raised before any file
is read, and data problems (rows or relations lacking identifiers) are never
raised: they are counted and logged by the stage that meets them.
"""


class ProteomicsFileError(OSError):
    """Raised when an input table lacks a required column or cannot be parsed."""


class ConfigurationError(ValueError):
    """Raised when run parameters are invalid or contradict each other."""


class GraphWriteError(OSError):
    """Raised when the .sif/.format pair could not be written consistently."""
