"""
Configuration management utilities.

Run parameters live in YAML files (``config/config.yaml`` holds the
defaults) and are turned into a validated :class:`RunConfig` before any
data is read.
"""

from dataclasses import asdict, dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..exceptions import ConfigurationError


GRAPH_TYPES = ("compatible", "conflicting")

# YAML sections that are flattened into RunConfig fields
CONFIG_SECTIONS = ("input", "analysis", "network", "output")


def load_config(config_path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Parameters
    ----------
    config_path : str or Path
        Path to the YAML configuration file.

    Returns
    -------
    dict
        Configuration dictionary (empty for an empty file).
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping: {config_path}"
        )

    return config


@lru_cache(maxsize=8)
def get_config(config_name: str = "config") -> Dict[str, Any]:
    """
    Get a cached configuration by name.

    Parameters
    ----------
    config_name : str
        Name of the configuration file in ``CONFIG_DIR`` (without the
        .yaml extension).

    Returns
    -------
    dict
        Configuration dictionary.
    """
    from phospho_causal import CONFIG_DIR

    config_path = CONFIG_DIR / f"{config_name}.yaml"
    return load_config(config_path)


@dataclass
class RunConfig:
    """
    Parameters of one pipeline run.

    Attributes
    ----------
    platform_file, values_file : str, optional
        Antibody annotation file and measurement file. Only needed when the
        run starts from files.
    id_column, symbols_column, sites_column, effect_column : str
        Column names in the annotation file.
    value_column : str
        Column of the values file holding the measurement.
    value_threshold : float
        Minimum absolute value for a protein measurement to count as changed.
    activity_threshold : float
        Same, for activity measurements.
    graph_type : str
        "compatible" for causal search, "conflicting" for conflict search.
    site_match_strict : bool
        Require the measured site to match the site annotated on a relation.
    site_match_proximity_threshold : int
        Residue distance tolerated when matching sites.
    site_effect_proximity_threshold : int
        Residue distance tolerated when filling unknown site effects.
    gene_centric : bool
        Gene-centric projection when True, measurement-centric otherwise.
    add_in_unknown_effects : bool
        Let phospho sites with unknown effect act as (ambiguous) causes.
    use_gene_bg_for_total_protein : bool
        Color gene nodes by their total protein change.
    output_prefix : str
        Output files are ``<prefix>.sif`` and ``<prefix>.format``.
    resource_dir : str, optional
        Directory that relative resource files resolve against.
    network_file : str
        Signed network file.
    site_effect_file : str, optional
        Site effect table used to fill unknown effects.
    n_workers : int
        Worker threads for the causality search.
    max_color_value : float, optional
        Value mapped to full color saturation; the largest absolute value in
        the graph when absent.
    """

    platform_file: Optional[str] = None
    id_column: str = "ID"
    symbols_column: str = "Symbols"
    sites_column: str = "Sites"
    effect_column: str = "Effect"
    values_file: Optional[str] = None
    value_column: str = "Value"

    value_threshold: float = 0.001
    activity_threshold: float = 0.1
    graph_type: str = "compatible"
    site_match_strict: bool = True
    site_match_proximity_threshold: int = 0
    site_effect_proximity_threshold: int = 0
    add_in_unknown_effects: bool = False
    n_workers: int = 1

    resource_dir: Optional[str] = None
    network_file: str = "signed-network.txt"
    site_effect_file: Optional[str] = None

    gene_centric: bool = True
    use_gene_bg_for_total_protein: bool = True
    max_color_value: Optional[float] = None
    output_prefix: str = "causative"

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RunConfig":
        """
        Build a run configuration from a (possibly sectioned) dictionary.

        Keys may be given flat or grouped under ``input``, ``analysis``,
        ``network`` and ``output``. Unknown keys are rejected.
        """
        flat: Dict[str, Any] = {}
        for key, value in config.items():
            if key in CONFIG_SECTIONS and isinstance(value, dict):
                flat.update(value)
            else:
                flat[key] = value

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(flat) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        return cls(**flat)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "RunConfig":
        """Load and build a run configuration from a YAML file."""
        return cls.from_dict(load_config(config_path))

    @property
    def causal(self) -> bool:
        """True when searching compatible relations."""
        return self.graph_type.lower() == "compatible"

    def validate(self) -> "RunConfig":
        """
        Check parameters before any processing begins.

        Returns
        -------
        RunConfig
            ``self``, so calls can be chained.

        Raises
        ------
        ConfigurationError
            On an invalid graph type or contradictory options.
        """
        if not isinstance(self.graph_type, str) or self.graph_type.lower() not in GRAPH_TYPES:
            raise ConfigurationError(
                f"Invalid graph type: {self.graph_type!r}. Must be one of {list(GRAPH_TYPES)}"
            )

        for name in ("value_threshold", "activity_threshold"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}")

        for name in ("site_match_proximity_threshold", "site_effect_proximity_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")

        if isinstance(self.n_workers, bool) or not isinstance(self.n_workers, int) or self.n_workers < 1:
            raise ConfigurationError(f"n_workers must be a positive integer, got {self.n_workers!r}")

        if self.max_color_value is not None and self.max_color_value <= 0:
            raise ConfigurationError("max_color_value must be positive when given")

        if not self.output_prefix:
            raise ConfigurationError("output_prefix must not be empty")

        if bool(self.platform_file) != bool(self.values_file):
            raise ConfigurationError(
                "platform_file and values_file must be given together"
            )

        return self

    def get_resource_dir(self) -> Path:
        """Resource directory, defaulting to ``<project>/resources``."""
        if self.resource_dir:
            return Path(self.resource_dir).expanduser()

        from phospho_causal import RESOURCE_DIR
        return RESOURCE_DIR

    def resolve_resource(self, filename: Optional[str]) -> Optional[Path]:
        """Resolve a resource file name against the resource directory."""
        if not filename:
            return None

        path = Path(filename).expanduser()
        if path.is_absolute():
            return path
        return self.get_resource_dir() / path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
