"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest

from phospho_causal import CONFIG_DIR, RESOURCE_DIR
from phospho_causal.exceptions import ConfigurationError
from phospho_causal.utils.config import RunConfig, get_config, load_config


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_default_config_is_valid(self):
        assert (CONFIG_DIR / "config.yaml").exists()

        config = RunConfig.from_dict(get_config("config")).validate()
        assert config == RunConfig()


class TestRunConfig:
    """Tests for RunConfig."""

    def test_sections_flattened(self):
        config = RunConfig.from_dict({
            "analysis": {"graph_type": "conflicting", "n_workers": 2},
            "output": {"gene_centric": False},
            "value_threshold": 0.5,
        })

        assert config.graph_type == "conflicting"
        assert not config.causal
        assert config.n_workers == 2
        assert not config.gene_centric
        assert config.value_threshold == 0.5

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="colour"):
            RunConfig.from_dict({"output": {"colour": "red"}})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("analysis:\n  site_match_proximity_threshold: 3\n")

        assert RunConfig.from_yaml(path).site_match_proximity_threshold == 3

    @pytest.mark.parametrize("overrides", [
        {"graph_type": "compatable"},
        {"value_threshold": -0.1},
        {"activity_threshold": -1},
        {"site_match_proximity_threshold": -1},
        {"site_effect_proximity_threshold": 1.5},
        {"n_workers": 0},
        {"max_color_value": 0},
        {"output_prefix": ""},
        {"platform_file": "platform.txt"},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ConfigurationError):
            RunConfig(**overrides).validate()

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            RunConfig(graph_type="bogus").validate()

    def test_graph_type_case_insensitive(self):
        assert RunConfig(graph_type="Conflicting").validate().causal is False

    def test_resource_resolution(self, tmp_path):
        config = RunConfig(resource_dir=str(tmp_path))

        assert config.resolve_resource("net.txt") == tmp_path / "net.txt"
        assert config.resolve_resource(str(tmp_path / "abs.txt")) == tmp_path / "abs.txt"
        assert config.resolve_resource(None) is None

    def test_default_resource_dir(self):
        assert RunConfig().get_resource_dir() == RESOURCE_DIR
        assert RunConfig().resolve_resource("signed-network.txt") == Path(RESOURCE_DIR) / "signed-network.txt"

    def test_to_dict(self):
        assert RunConfig().to_dict()["output_prefix"] == "causative"
