"""Tests for configuration loading and overrides."""

from pathlib import Path

import pytest

from people_analytics.config import (
    AnalysisConfig,
    apply_overrides,
    get_env_config,
    load_analysis_config,
)
from people_analytics.utils.types import ConfigurationError


class TestLoadAnalysisConfig:
    def test_production_defaults(self):
        config = load_analysis_config()
        assert config.data_dir == Path("data/raw/hr")
        assert config.stats.alpha == 0.05
        assert config.stats.n_simulations == 2000
        assert config.domains == ("attrition", "performance", "satisfaction")

    def test_development_uses_fewer_simulations(self):
        config = load_analysis_config("development")
        assert config.stats.n_simulations == 500

    def test_unknown_environment(self):
        with pytest.raises(ValueError, match="Unknown environment"):
            load_analysis_config("staging")


class TestApplyOverrides:
    def test_nested_sections(self):
        config = apply_overrides(
            AnalysisConfig(data_dir=Path(".")),
            {"data_dir": "exports", "stats": {"alpha": 0.01}, "sources": {"delimiter": ";"}},
        )
        assert config.data_dir == Path("exports")
        assert config.stats.alpha == 0.01
        assert config.stats.n_simulations == 2000
        assert config.sources.delimiter == ";"

    def test_orders_lists_become_tuples(self):
        config = apply_overrides(AnalysisConfig(data_dir=Path(".")), {"orders": {"rating": ["Low", "High"]}})
        assert config.orders.rating == ("Low", "High")

    def test_domain_subset(self):
        config = apply_overrides(AnalysisConfig(data_dir=Path(".")), {"domains": ["attrition"]})
        assert config.domains == ("attrition",)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"domains": ["payroll"]},
            {"stats": {"alpha": 1.5}},
            {"stats": {"n_simulations": 0}},
            {"stats": {"not_a_setting": 1}},
            {"colour": "blue"},
        ],
    )
    def test_invalid_overrides(self, overrides):
        with pytest.raises(ConfigurationError):
            apply_overrides(AnalysisConfig(data_dir=Path(".")), overrides)


class TestGetEnvConfig:
    def test_reads_tool_table(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.people_analytics]\ndata_dir = "hr"\n\n[tool.people_analytics.stats]\nalpha = 0.1\n')
        assert get_env_config(pyproject) == {"data_dir": "hr", "stats": {"alpha": 0.1}}

    def test_missing_file_is_empty(self, tmp_path):
        assert get_env_config(tmp_path / "pyproject.toml") == {}
