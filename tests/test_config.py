"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from pkgviz.config import AnalysisConfig, HierarchyOptions, config_from_dict, load_config
from pkgviz.errors import ConfigError


class TestLoadConfig:
    def test_defaults_without_config_files(self, tmp_path: Path):
        config = load_config(tmp_path)
        assert config == AnalysisConfig()
        assert config.hierarchy_options.min_group_size == 2
        assert config.hierarchy_options.max_depth is None
        assert config.languages == ["java"]
        assert config.on_read_error == "fail"

    def test_pkgviz_toml(self, tmp_path: Path):
        (tmp_path / ".pkgviz.toml").write_text(
            "[pkgviz]\n"
            'exclude = ["java.*", "javax.*"]\n'
            "hierarchy = true\n"
            'on-read-error = "skip"\n'
            "\n"
            "[pkgviz.hierarchy-options]\n"
            "min-group-size = 3\n"
            "max_depth = 4\n"
        )
        config = load_config(tmp_path)
        assert config.exclude == ["java.*", "javax.*"]
        assert config.hierarchy is True
        assert config.on_read_error == "skip"
        assert config.hierarchy_options == HierarchyOptions(min_group_size=3, max_depth=4)

    def test_pyproject_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "demo"\n\n[tool.pkgviz]\nlanguages = ["java", "kotlin"]\njobs = 4\n'
        )
        config = load_config(tmp_path)
        assert config.languages == ["java", "kotlin"]
        assert config.jobs == 4

    def test_pyproject_without_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
        assert load_config(tmp_path) == AnalysisConfig()

    def test_pkgviz_toml_wins(self, tmp_path: Path):
        (tmp_path / ".pkgviz.toml").write_text("[pkgviz]\njobs = 2\n")
        (tmp_path / "pyproject.toml").write_text("[tool.pkgviz]\njobs = 8\n")
        assert load_config(tmp_path).jobs == 2

    def test_malformed_toml(self, tmp_path: Path):
        (tmp_path / ".pkgviz.toml").write_text("[pkgviz\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_pkgviz_value_must_be_a_table(self, tmp_path: Path):
        (tmp_path / ".pkgviz.toml").write_text("pkgviz = 1\n")
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(tmp_path)

    def test_tool_pkgviz_value_must_be_a_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[tool]\npkgviz = \"yes\"\n")
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(tmp_path)

    def test_unknown_key(self, tmp_path: Path):
        (tmp_path / ".pkgviz.toml").write_text("[pkgviz]\nexcludes = []\n")
        with pytest.raises(ConfigError, match="excludes"):
            load_config(tmp_path)


class TestConfigFromDict:
    def test_flat_hierarchy_keys(self):
        config = config_from_dict({"min_group_size": 5, "max-depth": 2})
        assert config.hierarchy_options == HierarchyOptions(min_group_size=5, max_depth=2)

    def test_unknown_hierarchy_option(self):
        with pytest.raises(ConfigError):
            config_from_dict({"hierarchy-options": {"depth": 1}})


class TestValidate:
    def test_defaults_are_valid(self):
        AnalysisConfig().validate()

    def test_zero_max_depth_is_valid(self):
        AnalysisConfig(hierarchy_options=HierarchyOptions(max_depth=0)).validate()

    @pytest.mark.parametrize(
        "config",
        [
            AnalysisConfig(exclude=["com.(oops*"]),
            AnalysisConfig(exclude=[""]),
            AnalysisConfig(exclude="java.*"),
            AnalysisConfig(hierarchy="yes"),
            AnalysisConfig(hierarchy_options=HierarchyOptions(min_group_size=0)),
            AnalysisConfig(hierarchy_options=HierarchyOptions(max_depth=-1)),
            AnalysisConfig(hierarchy_options=HierarchyOptions(min_group_size=True)),
            AnalysisConfig(languages=["cobol"]),
            AnalysisConfig(languages=[]),
            AnalysisConfig(on_read_error="ignore"),
            AnalysisConfig(jobs=0),
            AnalysisConfig(ignore=[""]),
        ],
    )
    def test_invalid(self, config):
        with pytest.raises(ConfigError):
            config.validate()
