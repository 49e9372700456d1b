"""
Tests for configuration loading.
"""

import json

import pytest
import yaml

from simdist.config import Config, load_config
from simdist.errors import ConfigError


class TestConfig:
    """Test the dot-key configuration store."""

    def test_defaults(self):
        config = Config()

        assert config.get("analysis.precision") == 3
        assert config.get("analysis.workers") is None
        assert config.get("display.fallback_width") == 100
        assert config.get("display.fill_char") == "x"
        assert config.get("output.show_progress") is True
        assert config.get("logging.level") == "WARNING"

    def test_get_missing_key(self):
        config = Config()
        assert config.get("nope.missing", "fallback") == "fallback"
        assert config.get("analysis.precision.deeper", 1) == 1

    def test_set(self):
        config = Config()
        config.set("display.width", 80)
        config.set("new.section.key", True)

        assert config.get("display.width") == 80
        assert config.get("new.section.key") is True

    def test_defaults_not_shared_between_instances(self):
        first = Config()
        first.set("analysis.precision", 5)

        assert Config().get("analysis.precision") == 3

    def test_merge_keeps_unset_defaults(self):
        config = Config({"analysis": {"precision": 2}})

        assert config.get("analysis.precision") == 2
        assert config.get("display.height_ratio") == 30

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / ".simdist.yml"
        path.write_text(yaml.dump({"display": {"fill_char": "#", "width": 60}}))

        config = Config.from_file(path)

        assert config.get("display.fill_char") == "#"
        assert config.get("display.width") == 60
        assert config.source == path

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"analysis": {"workers": 2}}))

        assert Config.from_file(path).get("analysis.workers") == 2

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("x = 1")

        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / ".simdist.yml"
        path.write_text("analysis: [unclosed")

        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_find_and_load_from_parent(self, tmp_path):
        (tmp_path / "simdist.yaml").write_text(yaml.dump({"analysis": {"precision": 4}}))
        nested = tmp_path / "data" / "raw"
        nested.mkdir(parents=True)
        input_file = nested / "records.csv"
        input_file.write_text("uid,content\n")

        config = Config.find_and_load(input_file)

        assert config.get("analysis.precision") == 4

    def test_environment_overrides(self):
        config = Config().apply_environment_overrides({
            "SIMDIST_PRECISION": "2",
            "SIMDIST_WORKERS": "auto",
            "SIMDIST_WIDTH": "120",
            "SIMDIST_SHOW_PROGRESS": "no",
            "SIMDIST_LOG_LEVEL": "debug",
        })

        assert config.get("analysis.precision") == 2
        assert config.get("analysis.workers") is None
        assert config.get("display.width") == 120
        assert config.get("output.show_progress") is False
        assert config.get("logging.level") == "DEBUG"

    def test_invalid_environment_value(self):
        with pytest.raises(ConfigError) as exc_info:
            Config().apply_environment_overrides({"SIMDIST_PRECISION": "three"})

        assert exc_info.value.key == "analysis.precision"


class TestValidate:
    """Test configuration validation."""

    def test_defaults_are_valid(self):
        Config().validate()

    @pytest.mark.parametrize("key,value", [
        ("analysis.precision", -1),
        ("analysis.precision", 10),
        ("analysis.precision", "3"),
        ("analysis.workers", 0),
        ("display.width", -5),
        ("display.fallback_width", 0),
        ("display.height_ratio", True),
        ("display.fill_char", "xx"),
        ("logging.level", "LOUD"),
    ])
    def test_invalid_values(self, key, value):
        config = Config()
        config.set(key, value)

        with pytest.raises(ConfigError) as exc_info:
            config.validate()

        assert exc_info.value.key == key

    def test_load_config(self, tmp_path):
        (tmp_path / ".simdist.yml").write_text(yaml.dump({"display": {"height_ratio": 50}}))
        input_file = tmp_path / "records.csv"
        input_file.write_text("uid,content\n1,a\n")

        config = load_config(input_file, environ={"SIMDIST_WORKERS": "3"})

        assert config.get("display.height_ratio") == 50
        assert config.get("analysis.workers") == 3
