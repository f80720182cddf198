"""Tests for the core Config class."""

import json

import pytest
import yaml

from schemaknobs_common import ConfigurationError, NotFoundError
from schemaknobs_config import (
    Config,
    ConfigFileNotFoundError,
    ConfigNotFoundError,
    ConfigValidationError,
)


class TestConfigBasics:
    """Test basic Config functionality."""

    def test_empty_config(self):
        """Test creating an empty config."""
        config = Config()
        assert config.get_types() == []
        assert config.to_dict() == {}

    def test_from_dict(self, sample_config_dict):
        """Test creating config from dictionary."""
        config = Config.from_dict(sample_config_dict)

        assert config.get_types() == ["loader", "registry"]
        assert config.get_count("loader") == 2
        assert config.get_count("registry") == 1
        assert config.get_count("missing") == 0

    def test_atomic_configs_are_normalized(self, sample_config_dict):
        """Test that type and name are filled in."""
        config = Config({"loader": {"strict_formats": True}})

        loader = config.get("loader")
        assert loader == {"strict_formats": True, "type": "loader", "name": "0"}

    def test_get_by_index(self, sample_config_dict):
        """Test getting configuration by index."""
        config = Config(sample_config_dict)

        assert config.get("loader", 0)["name"] == "strict"
        assert config.get("loader", 1)["name"] == "lenient"
        assert config.get("loader", -1)["name"] == "lenient"

    def test_get_by_name(self, sample_config_dict):
        """Test getting configuration by name."""
        config = Config(sample_config_dict)

        strict = config.get("loader", "strict")
        assert strict["strict_formats"] is True
        assert strict["formats"] == ["email", "date-time"]

    def test_get_returns_copy(self, sample_config_dict):
        """Test that callers cannot mutate stored configuration."""
        config = Config(sample_config_dict)

        config.get("loader", "strict")["formats"].append("uri")
        assert config.get("loader", "strict")["formats"] == ["email", "date-time"]

    def test_get_names(self, sample_config_dict):
        """Test getting configuration names."""
        config = Config(sample_config_dict)
        assert config.get_names("loader") == ["strict", "lenient"]
        assert config.get_names("missing") == []

    def test_multiple_sources_append(self):
        """Test that later sources add to earlier ones."""
        config = Config({"loader": {"name": "a"}}, {"loader": [{"name": "b"}]})
        assert config.get_names("loader") == ["a", "b"]


class TestConfigSet:
    """Test setting configurations."""

    def test_set_by_index(self):
        """Test replacing and appending by index."""
        config = Config()

        config.set("loader", 0, {"name": "first"})
        config.set("loader", 1, {"name": "second"})
        config.set("loader", 0, {"name": "replaced"})

        assert config.get_names("loader") == ["replaced", "second"]
        assert config.get("loader", 0)["type"] == "loader"

    def test_set_by_negative_index(self):
        """Test replacing the last entry with a negative index."""
        config = Config({"loader": [{"name": "a"}, {"name": "b"}]})
        config.set("loader", -1, {"name": "c"})
        assert config.get_names("loader") == ["a", "c"]

    def test_set_index_out_of_range(self):
        """Test that gaps cannot be created."""
        config = Config()
        with pytest.raises(ConfigValidationError):
            config.set("loader", 2, {"name": "x"})

    def test_set_by_name(self, sample_config_dict):
        """Test replacing and appending by name."""
        config = Config(sample_config_dict)

        config.set("loader", "lenient", {"strict_formats": True})
        config.set("loader", "extra", {"strict_formats": False})

        assert config.get("loader", "lenient")["strict_formats"] is True
        assert config.get_names("loader") == ["strict", "lenient", "extra"]


class TestConfigErrors:
    """Test error handling."""

    def test_missing_type(self):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            Config({"loader": {}}).get("registry")
        assert exc_info.value.context["available_types"] == ["loader"]

    def test_missing_index(self, sample_config_dict):
        with pytest.raises(ConfigNotFoundError):
            Config(sample_config_dict).get("loader", 5)

    def test_missing_name(self, sample_config_dict):
        with pytest.raises(ConfigNotFoundError):
            Config(sample_config_dict).get("loader", "nope")

    def test_non_mapping_atomic_config(self):
        """Test that list entries must be mappings."""
        with pytest.raises(ConfigValidationError):
            Config({"loader": ["strict"]})

    def test_type_mismatch(self):
        """Test that an explicit type must match its section."""
        with pytest.raises(ConfigValidationError):
            Config({"loader": {"type": "registry"}})

    def test_invalid_source(self):
        with pytest.raises(ConfigValidationError):
            Config(42)

    def test_error_hierarchy(self):
        """Test that config errors are common errors."""
        assert issubclass(ConfigNotFoundError, NotFoundError)
        assert issubclass(ConfigFileNotFoundError, ConfigNotFoundError)
        assert issubclass(ConfigValidationError, ConfigurationError)


class TestConfigFiles:
    """Test file loading and saving."""

    def test_load_yaml(self, temp_dir, sample_config_dict):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump(sample_config_dict))

        config = Config.from_file(path)
        assert config.get("loader", "strict")["formats"] == ["email", "date-time"]

    def test_load_json(self, temp_dir, sample_config_dict):
        path = temp_dir / "config.json"
        path.write_text(json.dumps(sample_config_dict))

        config = Config(str(path))
        assert config.get("registry", "custom")["formats"] == ["hostname"]

    def test_empty_yaml_file(self, temp_dir):
        path = temp_dir / "empty.yml"
        path.write_text("")
        assert Config(path).get_types() == []

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigFileNotFoundError):
            Config(temp_dir / "missing.yaml")

    def test_unsupported_extension(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("")
        with pytest.raises(ConfigValidationError):
            Config(path)

    @pytest.mark.parametrize("filename", ["out.yaml", "out.json"])
    def test_to_file_round_trip(self, temp_dir, sample_config_dict, filename):
        """Test that a saved configuration loads back unchanged."""
        config = Config(sample_config_dict)
        path = temp_dir / filename

        config.to_file(path)

        assert Config.from_file(path).to_dict() == config.to_dict()

    def test_to_file_unknown_extension(self, temp_dir):
        with pytest.raises(ConfigValidationError):
            Config().to_file(temp_dir / "out.txt")

    def test_to_file_explicit_format(self, temp_dir):
        path = temp_dir / "out.txt"
        Config({"loader": {"name": "x"}}).to_file(path, format="json")
        assert json.loads(path.read_text())["loader"][0]["name"] == "x"
