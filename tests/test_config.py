"""
Tests for configuration parsing (cli_inventory/config.py).
"""

import json
from unittest.mock import patch

import pytest

from cli_inventory.config import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOOLS,
    Config,
    FALLBACK_TIMEOUT_SECONDS,
    Preferences,
    _load_json,
    _load_yaml,
    load_config,
    load_config_file,
    timeout_from_env,
    validate_config,
)


@pytest.fixture
def no_default_locations():
    """Keep load_config away from real project/user/system files."""
    with patch("cli_inventory.config.CONFIG_LOCATIONS", []):
        yield


class TestPreferences:
    """Tests for Preferences dataclass."""

    def test_preferences_defaults(self):
        prefs = Preferences()
        assert prefs.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
        assert prefs.max_workers == DEFAULT_MAX_WORKERS

    @pytest.mark.parametrize("timeout", [0, 61, -1, "5"])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ValueError, match="Invalid timeout_seconds"):
            Preferences(timeout_seconds=timeout)

    @pytest.mark.parametrize("workers", [0, 65])
    def test_invalid_max_workers(self, workers):
        with pytest.raises(ValueError, match="Invalid max_workers"):
            Preferences(max_workers=workers)

    def test_preferences_from_dict_partial(self):
        prefs = Preferences.from_dict({"max_workers": 4})
        assert prefs.max_workers == 4
        assert prefs.timeout_seconds == DEFAULT_TIMEOUT_SECONDS

    def test_preferences_immutable(self):
        prefs = Preferences()
        with pytest.raises(AttributeError):
            prefs.max_workers = 2


class TestTimeoutFromEnv:
    """Tests for the timeout environment override."""

    @pytest.mark.parametrize("value,expected", [("10", 10), ("60", 60), (None, FALLBACK_TIMEOUT_SECONDS)])
    def test_valid_values(self, value, expected):
        assert timeout_from_env(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "0", "61", "-5", "2.5"])
    def test_invalid_values_fall_back(self, value):
        assert timeout_from_env(value) == FALLBACK_TIMEOUT_SECONDS

    def test_default_preferences_always_valid(self):
        Preferences(timeout_seconds=timeout_from_env("0"))


class TestConfig:
    """Tests for Config dataclass."""

    def test_config_defaults(self):
        config = Config()
        assert config.version == 1
        assert config.platform == "auto"
        assert config.tools == DEFAULT_TOOLS
        assert config.source == ""

    def test_invalid_version(self):
        with pytest.raises(ValueError, match="Unsupported config version"):
            Config(version=2)

    def test_invalid_platform(self):
        with pytest.raises(ValueError, match="Invalid platform"):
            Config(platform="beos")

    def test_from_dict(self):
        data = {
            "version": 1,
            "platform": "darwin",
            "tools": ["rg", "fd"],
            "preferences": {"timeout_seconds": 10, "max_workers": 8},
        }
        config = Config.from_dict(data, source="x.yml")
        assert config.platform == "darwin"
        assert config.tools == ("rg", "fd")
        assert config.preferences.timeout_seconds == 10
        assert config.preferences.max_workers == 8
        assert config.source == "x.yml"

    def test_from_dict_tools_not_list(self):
        with pytest.raises(TypeError, match="'tools' must be a list"):
            Config.from_dict({"tools": "rg"})

    def test_merge_prefers_self(self):
        high = Config(platform="linux", preferences=Preferences(max_workers=2), source="high.yml")
        low = Config(platform="darwin", tools=("rg",), preferences=Preferences(timeout_seconds=9))

        merged = high.merge_with(low)

        assert merged.platform == "linux"
        assert merged.tools == ("rg",)
        assert merged.preferences.max_workers == 2
        assert merged.preferences.timeout_seconds == 9
        assert merged.source == "high.yml"


class TestLoaders:
    """Tests for raw YAML/JSON loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("version: 1\ntools:\n  - rg\n")
        assert _load_yaml(str(path)) == {"version": 1, "tools": ["rg"]}

    def test_load_yaml_invalid(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("tools: [unclosed\n")
        assert _load_yaml(str(path)) is None

    def test_load_yaml_empty_file(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("")
        assert _load_yaml(str(path)) == {}

    def test_load_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"platform": "win32"}))
        assert _load_json(str(path)) == {"platform": "win32"}

    def test_load_json_invalid(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("{not json")
        assert _load_json(str(path)) is None


class TestLoadConfigFile:
    """Tests for load_config_file()."""

    def test_missing_file(self, tmp_path):
        assert load_config_file(str(tmp_path / "nope.yml")) is None

    def test_valid_yaml(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("version: 1\nplatform: linux\npreferences:\n  timeout_seconds: 7\n")
        config = load_config_file(str(path))
        assert config.platform == "linux"
        assert config.preferences.timeout_seconds == 7
        assert config.source == str(path)

    def test_json_by_extension(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"tools": ["claude"]}))
        assert load_config_file(str(path)).tools == ("claude",)

    def test_validation_error_gives_none(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("version: 3\n")
        assert load_config_file(str(path)) is None


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_when_nothing_found(self, no_default_locations):
        assert load_config() == Config()

    def test_custom_path(self, tmp_path, no_default_locations):
        path = tmp_path / "c.yml"
        path.write_text("tools: [rg]\n")
        assert load_config(str(path)).tools == ("rg",)

    def test_custom_path_missing(self, tmp_path, no_default_locations):
        with pytest.raises(ValueError, match="Could not load config"):
            load_config(str(tmp_path / "missing.yml"))

    def test_custom_overrides_locations(self, tmp_path):
        project = tmp_path / "project.yml"
        project.write_text("platform: darwin\ntools: [fd]\n")
        custom = tmp_path / "custom.yml"
        custom.write_text("platform: linux\n")

        with patch("cli_inventory.config.CONFIG_LOCATIONS", [str(project)]):
            config = load_config(str(custom))

        assert config.platform == "linux"
        assert config.tools == ("fd",)


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_valid(self):
        assert validate_config(Config()) == []

    def test_blank_name(self):
        assert "Blank tool name in tools list" in validate_config(Config(tools=("rg", " ")))

    def test_duplicates_case_insensitive(self):
        assert "Duplicate tool names in tools list" in validate_config(Config(tools=("rg", "RG")))
