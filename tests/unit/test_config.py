"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from presence_app.config.defaults import get_default_config
from presence_app.config.loader import ConfigLoader
from presence_app.config.validation import ConfigValidator
from presence_app.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()
        assert config.timing.tick_interval_seconds == 1.0
        assert config.timing.resync_interval_seconds == 30.0
        assert config.thresholds.break_seconds == 1200
        assert config.remote.current_path == "/attendance/current"
        assert config.messages.transition_failed == "Failed to change status"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config("unknown-profile")

        assert config["timing"]["resync_interval_seconds"] == 30.0
        assert config["thresholds"]["lunch_time_seconds"] == 2400

    def test_profile_overrides(self, tmp_path: Path) -> None:
        (tmp_path / "profiles.yaml").write_text(
            "profiles:\n"
            "  branch-east:\n"
            "    remote:\n"
            "      base_url: https://east.example.com\n"
            "    thresholds:\n"
            "      break_seconds: 900\n"
        )
        loader = ConfigLoader.create(tmp_path)

        config = loader.load("branch-east")

        assert config.remote.base_url == "https://east.example.com"
        assert config.thresholds.break_seconds == 900
        assert config.thresholds.lunch_time_seconds == 2400

    def test_explicit_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "profiles.yaml").write_text(
            "profiles:\n  p:\n    timing:\n      resync_interval_seconds: 60\n"
        )
        loader = ConfigLoader.create(tmp_path)

        config = loader.load("p", {"timing": {"resync_interval_seconds": 5}})

        assert config.timing.resync_interval_seconds == 5
        assert config.timing.tick_interval_seconds == 1.0

    def test_empty_profiles_file(self, tmp_path: Path) -> None:
        (tmp_path / "profiles.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).load_profile_config("any") == {}

    def test_load_rejects_invalid(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        with pytest.raises(ConfigurationError) as exc_info:
            loader.load(overrides={"timing": {"tick_interval_seconds": 0}})
        assert exc_info.value.errors[0].field == "tick_interval_seconds"

    def test_load_rejects_unknown_key(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        with pytest.raises(ConfigurationError):
            loader.load(overrides={"timing": {"tick_seconds": 2}})


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_defaults_are_valid(self) -> None:
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("value", [0, -1, "1", True])
    def test_invalid_intervals(self, value) -> None:
        errors = ConfigValidator.validate_timing_params({"resync_interval_seconds": value})
        assert len(errors) == 1
        assert errors[0].field == "resync_interval_seconds"

    @pytest.mark.parametrize("value", [-1, 1.5, None])
    def test_invalid_thresholds(self, value) -> None:
        errors = ConfigValidator.validate_threshold_params({"offline_seconds": value})
        assert len(errors) == 1

    def test_zero_threshold_allowed(self) -> None:
        assert ConfigValidator.validate_threshold_params({"break_seconds": 0}) == []

    @pytest.mark.parametrize("url", ["ftp://host", "localhost:8000", 42])
    def test_invalid_base_url(self, url) -> None:
        errors = ConfigValidator.validate_remote_params({"base_url": url})
        assert [e.field for e in errors] == ["base_url"]

    def test_invalid_paths(self) -> None:
        errors = ConfigValidator.validate_remote_params({
            "base_url": "https://api.example.com",
            "current_path": "attendance/current",
            "timeout_seconds": 0,
        })
        assert {e.field for e in errors} == {"current_path", "timeout_seconds"}
