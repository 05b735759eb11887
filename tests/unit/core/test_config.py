"""Unit tests for the configuration system.

Tests for Pydantic configuration models, YAML loading, environment
variable resolution, discovery and command-line overrides.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sortud.core.config import (
    ENV_VAR_PATTERN,
    ApplicationConfig,
    DisplayConfig,
    SortudConfig,
    WalkConfig,
    discover_config_file,
    load_config,
    resolve_env_var,
    resolve_env_vars_in_dict,
)
from sortud.exceptions import ConfigurationError, EnvironmentVariableError


@pytest.mark.unit
class TestModels:
    """Test defaults and validation of the configuration models."""

    def test_defaults(self) -> None:
        config = SortudConfig()

        assert config.display == DisplayConfig()
        assert config.display.humanize is False
        assert config.display.max_depth is None
        assert config.display.color is True
        assert config.display.indent == 2
        assert config.display.local_time is False
        assert config.walk == WalkConfig()
        assert config.walk.skip_symlinks is False
        assert config.application.log_level == "WARNING"

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _ = DisplayConfig(max_depth=0)

    def test_indent_bounds(self) -> None:
        with pytest.raises(ValidationError):
            _ = DisplayConfig(indent=9)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _ = WalkConfig.model_validate({"follow_symlinks": True})

    def test_log_level_pattern(self) -> None:
        with pytest.raises(ValidationError):
            _ = ApplicationConfig(log_level="verbose")


@pytest.mark.unit
class TestApplyOverrides:
    """Test command-line overrides over file values."""

    def test_none_values_are_ignored(self) -> None:
        base = SortudConfig(display=DisplayConfig(humanize=True, max_depth=3))

        merged = base.apply_overrides({"display": {"humanize": None, "max_depth": None}})

        assert merged.display.humanize is True
        assert merged.display.max_depth == 3

    def test_values_override(self) -> None:
        merged = SortudConfig().apply_overrides(
            {
                "display": {"max_depth": 2, "color": False},
                "walk": {"skip_symlinks": True},
                "application": {"log_level": "DEBUG"},
            }
        )

        assert merged.display.max_depth == 2
        assert merged.display.color is False
        assert merged.walk.skip_symlinks is True
        assert merged.application.log_level == "DEBUG"

    def test_original_is_untouched(self) -> None:
        base = SortudConfig()
        _ = base.apply_overrides({"display": {"humanize": True}})

        assert base.display.humanize is False

    def test_invalid_override_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="max_depth"):
            _ = SortudConfig().apply_overrides({"display": {"max_depth": 0}})


@pytest.mark.unit
class TestEnvironmentResolution:
    """Test ${VARIABLE} resolution."""

    def test_pattern(self) -> None:
        assert ENV_VAR_PATTERN.findall("${A_1} and ${B}") == ["A_1", "B"]

    def test_resolve_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SORTUD_LEVEL", "DEBUG")

        assert resolve_env_var("${SORTUD_LEVEL}") == "DEBUG"
        assert resolve_env_var("no variables") == "no variables"

    def test_missing_variable_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SORTUD_MISSING", raising=False)

        with pytest.raises(EnvironmentVariableError, match="SORTUD_MISSING"):
            _ = resolve_env_var("${SORTUD_MISSING}")

    def test_nested_resolution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SORTUD_X", "x")

        result = resolve_env_vars_in_dict({"a": {"b": "${SORTUD_X}"}, "c": ["${SORTUD_X}", 1, {"d": "${SORTUD_X}"}], "e": 5})

        assert result == {"a": {"b": "x"}, "c": ["x", 1, {"d": "x"}], "e": 5}


@pytest.mark.unit
class TestLoadConfig:
    """Test loading configuration files."""

    def test_load_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text(
            "display:\n  humanize: true\n  max_depth: 2\nwalk:\n  skip_symlinks: true\napplication:\n  log_level: INFO\n"
        )

        config = load_config(path)

        assert config.display.humanize is True
        assert config.display.max_depth == 2
        assert config.walk.skip_symlinks is True
        assert config.application.log_level == "INFO"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text("")

        assert load_config(path) == SortudConfig()

    def test_env_var_in_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SORTUD_LOG_LEVEL", "ERROR")
        path = tmp_path / "config.yaml"
        _ = path.write_text("application:\n  log_level: ${SORTUD_LOG_LEVEL}\n")

        assert load_config(path).application.log_level == "ERROR"

    def test_missing_env_var_in_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SORTUD_UNSET", raising=False)
        path = tmp_path / "config.yaml"
        _ = path.write_text("application:\n  log_level: ${SORTUD_UNSET}\n")

        with pytest.raises(ConfigurationError, match="Environment variable resolution failed"):
            _ = load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            _ = load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text("display: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            _ = load_config(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="Expected YAML dictionary"):
            _ = load_config(path)

    def test_unknown_keys_are_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text("display:\n  humanise: true\n  max_detph: 2\n")

        with pytest.raises(ConfigurationError) as excinfo:
            _ = load_config(path)

        message = str(excinfo.value)
        assert "display → humanise" in message
        assert "display → max_detph" in message
        assert "Extra inputs are not permitted" in message

    def test_unknown_section_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text("dispaly:\n  humanize: true\n")

        with pytest.raises(ConfigurationError, match="dispaly"):
            _ = load_config(path)

    def test_validation_error_lists_field(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        _ = path.write_text("display:\n  max_depth: 0\n")

        with pytest.raises(ConfigurationError) as excinfo:
            _ = load_config(path)

        message = str(excinfo.value)
        assert "Configuration validation failed" in message
        assert "display → max_depth" in message
        assert str(path) in message


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Test configuration discovery order."""

    def test_nothing_found(self, tmp_path: Path) -> None:
        cwd = tmp_path / "cwd"
        home = tmp_path / "home"
        cwd.mkdir()
        home.mkdir()

        assert discover_config_file(cwd=cwd, home=home) is None

    def test_current_directory_wins(self, tmp_path: Path) -> None:
        cwd = tmp_path / "cwd"
        home = tmp_path / "home"
        cwd.mkdir()
        home.mkdir()
        _ = (cwd / ".sortud.yaml").write_text("")
        _ = (home / ".sortud.yaml").write_text("")

        assert discover_config_file(cwd=cwd, home=home) == cwd / ".sortud.yaml"

    def test_home_fallback(self, tmp_path: Path) -> None:
        cwd = tmp_path / "cwd"
        home = tmp_path / "home"
        cwd.mkdir()
        (home / ".config" / "sortud").mkdir(parents=True)
        _ = (home / ".config" / "sortud" / "config.yaml").write_text("")

        assert discover_config_file(cwd=cwd, home=home) == home / ".config" / "sortud" / "config.yaml"
