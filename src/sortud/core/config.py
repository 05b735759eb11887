"""Configuration system for sortud.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. Every setting has a default, so
a configuration file is optional; command-line flags override file values.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sortud.exceptions import ConfigurationError, EnvironmentVariableError

# Matches ${VARIABLE_NAME} where VARIABLE_NAME holds letters, digits and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

# Configuration file discovery paths in order of precedence
CURRENT_DIR_CONFIG_FILES: Final[tuple[str, ...]] = (
    ".sortud.yaml",
    ".sortud.yml",
)

HOME_CONFIG_FILES: Final[tuple[str, ...]] = (
    ".sortud.yaml",
    ".sortud.yml",
    ".config/sortud/config.yaml",
)


class BaseConfig(BaseModel):
    """Base configuration model; unknown keys are rejected."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
    )


class DisplayConfig(BaseConfig):
    """Configuration for how the tree is rendered."""

    humanize: Annotated[
        bool,
        Field(description="Print sizes with unit prefixes instead of raw bytes"),
    ] = False
    si: Annotated[
        bool,
        Field(description="Use powers of 1000 instead of 1024 when humanizing"),
    ] = False
    show_time: Annotated[
        bool,
        Field(description="Print the most recent modification time"),
    ] = False
    max_depth: Annotated[
        int | None,
        Field(
            ge=1,
            description="Deepest level to print; sizes always cover the full tree",
        ),
    ] = None
    ascending: Annotated[
        bool,
        Field(description="Sort children smallest first"),
    ] = False
    color: Annotated[
        bool,
        Field(description="Wrap lines in ANSI 256-color escapes"),
    ] = True
    indent: Annotated[
        int,
        Field(
            ge=0,
            le=8,
            description="Spaces of indentation per depth level",
        ),
    ] = 2
    local_time: Annotated[
        bool,
        Field(description="Print timestamps in local time instead of UTC"),
    ] = False


class WalkConfig(BaseConfig):
    """Configuration for the filesystem walk."""

    skip_symlinks: Annotated[
        bool,
        Field(description="Look up metadata without following symlinks"),
    ] = False


class ApplicationConfig(BaseConfig):
    """Configuration for application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"


class SortudConfig(BaseConfig):
    """Top-level configuration schema.

    Aggregates all configuration sections:
    - display: Rendering options
    - walk: Filesystem walk options
    - application: Application-level settings
    """

    display: Annotated[
        DisplayConfig,
        Field(description="Rendering configuration"),
    ] = DisplayConfig()
    walk: Annotated[
        WalkConfig,
        Field(description="Filesystem walk configuration"),
    ] = WalkConfig()
    application: Annotated[
        ApplicationConfig,
        Field(description="Application-level configuration"),
    ] = ApplicationConfig()

    def apply_overrides(self, overrides: Mapping[str, Mapping[str, object]]) -> "SortudConfig":
        """Return a copy with per-section overrides applied and validated.

        ``None`` values in ``overrides`` mean "not given" and are ignored.

        Args:
            overrides: Mapping of section name to field overrides

        Returns:
            New validated configuration

        Raises:
            ConfigurationError: If an override fails validation

        Examples:
            >>> SortudConfig().apply_overrides({"display": {"humanize": True}}).display.humanize
            True
        """
        data = self.model_dump()
        for section, values in overrides.items():
            section_data = data.setdefault(section, {})
            for key, value in values.items():
                if value is not None:
                    section_data[key] = value

        try:
            return SortudConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(_format_validation_error(e, source="command line")) from e


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string value.

    Args:
        value: String potentially containing ${VARIABLE} references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced variable is not set

    Examples:
        >>> os.environ["SORTUD_TEST_VAR"] = "value"
        >>> resolve_env_var("prefix_${SORTUD_TEST_VAR}")
        'prefix_value'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable or remove the reference."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Recursively resolve environment variables in a dictionary.

    Traverses nested dictionaries and lists, resolving references in string
    values. Non-string values are preserved as-is. Values are untyped here;
    Pydantic validates them afterwards.

    Args:
        data: Dictionary potentially containing ${VARIABLE} references

    Returns:
        New dictionary with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced variable is not set
    """
    result: dict[str, object] = {}

    for key, value in data.items():
        if isinstance(value, str):
            result[key] = resolve_env_var(value)
        elif isinstance(value, dict):
            result[key] = resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
        elif isinstance(value, list):
            resolved_list: list[object] = []
            for item in value:  # pyright: ignore[reportUnknownVariableType]  # YAML list items
                if isinstance(item, str):
                    resolved_list.append(resolve_env_var(item))
                elif isinstance(item, dict):
                    resolved_list.append(resolve_env_vars_in_dict(item))  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
                else:
                    resolved_list.append(item)  # pyright: ignore[reportUnknownArgumentType]  # YAML primitives
            result[key] = resolved_list
        else:
            result[key] = value

    return result


def discover_config_file(cwd: Path | None = None, home: Path | None = None) -> Path | None:
    """Discover a configuration file in standard locations.

    Searches the current directory first, then the user's home directory.

    Args:
        cwd: Directory to treat as the current directory
        home: Directory to treat as the home directory

    Returns:
        Path to the first configuration file found, or None
    """
    base = cwd if cwd is not None else Path.cwd()
    for name in CURRENT_DIR_CONFIG_FILES:
        candidate = base / name
        if candidate.is_file():
            return candidate

    try:
        home_dir = home if home is not None else Path.home()
    except (OSError, RuntimeError):
        # Path.home() can fail in some environments
        return None

    for name in HOME_CONFIG_FILES:
        candidate = home_dir / name
        if candidate.is_file():
            return candidate

    return None


def load_config(config_path: Path) -> SortudConfig:
    """Load and validate configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated SortudConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded, references an unset
            environment variable, or fails validation
    """
    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Please create the file or omit --config to use defaults."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    # An empty file is a valid configuration made of defaults
    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = f"Environment variable resolution failed in: {config_path}\n{e}"
        raise ConfigurationError(msg) from e

    try:
        return SortudConfig.model_validate(resolved_data)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e, source=str(config_path))) from e


def _format_validation_error(error: ValidationError, *, source: str) -> str:
    """Format validation errors with field-level diagnostics."""
    error_lines = ["Configuration validation failed:", ""]
    for item in error.errors():
        field_path = " → ".join(str(loc) for loc in item["loc"])
        error_lines.append(f"  Field: {field_path}")
        error_lines.append(f"  Error: {item['msg']}")
        error_lines.append(f"  Type: {item['type']}")
        error_lines.append("")

    error_lines.append(f"Configuration source: {source}")
    error_lines.append("Please fix the above errors and try again.")
    return "\n".join(error_lines)
