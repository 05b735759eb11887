"""Command-line interface for sortud."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click

from sortud.core.config import SortudConfig, discover_config_file, load_config
from sortud.core.data.filesystem.tree_builder import TreeBuilder
from sortud.core.render.renderer import TreeRenderer
from sortud.exceptions import ConfigurationError, TreeBuildError
from sortud.types.models import UnitBase
from sortud.utils.logging import configure_logging

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

try:
    __version__ = version("sortud")
except PackageNotFoundError:
    __version__ = "unknown"


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Path value to validate

    Returns:
        Validated Path object

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter("Configuration path must be a file, not a directory")

    valid_extensions = {".yaml", ".yml"}
    if value.suffix.lower() not in valid_extensions:
        extensions_str = ", ".join(sorted(valid_extensions))
        raise click.BadParameter(f"Invalid configuration file extension. Supported extensions: {extensions_str}")

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Raises:
        click.BadParameter: If the level is not recognised
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


def resolve_config(
    config_path: Path | None,
    *,
    max_depth: int | None,
    ascending: bool,
    humanize: bool,
    si: bool,
    time: bool,
    skip_symlinks: bool,
    no_color: bool,
    local_time: bool,
    log_level: str | None,
) -> SortudConfig:
    """Load the configuration file and apply command-line overrides.

    Flags can only switch options on; an absent flag leaves the file value.

    Raises:
        ConfigurationError: If the file or an override is invalid
    """
    path = config_path if config_path is not None else discover_config_file()
    config = load_config(path) if path is not None else SortudConfig()

    return config.apply_overrides(
        {
            "display": {
                "max_depth": max_depth,
                "ascending": ascending or None,
                "humanize": humanize or None,
                "si": si or None,
                "show_time": time or None,
                "color": False if no_color else None,
                "local_time": local_time or None,
            },
            "walk": {"skip_symlinks": skip_symlinks or None},
            "application": {"log_level": log_level},
        }
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("path", type=click.Path(path_type=str))
@click.option(
    "--max-depth", "-d",
    type=click.IntRange(min=1),
    default=None,
    metavar="N",
    help="Only print entries up to N levels deep (sizes still cover the whole tree)",
)
@click.option(
    "--ascending", "-a",
    is_flag=True,
    help="Sort entries smallest first, rather than the default largest first",
)
@click.option(
    "--humanize", "-s",
    is_flag=True,
    help="Print sizes in human readable format (e.g. 1.000 KB, 23.500 MB)",
)
@click.option(
    "--si",
    is_flag=True,
    help="Use powers of 1000 instead of 1024 with --humanize",
)
@click.option(
    "--time", "-t",
    is_flag=True,
    help="Show time of last modification of the file, or of any file in a directory",
)
@click.option(
    "--skip-symlinks",
    is_flag=True,
    help="Do not follow symbolic links (symlinks are left out of the listing)",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Print plain text without ANSI colors",
)
@click.option(
    "--local-time",
    is_flag=True,
    help="Show modification times in the local timezone instead of UTC",
)
@click.option(
    "--config", "-c",
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help="Configuration file path (.yaml or .yml). If not specified, searches for .sortud.yaml in standard locations.",
)
@click.option(
    "--log-level", "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR)",
)
@click.version_option(version=__version__, prog_name="sortud")
def cli(
    path: str,
    max_depth: int | None,
    ascending: bool,
    humanize: bool,
    si: bool,
    time: bool,
    skip_symlinks: bool,
    no_color: bool,
    local_time: bool,
    config: Path | None,
    log_level: str | None,
) -> None:
    """Display sizes of files and directories, largest first.

    Every directory is annotated with the total size of everything beneath
    it and the most recent modification time found inside it.

    Examples:

        # Show the current directory
        sortud .

        # Human readable sizes, two levels deep
        sortud -s -d 2 ~/projects

        # Include modification times, smallest first
        sortud -t -a /var/log
    """
    try:
        settings = resolve_config(
            config,
            max_depth=max_depth,
            ascending=ascending,
            humanize=humanize,
            si=si,
            time=time,
            skip_symlinks=skip_symlinks,
            no_color=no_color,
            local_time=local_time,
            log_level=log_level,
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    _ = configure_logging(log_level=settings.application.log_level)
    logger.debug("Settings resolved", extra={"settings": settings.model_dump()})

    display = settings.display
    builder = TreeBuilder(
        ascending=display.ascending,
        skip_symlinks=settings.walk.skip_symlinks,
    )

    try:
        root = builder.build(path)
    except TreeBuildError as e:
        logger.error("Walk aborted", extra={"entry": e.path, "reason": e.reason})
        raise click.ClickException(str(e)) from e

    if root is None:
        raise click.ClickException(f"cannot access '{path}'")

    renderer = TreeRenderer(
        humanize=display.humanize,
        unit_base=UnitBase.DECIMAL if display.si else UnitBase.BINARY,
        show_time=display.show_time,
        max_depth=display.max_depth,
        color=display.color,
        indent=display.indent,
        local_time=display.local_time,
    )
    renderer.render(root)
