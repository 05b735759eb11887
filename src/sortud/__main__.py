"""Entry point for ``python -m sortud``."""

from __future__ import annotations

from sortud.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the sortud command-line interface."""
    cli(prog_name="sortud")


if __name__ == "__main__":
    main()
