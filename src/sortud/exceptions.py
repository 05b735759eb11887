"""Exception hierarchy for sortud."""

from __future__ import annotations


class SortudError(Exception):
    """Base class for all sortud errors."""


class TreeBuildError(SortudError):
    """Raised when the walk hits an unrecoverable metadata failure.

    Omitted entries and unreadable directories are recovered inside the
    walk; only conditions that make the whole result meaningless end up
    here.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path: str = path
        self.reason: str = reason
        super().__init__(f"{path}: {reason}")


class ConfigurationError(SortudError):
    """Raised when configuration loading or validation fails.

    Carries detailed, actionable messages for missing files, YAML parsing
    errors and schema validation failures.
    """


class EnvironmentVariableError(SortudError):
    """Raised when a ${VARIABLE} reference in the configuration is unset."""
