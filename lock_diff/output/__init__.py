"""Output formatters for LockDiff."""

from .formatters import ConsoleFormatter, JSONFormatter, describe_versions

__all__ = [
    "ConsoleFormatter",
    "JSONFormatter",
    "describe_versions",
]
