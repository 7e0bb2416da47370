"""LockDiff - summarise resolved package changes in a lockfile diff."""

__version__ = "0.1.0"

from .core.classifier import ChangeClassifier, ChangeRecord, ClassifiedChanges
from .core.parsers import LockfileDiffParser, LockfileParseError
from .output.formatters import ConsoleFormatter, JSONFormatter
from .sizes.client import PackageSizeClient

__all__ = [
    "ChangeClassifier",
    "ChangeRecord",
    "ClassifiedChanges",
    "LockfileDiffParser",
    "LockfileParseError",
    "PackageSizeClient",
    "ConsoleFormatter",
    "JSONFormatter",
]
