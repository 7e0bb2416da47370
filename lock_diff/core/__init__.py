"""Core parsing and change classification logic for LockDiff."""

from .classifier import ChangeClassifier, ChangeRecord, ClassifiedChanges
from .parsers import LockfileDiffParser, ResolvedEntry, ResolvedVersionMap
from .versions import InvalidVersionError, is_major_upgrade, major_version

__all__ = [
    "ChangeClassifier",
    "ChangeRecord",
    "ClassifiedChanges",
    "LockfileDiffParser",
    "ResolvedEntry",
    "ResolvedVersionMap",
    "InvalidVersionError",
    "is_major_upgrade",
    "major_version",
]
