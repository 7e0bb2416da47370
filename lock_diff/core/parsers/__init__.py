"""Lockfile diff parsers."""

from .base import (
    BaseParser,
    LockDiffError,
    LockfileParseError,
    ResolvedEntry,
    ResolvedVersionMap,
    UnresolvedBatch,
)
from .lockfile import LockfileDiffParser

__all__ = [
    "BaseParser",
    "LockDiffError",
    "LockfileParseError",
    "LockfileDiffParser",
    "ResolvedEntry",
    "ResolvedVersionMap",
    "UnresolvedBatch",
]
