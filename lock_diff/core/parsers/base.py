"""Base parser class, errors and data models for lockfile diff parsing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

from ...utils.input import iter_diff_lines, iter_stream_lines


class LockDiffError(Exception):
    """Base class for all LockDiff errors."""


class LockfileParseError(LockDiffError):
    """Raised when a declaration line cannot be split into name and version."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


@dataclass
class ResolvedEntry:
    """Version specifiers that resolved to one exact version.

    ``old`` holds specifiers from removed declaration lines and ``new`` from
    added ones. Duplicates are kept in encounter order.
    """

    old: List[str] = field(default_factory=list)
    new: List[str] = field(default_factory=list)


# dependency name -> resolved version -> entry, in encounter order
ResolvedVersionMap = Dict[str, Dict[str, ResolvedEntry]]


@dataclass
class UnresolvedBatch:
    """Declarations seen since the last resolution line."""

    added_declared: List[str] = field(default_factory=list)
    removed_declared: List[str] = field(default_factory=list)
    current_dependency: Optional[str] = None

    def store(self, added: bool, dependency: str, specifiers: List[str]) -> None:
        """Record the specifiers of one declaration line.

        Args:
            added: True for a ``+`` line, False for a ``-`` line
            dependency: Dependency name the specifiers belong to
            specifiers: Version specifiers in line order
        """
        self.current_dependency = dependency
        if added:
            self.added_declared.extend(specifiers)
        else:
            self.removed_declared.extend(specifiers)

    def resolve(self, resolved: ResolvedVersionMap, version: str) -> None:
        """Attach the pending declarations to ``version`` and reset.

        Args:
            resolved: Map being built by the current parse
            version: Exact version named by the resolution line
        """
        versions = resolved.setdefault(self.current_dependency, {})
        entry = versions.setdefault(version, ResolvedEntry())
        entry.old.extend(self.removed_declared)
        entry.new.extend(self.added_declared)
        self.reset()

    def reset(self) -> None:
        self.added_declared = []
        self.removed_declared = []
        self.current_dependency = None


class BaseParser(ABC):
    """Abstract base class for lockfile diff parsers."""

    def __init__(self) -> None:
        """Initialize the parser."""
        self.dialects: List[str] = []

    @abstractmethod
    def parse(self, lines: Iterable[str]) -> ResolvedVersionMap:
        """Parse diff lines into a resolved version map.

        Args:
            lines: Diff lines in arrival order

        Returns:
            Mapping of dependency name to resolved versions
        """
        pass

    def parse_file(self, file_path: Path) -> ResolvedVersionMap:
        """Parse a diff stored on disk, streaming it line by line.

        Args:
            file_path: Path to the diff file

        Returns:
            Mapping of dependency name to resolved versions
        """
        return self.parse(iter_diff_lines(file_path))

    def parse_stream(self, stream: TextIO) -> ResolvedVersionMap:
        """Parse a diff read from an open text stream such as stdin."""
        return self.parse(iter_stream_lines(stream))
