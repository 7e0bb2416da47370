"""Classification of resolved version changes into added, removed and updated."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..utils.logging import get_logger
from ..utils.performance import benchmark
from .parsers.base import ResolvedEntry, ResolvedVersionMap
from .versions import is_major_upgrade


@dataclass(frozen=True)
class ChangeRecord:
    """Net change of one dependency's resolved versions."""

    dependency: str
    added_versions: Tuple[str, ...] = ()
    removed_versions: Tuple[str, ...] = ()
    is_major_upgrade: bool = False

    def __post_init__(self) -> None:
        """Validate the record."""
        if not self.dependency:
            raise ValueError("Dependency name cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to the report's JSON shape.

        Returns:
            Dictionary with camelCase keys
        """
        return {
            "dependency": self.dependency,
            "addedVersions": list(self.added_versions),
            "removedVersions": list(self.removed_versions),
            "isMajorUpgrade": self.is_major_upgrade,
        }


@dataclass
class ClassifiedChanges:
    """Change records split into mutually exclusive buckets."""

    added: List[ChangeRecord] = field(default_factory=list)
    removed: List[ChangeRecord] = field(default_factory=list)
    updated: List[ChangeRecord] = field(default_factory=list)

    def major_updates(self) -> List[ChangeRecord]:
        return [record for record in self.updated if record.is_major_upgrade]

    def minor_updates(self) -> List[ChangeRecord]:
        return [record for record in self.updated if not record.is_major_upgrade]

    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.updated)

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "added": [record.to_dict() for record in self.added],
            "removed": [record.to_dict() for record in self.removed],
            "updated": [record.to_dict() for record in self.updated],
        }


def _only_old(entry: ResolvedEntry) -> bool:
    return bool(entry.old) and not entry.new


def _only_new(entry: ResolvedEntry) -> bool:
    return bool(entry.new) and not entry.old


class ChangeClassifier:
    """Reduce a resolved version map to per-dependency change records."""

    def __init__(self) -> None:
        """Initialize the change classifier."""
        self.logger = get_logger("ChangeClassifier")

    @benchmark
    def classify(self, resolved: ResolvedVersionMap) -> ClassifiedChanges:
        """Classify every dependency of a resolved version map.

        Records keep the map's dependency order within each bucket.

        Args:
            resolved: Output of a lockfile diff parse

        Returns:
            Added, removed and updated change records
        """
        changes = ClassifiedChanges()

        for dependency, versions in resolved.items():
            # a resolved version with both old and new specifiers only changed
            # the ranges pointing at it, so it counts as neither side
            added_versions = tuple(v for v, entry in versions.items() if _only_new(entry))
            removed_versions = tuple(v for v, entry in versions.items() if _only_old(entry))

            if len(added_versions) == len(removed_versions) and set(added_versions) <= set(removed_versions):
                self.logger.debug(f"{dependency}: no resolved version change")
                continue

            record = ChangeRecord(
                dependency=dependency,
                added_versions=added_versions,
                removed_versions=removed_versions,
                is_major_upgrade=is_major_upgrade(added_versions, removed_versions),
            )

            if len(added_versions) > len(removed_versions):
                changes.added.append(record)
                bucket = "added"
            elif len(removed_versions) > len(added_versions):
                changes.removed.append(record)
                bucket = "removed"
            else:
                changes.updated.append(record)
                bucket = "updated"

            self.logger.debug(
                f"{dependency}: {bucket} (+{len(added_versions)} -{len(removed_versions)}, "
                f"major={record.is_major_upgrade})"
            )

        return changes
