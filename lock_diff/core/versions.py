"""Semantic version helpers used for major upgrade detection."""

import re
from typing import Sequence

from packaging import version as packaging_version
from packaging.version import Version

from .parsers.base import LockDiffError

# leading numeric component of semver-like strings that PEP 440 rejects,
# e.g. "1.0.0-canary.3f2a" or "v2.1.0+build.5"
MAJOR_PATTERN = re.compile(r"^\s*[=v]*(\d+)(?:\.|$|[-+])")


class InvalidVersionError(LockDiffError, ValueError):
    """Raised when a version has no recognisable major component."""


def major_version(version: str) -> int:
    """Extract the major component of a resolved version.

    Args:
        version: Exact version string from a lockfile

    Returns:
        Major version number

    Raises:
        InvalidVersionError: If no major component can be found
    """
    try:
        return Version(version).major
    except packaging_version.InvalidVersion:
        pass

    match = MAJOR_PATTERN.match(version)
    if not match:
        raise InvalidVersionError(f"Invalid version: {version!r}")
    return int(match.group(1))


def is_major_upgrade(added_versions: Sequence[str], removed_versions: Sequence[str]) -> bool:
    """Check whether every added version outgrows some removed major.

    Each added version is compared on its own: it needs at least one removed
    version with a strictly smaller major, not necessarily the same one for
    every added version.

    Args:
        added_versions: Versions present only after the change
        removed_versions: Versions present only before the change

    Returns:
        True if the change counts as a major upgrade
    """
    if not added_versions or not removed_versions:
        return False

    removed_majors = [major_version(v) for v in removed_versions]
    return all(
        any(major_version(added) > removed for removed in removed_majors)
        for added in added_versions
    )
