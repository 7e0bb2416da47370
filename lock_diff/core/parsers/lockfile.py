"""Parser for yarn.lock diffs (classic and berry line conventions)."""

import re
from typing import Iterable, List, Tuple

from ...utils.logging import get_logger
from ...utils.performance import benchmark
from .base import BaseParser, LockfileParseError, ResolvedVersionMap, UnresolvedBatch

# +"@atlaskit/blanket@^10.0.1", "@atlaskit/blanket@^10.0.14":
DECLARATION_LINE = re.compile(r"^[+-]\S.*:$")
# name@range or name@npm:range; scoped names start with @
NAME_VERSION = re.compile(r"^(@?[^@]+)@(npm:)?(.+)$")
#   version "1.2.3"  (classic)  /  version: 1.2.3  (berry)
VERSION_LINE = re.compile(r'^[+-]?\s{2,3}version:?\s+"?([^"\s]+)"?')

TOKEN_SEPARATOR = ", "


class LockfileDiffParser(BaseParser):
    """Rebuild resolved versions for both sides of a lockfile diff.

    Declaration lines (``+"left-pad@^1.0.0":``) accumulate version specifiers
    for the current dependency until a ``version`` line names the exact
    version they resolve to. Only one declaration batch is pending at a time
    and lines are consumed in order without lookahead.
    """

    def __init__(self) -> None:
        """Initialize the lockfile diff parser."""
        super().__init__()
        self.dialects = ["yarn-classic", "yarn-berry"]
        self.logger = get_logger("LockfileDiffParser")

    @benchmark
    def parse(self, lines: Iterable[str]) -> ResolvedVersionMap:
        """Parse diff lines into a resolved version map.

        Args:
            lines: Diff lines in arrival order; consumed once

        Returns:
            Mapping of dependency name to resolved versions

        Raises:
            LockfileParseError: If a declaration token has no ``name@version`` form
        """
        resolved: ResolvedVersionMap = {}
        batch = UnresolvedBatch()
        line_count = 0

        for line_number, line in enumerate(lines, 1):
            line_count = line_number
            line = line.rstrip("\r\n")

            if DECLARATION_LINE.match(line):
                dependency, specifiers = self._parse_declaration(line, line_number)
                batch.store(line[0] == "+", dependency, specifiers)

            version_match = VERSION_LINE.match(line)
            if version_match and batch.current_dependency:
                batch.resolve(resolved, version_match.group(1))

        self.logger.debug(f"Parsed {line_count} lines, {len(resolved)} dependencies resolved")
        return resolved

    def _parse_declaration(self, line: str, line_number: int) -> Tuple[str, List[str]]:
        """Split a declaration line into its dependency and version specifiers.

        Args:
            line: Declaration line including sign and trailing colon
            line_number: 1-based line number for error reporting

        Returns:
            Tuple of the dependency name and its specifiers in line order
        """
        dependency = ""
        specifiers = []

        for token in line[1:-1].split(TOKEN_SEPARATOR):
            match = NAME_VERSION.match(token.replace('"', "").strip())
            if not match:
                self.logger.error(f"Malformed declaration at line {line_number}: {line}")
                raise LockfileParseError(
                    f"cannot read dependency name and version from {token!r}",
                    line_number=line_number,
                    line=line,
                )
            # all tokens on one line declare the same dependency
            dependency = match.group(1)
            specifiers.append(match.group(3))

        return dependency, specifiers
