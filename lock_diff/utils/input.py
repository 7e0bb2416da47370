"""Helpers for reading lockfile diffs from files and standard input."""

import os
import sys
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

STDIN_MARKER = "-"


def validate_diff_file(file_path: Path) -> None:
    """Validate that the diff file exists and is readable.

    Args:
        file_path: Path to validate

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If path is not a regular file
        PermissionError: If file is not readable
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if not file_path.is_file():
        raise ValueError(f"Path is not a file: {file_path}")

    if not os.access(file_path, os.R_OK):
        raise PermissionError(f"File is not readable: {file_path}")


def iter_stream_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from a text stream without their line terminators."""
    for line in stream:
        yield line.rstrip("\r\n")


def iter_diff_lines(source: Optional[Union[str, Path]] = None) -> Iterator[str]:
    """Lazily yield the lines of a diff.

    Args:
        source: Path to a diff file; ``None`` or ``"-"`` reads standard input

    Yields:
        Diff lines with line terminators removed
    """
    if source is None or str(source) == STDIN_MARKER:
        yield from iter_stream_lines(sys.stdin)
        return

    file_path = Path(source)
    validate_diff_file(file_path)

    with open(file_path, "r", encoding="utf-8") as f:
        yield from iter_stream_lines(f)
