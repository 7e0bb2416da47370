"""Utility functions and helpers for LockDiff."""

from .logging import setup_logging, get_logger
from .performance import PerformanceMonitor, benchmark
from .input import iter_diff_lines, validate_diff_file

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
    "benchmark",
    "iter_diff_lines",
    "validate_diff_file",
]
