"""Package size lookup for LockDiff reports."""

from .client import PackageSizeClient, to_kilobytes, total_size

__all__ = [
    "PackageSizeClient",
    "to_kilobytes",
    "total_size",
]
