"""Async package size lookup client for LockDiff."""

import asyncio
import ssl
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..config import LockDiffConfig
from ..core.classifier import ChangeRecord
from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor

VersionSelector = Callable[[ChangeRecord], Sequence[str]]


def to_kilobytes(size: int) -> str:
    """Format a byte count as kilobytes with two decimals."""
    return f"{size / 1024:.2f}"


def total_size(sizes: Dict[str, int]) -> int:
    return sum(sizes.values())


class PackageSizeClient:
    """Async client for a bundle size service keyed by package and version.

    Lookups are sent in small concurrent batches with a pause in between so
    the service is not hit too often. A failed lookup never fails the batch:
    the version simply contributes no size.
    """

    SIZE_HEADER = "X-Bundlephobia-User"

    def __init__(
        self,
        config: Optional[LockDiffConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        performance_monitor: Optional[PerformanceMonitor] = None,
    ) -> None:
        """Initialize the package size client.

        Args:
            config: Lookup configuration (defaults to ``LockDiffConfig()``)
            session: Optional aiohttp session for connection reuse
            performance_monitor: Optional monitor receiving lookup timings
        """
        self.config = config or LockDiffConfig()
        self.logger = get_logger("PackageSizeClient")
        self.performance_monitor = performance_monitor or PerformanceMonitor()
        self._session = session
        self._owns_session = session is None
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "PackageSizeClient":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def fetch_size(self, name: str, version: str) -> Optional[int]:
        """Fetch the bundle size of one package version.

        Args:
            name: Package name
            version: Exact package version

        Returns:
            Size in bytes, or None if the lookup failed
        """
        package = f"{name}@{version}"
        session = self._get_session()

        try:
            async with session.get(
                self.config.size_api_url,
                params={"package": package},
                headers={self.SIZE_HEADER: self.config.size_user_agent},
            ) as response:
                if response.status != 200:
                    self.logger.warning(f"Size lookup for {package} failed: HTTP {response.status}")
                    return None

                data = await response.json()
                return int(data["size"])
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.warning(f"Size lookup for {package} failed: {e}")
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Unexpected size response for {package}: {e}")

        return None

    async def load_sizes(
        self,
        records: Sequence[ChangeRecord],
        versions_of: VersionSelector,
    ) -> Dict[str, int]:
        """Sum the sizes of selected versions for each record.

        Args:
            records: Change records to look up
            versions_of: Picks the versions to size for a record,
                e.g. ``lambda r: r.added_versions``

        Returns:
            Mapping of dependency name to total bytes; dependencies without
            any successful lookup are left out
        """
        with self.performance_monitor.measure("load_sizes"):
            pairs = [
                (record.dependency, version)
                for record in records
                for version in versions_of(record)
            ]
            sizes: Dict[str, int] = {}

            groups = self._batch(pairs)
            for index, group in enumerate(groups):
                self.logger.info(
                    "Requesting sizes for " + ", ".join(f"{name}@{version}" for name, version in group)
                )
                results = await asyncio.gather(
                    *(self.fetch_size(name, version) for name, version in group)
                )

                for (name, _), size in zip(group, results):
                    if size is not None:
                        sizes[name] = sizes.get(name, 0) + size

                if index < len(groups) - 1 and self.config.size_batch_delay:
                    await asyncio.sleep(self.config.size_batch_delay)

            return sizes

    def _batch(self, pairs: List[Tuple[str, str]]) -> List[List[Tuple[str, str]]]:
        size = self.config.size_batch_size
        return [pairs[x:x + size] for x in range(0, len(pairs), size)]

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Returns:
            aiohttp ClientSession
        """
        if not self._session or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.config.request_timeout),
                connector=connector
            )
            self._owns_session = True
        return self._session
