"""Runtime configuration for LockDiff."""

import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

DEFAULT_SIZE_API_URL = "https://bundlephobia.com/api/size"

# environment variable -> (field name, converter)
ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "LOCKDIFF_SIZE_API_URL": ("size_api_url", str),
    "LOCKDIFF_SIZE_USER_AGENT": ("size_user_agent", str),
    "LOCKDIFF_SIZE_BATCH_SIZE": ("size_batch_size", int),
    "LOCKDIFF_SIZE_BATCH_DELAY": ("size_batch_delay", float),
    "LOCKDIFF_REQUEST_TIMEOUT": ("request_timeout", float),
}


@dataclass
class LockDiffConfig:
    """Configuration for the package size lookup."""

    size_api_url: str = DEFAULT_SIZE_API_URL
    size_user_agent: str = "lockdiff"
    size_batch_size: int = 4
    size_batch_delay: float = 2.0
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.size_api_url:
            raise ValueError("Size API URL cannot be empty")
        if self.size_batch_size < 1:
            raise ValueError(f"Size batch size must be at least 1, got {self.size_batch_size}")
        if self.size_batch_delay < 0:
            raise ValueError(f"Size batch delay cannot be negative, got {self.size_batch_delay}")
        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LockDiffConfig":
        """Build a configuration from ``LOCKDIFF_*`` environment variables.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Configuration with environment overrides applied

        Raises:
            ValueError: If a variable cannot be converted or fails validation
        """
        environ = os.environ if environ is None else environ

        overrides: Dict[str, Any] = {}
        for env_name, (field_name, convert) in ENV_OVERRIDES.items():
            raw = environ.get(env_name)
            if raw is None:
                continue
            try:
                overrides[field_name] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e

        return cls(**overrides)
