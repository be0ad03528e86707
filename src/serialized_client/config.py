"""
Configuration for the Serialized client.

This module provides:
- ClientConfig: Connection and credential settings for SerializedClient
- DEFAULT_BASE_URL: The hosted provider's API endpoint
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlparse

DEFAULT_BASE_URL = "https://api.serialized.io"
DEFAULT_TIMEOUT = 30.0

ENV_BASE_URL = "SERIALIZED_BASE_URL"
ENV_ACCESS_KEY = "SERIALIZED_ACCESS_KEY"
ENV_SECRET_ACCESS_KEY = "SERIALIZED_SECRET_ACCESS_KEY"
ENV_TIMEOUT = "SERIALIZED_TIMEOUT"


def _default_user_agent() -> str:
    from serialized_client import __version__

    return f"serialized-client-py/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration for a SerializedClient.

    Attributes:
        base_url: Root URL of the provider API (default: https://api.serialized.io)
        access_key: Value sent in the Serialized-Access-Key header
        secret_access_key: Value sent in the Serialized-Secret-Access-Key header
        timeout: Per-request timeout in seconds (default: 30.0)
        user_agent: User-Agent header value
        enable_tracing: Enable OpenTelemetry tracing if available (default: True)

    Example:
        >>> config = ClientConfig(
        ...     access_key="my-access-key",
        ...     secret_access_key="my-secret",
        ... )
        >>>
        >>> # Point at a local test server
        >>> local = config.with_base_url("http://localhost:8080")
    """

    base_url: str = DEFAULT_BASE_URL
    access_key: str | None = field(default=None, repr=False)
    secret_access_key: str | None = field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = field(default_factory=_default_user_agent)
    enable_tracing: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"base_url must be an absolute http(s) URL, got {self.base_url!r}. "
                f"Use something like {DEFAULT_BASE_URL!r}."
            )

        if not (self.timeout > 0 and math.isfinite(self.timeout)):
            raise ValueError(
                f"timeout must be positive and finite, got {self.timeout}. "
                "Use a value like 30.0 (default) seconds."
            )

        if bool(self.access_key) != bool(self.secret_access_key):
            raise ValueError(
                "access_key and secret_access_key must be provided together. "
                f"Set both {ENV_ACCESS_KEY} and {ENV_SECRET_ACCESS_KEY}, or neither."
            )

    @property
    def has_credentials(self) -> bool:
        """Whether API keys are configured."""
        return bool(self.access_key and self.secret_access_key)

    def with_base_url(self, base_url: str) -> ClientConfig:
        """Return a copy of this config pointing at another base URL."""
        return replace(self, base_url=base_url)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> ClientConfig:
        """
        Build a config from SERIALIZED_* environment variables.

        Explicit keyword overrides win over the environment.

        Args:
            environ: Mapping to read from (default: os.environ)
            **overrides: Any ClientConfig field

        Returns:
            A validated ClientConfig

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if env.get(ENV_BASE_URL):
            values["base_url"] = env[ENV_BASE_URL]
        if env.get(ENV_ACCESS_KEY):
            values["access_key"] = env[ENV_ACCESS_KEY]
        if env.get(ENV_SECRET_ACCESS_KEY):
            values["secret_access_key"] = env[ENV_SECRET_ACCESS_KEY]
        if env.get(ENV_TIMEOUT):
            raw = env[ENV_TIMEOUT]
            try:
                values["timeout"] = float(raw)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_TIMEOUT} must be a number of seconds, got {raw!r}"
                ) from exc

        values.update(overrides)
        return cls(**values)


__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
]
