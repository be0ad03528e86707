"""
The Serialized client.

SerializedClient wires a ClientConfig to an HTTP transport and exposes the
provider's resources as attributes:

- feeds: FeedsAPI
- projections: ProjectionsAPI
- reactions: ReactionsAPI
- aggregates: AggregatesAPI

Example:
    >>> from serialized_client import ClientConfig, SerializedClient
    >>>
    >>> async with SerializedClient(ClientConfig.from_env()) as client:
    ...     for name in await client.feeds.list():
    ...         head = await client.feeds.sequence_number(name)
    ...         print(name, head)
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from serialized_client.aggregates import AggregatesAPI
from serialized_client.config import ClientConfig
from serialized_client.feeds import FeedsAPI
from serialized_client.observability import Tracer
from serialized_client.projections import ProjectionsAPI
from serialized_client.reactions import ReactionsAPI
from serialized_client.transport import HTTPTransport

logger = logging.getLogger(__name__)


class SerializedClient:
    """
    Async client for the Serialized event-sourcing API.

    Args:
        config: Connection settings (default: ClientConfig() against the hosted API)
        http_client: AsyncClient to send requests with. The client does not
            close an injected AsyncClient.
        tracer: Tracer for request spans (default: derived from config.enable_tracing)
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = HTTPTransport(self._config, http_client=http_client, tracer=tracer)

        self.feeds = FeedsAPI(self._transport)
        self.projections = ProjectionsAPI(self._transport)
        self.reactions = ReactionsAPI(self._transport)
        self.aggregates = AggregatesAPI(self._transport)

        if not self._config.has_credentials:
            logger.info(
                "SerializedClient for %s has no access keys configured",
                self._config.base_url,
            )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> HTTPTransport:
        return self._transport

    @property
    def closed(self) -> bool:
        return self._transport.closed

    async def aclose(self) -> None:
        """Release the underlying HTTP connections."""
        await self._transport.aclose()

    async def __aenter__(self) -> SerializedClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"SerializedClient(base_url={self._config.base_url!r}, closed={self.closed})"


__all__ = ["SerializedClient"]
