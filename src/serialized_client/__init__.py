"""
serialized_client - Async Python client for the Serialized event-sourcing API.

This library provides:
- Feed reads with since-cursor paging
- Projection definition management and projection queries
- Reaction registration
- Aggregate event storage and loading
- Pydantic models mirroring the provider's JSON schema
- Optional OpenTelemetry tracing of every request
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("serialized-client-py")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from serialized_client.aggregates import Aggregate, AggregatesAPI, StoreEventsRequest
from serialized_client.client import SerializedClient
from serialized_client.config import DEFAULT_BASE_URL, ClientConfig
from serialized_client.exceptions import (
    APIConnectionError,
    ClientClosedError,
    ResponseDecodeError,
    SerializedError,
    UnexpectedStatusError,
)
from serialized_client.feeds import Feed, FeedEntry, FeedsAPI
from serialized_client.models import Event, SerializedModel
from serialized_client.projections import (
    EventHandler,
    Function,
    Projection,
    ProjectionDefinition,
    ProjectionsAPI,
)
from serialized_client.reactions import Action, Reaction, ReactionsAPI
from serialized_client.transport import HTTPTransport

__all__ = [
    "__version__",
    # Client
    "SerializedClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "HTTPTransport",
    # Exceptions
    "SerializedError",
    "APIConnectionError",
    "UnexpectedStatusError",
    "ResponseDecodeError",
    "ClientClosedError",
    # Models
    "SerializedModel",
    "Event",
    "Feed",
    "FeedEntry",
    "Projection",
    "ProjectionDefinition",
    "EventHandler",
    "Function",
    "Reaction",
    "Action",
    "Aggregate",
    "StoreEventsRequest",
    # Resource APIs
    "FeedsAPI",
    "ProjectionsAPI",
    "ReactionsAPI",
    "AggregatesAPI",
]
