"""
Aggregate endpoints.

An aggregate is an event stream identified by its type and id. Storing
events appends them to the stream (and to the feed of that aggregate type);
loading returns the whole stream.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import Field

from serialized_client.models import Event, SerializedModel
from serialized_client.observability import (
    ATTR_AGGREGATE_ID,
    ATTR_AGGREGATE_TYPE,
    ATTR_EVENT_COUNT,
)
from serialized_client.transport import HTTPTransport, path_segment

logger = logging.getLogger(__name__)


class Aggregate(SerializedModel):
    """
    An aggregate's event stream as returned by the provider.

    Attributes:
        aggregate_id: Id of the aggregate
        aggregate_type: Type of the aggregate (also the feed name)
        aggregate_version: Version after the last stored event
        events: Every event of the aggregate, oldest first
    """

    aggregate_id: str = ""
    aggregate_type: str = ""
    aggregate_version: int = 0
    events: list[Event] = Field(default_factory=list)


class StoreEventsRequest(SerializedModel):
    """
    Body of a store request.

    expected_version is left out when None, so the provider skips its
    optimistic concurrency check.
    """

    events: list[Event]
    expected_version: int | None = None


def _aggregate_path(aggregate_type: str, aggregate_id: str) -> str:
    return f"/aggregates/{path_segment(aggregate_type)}/{path_segment(aggregate_id)}"


class AggregatesAPI:
    """
    Store and load aggregate events.

    Example:
        >>> await client.aggregates.store(
        ...     "payment",
        ...     payment_id,
        ...     [Event.new("PaymentProcessed", {"amount": 1000})],
        ...     expected_version=0,
        ... )
        >>> aggregate = await client.aggregates.load("payment", payment_id)
    """

    def __init__(self, transport: HTTPTransport) -> None:
        self._transport = transport

    async def store(
        self,
        aggregate_type: str,
        aggregate_id: str,
        events: Sequence[Event],
        expected_version: int | None = None,
    ) -> None:
        """
        Append events to an aggregate.

        Args:
            aggregate_type: Type of the aggregate
            aggregate_id: Id of the aggregate
            events: Events to store, in order
            expected_version: Version the aggregate must currently have.
                The provider rejects the request with 409 on mismatch.

        Raises:
            ValueError: If events is empty
            UnexpectedStatusError: If the provider rejects the request
        """
        if not events:
            raise ValueError("events must contain at least one event")

        body = StoreEventsRequest(events=list(events), expected_version=expected_version)
        request = self._transport.new_request(
            "POST",
            f"{_aggregate_path(aggregate_type, aggregate_id)}/events",
            body=body,
        )
        await self._transport.do(
            request,
            expected_status=200,
            operation="aggregates.store",
            attributes={
                ATTR_AGGREGATE_TYPE: aggregate_type,
                ATTR_AGGREGATE_ID: aggregate_id,
                ATTR_EVENT_COUNT: len(events),
            },
        )
        logger.debug(
            "Stored %d event(s) on %s/%s",
            len(events),
            aggregate_type,
            aggregate_id,
        )

    async def load(self, aggregate_type: str, aggregate_id: str) -> Aggregate:
        """Return the full event stream of an aggregate."""
        request = self._transport.new_request(
            "GET", _aggregate_path(aggregate_type, aggregate_id)
        )
        return await self._transport.fetch(
            request,
            expected_status=200,
            response_model=Aggregate,
            operation="aggregates.load",
            attributes={
                ATTR_AGGREGATE_TYPE: aggregate_type,
                ATTR_AGGREGATE_ID: aggregate_id,
            },
        )

    async def exists(self, aggregate_type: str, aggregate_id: str) -> bool:
        """
        Check whether an aggregate has any stored events.

        Returns:
            True on 200, False on 404

        Raises:
            UnexpectedStatusError: For any other status
        """
        request = self._transport.new_request(
            "HEAD", _aggregate_path(aggregate_type, aggregate_id)
        )
        response = await self._transport.do(
            request,
            expected_status=(200, 404),
            operation="aggregates.exists",
            attributes={
                ATTR_AGGREGATE_TYPE: aggregate_type,
                ATTR_AGGREGATE_ID: aggregate_id,
            },
        )
        return response.status_code == 200


__all__ = [
    "Aggregate",
    "AggregatesAPI",
    "StoreEventsRequest",
]
