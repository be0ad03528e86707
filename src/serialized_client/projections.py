"""
Projection endpoints.

Projections are read models the provider builds from a feed. The client
administers the definitions that tell the provider how to build them and
reads the resulting projections; it never computes a projection itself.

Two kinds of projection exist:
- single: one projection per aggregate, addressed by projection name and aggregate id
- aggregated: one projection over the whole feed, addressed by projection name
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from serialized_client.models import SerializedModel
from serialized_client.observability import ATTR_AGGREGATE_ID, ATTR_PROJECTION_NAME
from serialized_client.transport import HTTPTransport, path_segment

DEFINITIONS_PATH = "/projections/definitions"
SINGLE_PATH = "/projections/single"
AGGREGATED_PATH = "/projections/aggregated"


class Projection(SerializedModel):
    """
    A projection as computed by the provider.

    Attributes:
        projection_id: Id of the projection (the aggregate id for single projections)
        data: The projected JSON document
    """

    projection_id: str = ""
    data: Any = None


class Function(SerializedModel):
    """
    A template function applied to a projection when a handler fires.

    Attributes:
        function: Function name (e.g., 'set', 'inc', 'push')
        target_selector: JSONPath into the projection to modify
        event_selector: JSONPath into the event to read from
        target_filter: Filter applied to the target selection
        event_filter: Filter applied to the event selection
        raw_data: Literal value used instead of an event selection
    """

    function: str = ""
    target_selector: str = ""
    event_selector: str = ""
    target_filter: str = ""
    event_filter: str = ""
    raw_data: Any = None


class EventHandler(SerializedModel):
    """Functions to run against the projection for one event type."""

    event_type: str = ""
    functions: list[Function] = Field(default_factory=list)


class ProjectionDefinition(SerializedModel):
    """
    How the provider builds a projection from a feed.

    Example:
        >>> definition = ProjectionDefinition(
        ...     projection_name="payment-totals",
        ...     feed_name="payment",
        ...     handlers=[
        ...         EventHandler(
        ...             event_type="PaymentProcessed",
        ...             functions=[Function(function="inc", target_selector="$.projection.count")],
        ...         )
        ...     ],
        ... )
    """

    projection_name: str = ""
    feed_name: str = ""
    handlers: list[EventHandler] = Field(default_factory=list)


class _DefinitionList(SerializedModel):
    definitions: list[ProjectionDefinition] = Field(default_factory=list)


class _ProjectionList(SerializedModel):
    projections: list[Projection] = Field(default_factory=list)


class ProjectionsAPI:
    """Administer projection definitions and read projections."""

    def __init__(self, transport: HTTPTransport) -> None:
        self._transport = transport

    # =========================================================================
    # Definitions
    # =========================================================================

    async def list_definitions(self) -> list[ProjectionDefinition]:
        """Return all projection definitions."""
        request = self._transport.new_request("GET", DEFINITIONS_PATH)
        body = await self._transport.fetch(
            request,
            expected_status=200,
            response_model=_DefinitionList,
            operation="projections.list_definitions",
        )
        return body.definitions

    async def create_definition(self, definition: ProjectionDefinition) -> None:
        """Register a new projection definition."""
        request = self._transport.new_request("POST", DEFINITIONS_PATH, body=definition)
        await self._transport.do(
            request,
            expected_status=200,
            operation="projections.create_definition",
            attributes={ATTR_PROJECTION_NAME: definition.projection_name},
        )

    async def get_definition(self, name: str) -> ProjectionDefinition:
        """Return the projection definition with the given name."""
        request = self._transport.new_request(
            "GET", f"{DEFINITIONS_PATH}/{path_segment(name)}"
        )
        return await self._transport.fetch(
            request,
            expected_status=200,
            response_model=ProjectionDefinition,
            operation="projections.get_definition",
            attributes={ATTR_PROJECTION_NAME: name},
        )

    async def delete_definition(self, name: str) -> None:
        """Delete a projection definition and the projections built from it."""
        request = self._transport.new_request(
            "DELETE", f"{DEFINITIONS_PATH}/{path_segment(name)}"
        )
        await self._transport.do(
            request,
            expected_status=200,
            operation="projections.delete_definition",
            attributes={ATTR_PROJECTION_NAME: name},
        )

    # =========================================================================
    # Single projections
    # =========================================================================

    async def get_single(self, projection_name: str, aggregate_id: str) -> Projection:
        """Return the single projection of one aggregate."""
        request = self._transport.new_request(
            "GET",
            f"{SINGLE_PATH}/{path_segment(projection_name)}/{path_segment(aggregate_id)}",
        )
        return await self._transport.fetch(
            request,
            expected_status=200,
            response_model=Projection,
            operation="projections.get_single",
            attributes={
                ATTR_PROJECTION_NAME: projection_name,
                ATTR_AGGREGATE_ID: aggregate_id,
            },
        )

    async def list_single(self, projection_name: str) -> list[Projection]:
        """Return every single projection built by a definition."""
        request = self._transport.new_request(
            "GET", f"{SINGLE_PATH}/{path_segment(projection_name)}"
        )
        body = await self._transport.fetch(
            request,
            expected_status=200,
            response_model=_ProjectionList,
            operation="projections.list_single",
            attributes={ATTR_PROJECTION_NAME: projection_name},
        )
        return body.projections

    # =========================================================================
    # Aggregated projections
    # =========================================================================

    async def get_aggregated(self, projection_name: str) -> Projection:
        """Return an aggregated projection."""
        request = self._transport.new_request(
            "GET", f"{AGGREGATED_PATH}/{path_segment(projection_name)}"
        )
        return await self._transport.fetch(
            request,
            expected_status=200,
            response_model=Projection,
            operation="projections.get_aggregated",
            attributes={ATTR_PROJECTION_NAME: projection_name},
        )

    async def list_aggregated(self) -> list[Projection]:
        """Return all aggregated projections."""
        request = self._transport.new_request("GET", AGGREGATED_PATH)
        body = await self._transport.fetch(
            request,
            expected_status=200,
            response_model=_ProjectionList,
            operation="projections.list_aggregated",
        )
        return body.projections


__all__ = [
    "Projection",
    "ProjectionDefinition",
    "EventHandler",
    "Function",
    "ProjectionsAPI",
]
