"""
Reaction endpoints.

A reaction is a rule kept by the provider: when an event of a given type
appears on a feed, the provider performs an action, typically an HTTP
callback. The client registers and lists reactions; triggering happens
server side.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from serialized_client.models import SerializedModel
from serialized_client.observability import ATTR_FEED_NAME, ATTR_REACTION_NAME
from serialized_client.transport import HTTPTransport

REACTIONS_PATH = "/reactions"


class Action(SerializedModel):
    """
    What the provider does when a reaction fires.

    Attributes:
        http_method: Method used for the callback (e.g., 'POST')
        target_uri: URL called by the provider
        body: Request body sent to target_uri
        action_type: Kind of action (e.g., 'HTTP')
    """

    omit_empty: ClassVar[bool] = False

    http_method: str = ""
    target_uri: str = ""
    body: str = ""
    action_type: str = ""


class Reaction(SerializedModel):
    """
    A reaction registered with the provider.

    Every field is always sent, including empty ones.

    Example:
        >>> reaction = Reaction(
        ...     name="PaymentProcessedEmailReaction",
        ...     feed="payment",
        ...     event_type="PaymentProcessed",
        ...     action=Action(
        ...         http_method="POST",
        ...         target_uri="https://your-webhook",
        ...         body="A new payment was processed",
        ...         action_type="HTTP",
        ...     ),
        ... )
    """

    omit_empty: ClassVar[bool] = False

    id: str = ""
    name: str = ""
    feed: str = ""
    event_type: str = ""
    action: Action = Field(default_factory=Action)


class _ReactionList(SerializedModel):
    reactions: list[Reaction] = Field(default_factory=list)


class ReactionsAPI:
    """Register and list reactions."""

    def __init__(self, transport: HTTPTransport) -> None:
        self._transport = transport

    async def create(self, reaction: Reaction) -> None:
        """
        Register a new reaction.

        The provider answers 201 Created; any other status raises
        UnexpectedStatusError.
        """
        request = self._transport.new_request("POST", REACTIONS_PATH, body=reaction)
        await self._transport.do(
            request,
            expected_status=201,
            operation="reactions.create",
            attributes={
                ATTR_REACTION_NAME: reaction.name,
                ATTR_FEED_NAME: reaction.feed,
            },
        )

    async def list(self) -> list[Reaction]:
        """Return all registered reactions."""
        request = self._transport.new_request("GET", REACTIONS_PATH)
        body = await self._transport.fetch(
            request,
            expected_status=200,
            response_model=_ReactionList,
            operation="reactions.list",
        )
        return body.reactions


__all__ = [
    "Action",
    "Reaction",
    "ReactionsAPI",
]
