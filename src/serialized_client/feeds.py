"""
Feed endpoints.

A feed is the ordered log of events for one aggregate type. Entries carry a
monotonically increasing sequence number that callers pass back as the
``since`` cursor to read only newer entries.

This module provides:
- Feed, FeedEntry: Response models
- FeedsAPI: list feeds, read a feed page, read the head sequence number,
  and iterate all entries page by page
"""

from __future__ import annotations

import logging
import re
from collections.abc import AsyncIterator

from pydantic import Field

from serialized_client.exceptions import ResponseDecodeError
from serialized_client.models import Event, SerializedModel
from serialized_client.observability import ATTR_FEED_NAME, ATTR_FEED_SINCE
from serialized_client.transport import HTTPTransport, path_segment

logger = logging.getLogger(__name__)

SEQUENCE_NUMBER_HEADER = "Current-Sequence-Number"

_SEQUENCE_NUMBER = re.compile(r"[+-]?[0-9]+")


class FeedEntry(SerializedModel):
    """
    One entry of a feed: the events stored in a single request to an aggregate.

    Attributes:
        sequence_number: Position of this entry in the feed
        aggregate_id: Aggregate the events belong to
        timestamp: When the entry was stored (epoch milliseconds)
        events: The stored events
    """

    sequence_number: int = 0
    aggregate_id: str = ""
    timestamp: int = 0
    events: list[Event] = Field(default_factory=list)


class Feed(SerializedModel):
    """A page of feed entries."""

    entries: list[FeedEntry] = Field(default_factory=list)
    has_more: bool = False


class _FeedNames(SerializedModel):
    feeds: list[str] = Field(default_factory=list)


class FeedsAPI:
    """
    Read access to the provider's feeds.

    Example:
        >>> names = await client.feeds.list()
        >>> page = await client.feeds.get("payment", since=120)
        >>> async for entry in client.feeds.iter_entries("payment"):
        ...     handle(entry)
    """

    def __init__(self, transport: HTTPTransport) -> None:
        self._transport = transport

    async def list(self) -> list[str]:
        """Return the names of all feeds."""
        request = self._transport.new_request("GET", "/feeds/")
        body = await self._transport.fetch(
            request,
            expected_status=200,
            response_model=_FeedNames,
            operation="feeds.list",
        )
        return body.feeds

    async def get(self, name: str, since: int = 0) -> Feed:
        """
        Read one page of a feed.

        Args:
            name: Feed name (the aggregate type)
            since: Only return entries after this sequence number. Values
                <= 0 read from the start of the feed.

        Returns:
            The page, with has_more set when further entries exist
        """
        params = {"since": since} if since > 0 else None
        request = self._transport.new_request(
            "GET", f"/feeds/{path_segment(name)}", params=params
        )
        return await self._transport.fetch(
            request,
            expected_status=200,
            response_model=Feed,
            operation="feeds.get",
            attributes={ATTR_FEED_NAME: name, ATTR_FEED_SINCE: since},
        )

    async def sequence_number(self, name: str) -> int:
        """
        Return the sequence number at the head of a feed.

        Raises:
            ResponseDecodeError: If the Current-Sequence-Number header is
                missing or not an integer
        """
        path = f"/feeds/{path_segment(name)}"
        request = self._transport.new_request("HEAD", path)
        response = await self._transport.do(
            request,
            expected_status=200,
            operation="feeds.sequence_number",
            attributes={ATTR_FEED_NAME: name},
        )

        raw = response.headers.get(SEQUENCE_NUMBER_HEADER)
        if raw is None:
            raise ResponseDecodeError(path, f"missing {SEQUENCE_NUMBER_HEADER} header")
        if not _SEQUENCE_NUMBER.fullmatch(raw):
            raise ResponseDecodeError(
                path, f"{SEQUENCE_NUMBER_HEADER} header is not an integer: {raw!r}"
            )
        return int(raw)

    async def iter_entries(self, name: str, since: int = 0) -> AsyncIterator[FeedEntry]:
        """
        Iterate over every feed entry after ``since``, fetching pages as needed.

        Iteration stops when the provider reports no more entries, returns an
        empty page, or returns a page that does not advance past the cursor.
        The page requests run as children of one serialized.feeds.iter_entries
        span.
        """
        cursor = since
        pages = 0
        with self._transport.tracer.span(
            "serialized.feeds.iter_entries",
            {ATTR_FEED_NAME: name, ATTR_FEED_SINCE: since},
        ):
            while True:
                feed = await self.get(name, since=cursor)
                pages += 1
                if not feed.entries:
                    break
                last = feed.entries[-1].sequence_number
                if last <= cursor:
                    logger.warning(
                        "Feed %s did not advance past sequence %d (page ended at %d)",
                        name,
                        cursor,
                        last,
                        extra={"feed": name, "since": cursor, "last_sequence": last},
                    )
                    break
                for entry in feed.entries:
                    yield entry
                if not feed.has_more:
                    break
                cursor = last

        logger.debug("Read %d page(s) of feed %s up to sequence %d", pages, name, cursor)


__all__ = [
    "Feed",
    "FeedEntry",
    "FeedsAPI",
    "SEQUENCE_NUMBER_HEADER",
]
