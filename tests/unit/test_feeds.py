"""
Unit tests for the feeds endpoints.

Tests for:
- Listing feed names
- Reading a feed page with and without the since cursor
- Reading the head sequence number from the HEAD response header
- Iterating all entries across pages
"""

import pytest

from serialized_client import Feed, ResponseDecodeError, UnexpectedStatusError
from serialized_client.observability import SpanKindEnum
from tests.fixtures import sample_feed_payload


class TestListFeeds:
    """Tests for FeedsAPI.list()."""

    @pytest.mark.asyncio
    async def test_returns_feed_names(self, client, provider):
        provider.on("GET", "/feeds/", json={"feeds": ["order", "payment"]})

        assert await client.feeds.list() == ["order", "payment"]
        assert provider.last_request.url.path == "/feeds/"

    @pytest.mark.asyncio
    async def test_unexpected_status(self, client, provider):
        provider.on("GET", "/feeds/", 401, json={"message": "unauthorized"})

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await client.feeds.list()

        assert exc_info.value.status_code == 401
        assert "unauthorized" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_null_feeds_is_empty(self, client, provider):
        provider.on("GET", "/feeds/", json={"feeds": None})

        assert await client.feeds.list() == []


class TestGetFeed:
    """Tests for FeedsAPI.get()."""

    @pytest.mark.asyncio
    async def test_decodes_entries(self, client, provider):
        """Entries and their events are decoded from camelCase JSON."""
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(count=2, has_more=True))

        feed = await client.feeds.get("payment")

        assert isinstance(feed, Feed)
        assert feed.has_more is True
        assert [entry.sequence_number for entry in feed.entries] == [1, 2]
        entry = feed.entries[0]
        assert entry.aggregate_id == "aggregate-1"
        assert entry.timestamp == 1_700_000_000_001
        assert entry.events[0].event_type == "PaymentProcessed"
        assert entry.events[0].data == {"amount": 100}

    @pytest.mark.asyncio
    async def test_no_since_query_by_default(self, client, provider):
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(count=0))

        await client.feeds.get("payment")

        assert provider.last_request.url.query == b""

    @pytest.mark.asyncio
    async def test_no_since_query_for_non_positive_cursor(self, client, provider):
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(count=0))

        await client.feeds.get("payment", since=-5)

        assert "since" not in provider.last_request.url.params

    @pytest.mark.asyncio
    async def test_since_query_passed_verbatim(self, client, provider):
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(first_sequence=43))

        await client.feeds.get("payment", since=42)

        assert provider.last_request.url.params["since"] == "42"

    @pytest.mark.asyncio
    async def test_feed_name_is_escaped(self, client, provider):
        provider.on("GET", "/feeds/odd%2Fname", json=sample_feed_payload(count=0))

        await client.feeds.get("odd/name")

        assert provider.last_request.url.raw_path == b"/feeds/odd%2Fname"

    @pytest.mark.asyncio
    async def test_null_entries_and_events_are_empty(self, client, provider):
        provider.on(
            "GET",
            "/feeds/payment",
            json={
                "entries": [{"sequenceNumber": 1, "aggregateId": "a-1", "events": None}],
                "hasMore": False,
            },
        )
        provider.on("GET", "/feeds/order", json={"entries": None, "hasMore": False})

        payment = await client.feeds.get("payment")
        order = await client.feeds.get("order")

        assert payment.entries[0].events == []
        assert order.entries == []

    @pytest.mark.asyncio
    async def test_error_path_keeps_escaping(self, client, provider):
        provider.on("GET", "/feeds/odd%2Fname", 500)

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await client.feeds.get("odd/name")

        assert exc_info.value.path == "/feeds/odd%2Fname"

    @pytest.mark.asyncio
    async def test_invalid_body_raises_decode_error(self, client, provider):
        provider.on("GET", "/feeds/payment", content=b"not json")

        with pytest.raises(ResponseDecodeError):
            await client.feeds.get("payment")

    @pytest.mark.asyncio
    async def test_span_attributes(self, client, provider, tracer):
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(count=0))

        await client.feeds.get("payment", since=7)

        name, attributes = tracer.spans[-1]
        assert name == "serialized.feeds.get"
        assert attributes["serialized.feed.name"] == "payment"
        assert attributes["serialized.feed.since"] == 7


class TestFeedSequenceNumber:
    """Tests for FeedsAPI.sequence_number()."""

    @pytest.mark.asyncio
    async def test_reads_header(self, client, provider):
        provider.on("HEAD", "/feeds/payment", headers={"Current-Sequence-Number": "1234"})

        assert await client.feeds.sequence_number("payment") == 1234
        assert provider.last_request.method == "HEAD"

    @pytest.mark.asyncio
    async def test_missing_header(self, client, provider):
        provider.on("HEAD", "/feeds/payment")

        with pytest.raises(ResponseDecodeError) as exc_info:
            await client.feeds.sequence_number("payment")

        assert "Current-Sequence-Number" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["+7", "-1"])
    async def test_signed_header(self, client, provider, value):
        provider.on("HEAD", "/feeds/payment", headers={"Current-Sequence-Number": value})

        assert await client.feeds.sequence_number("payment") == int(value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["abc", "1_000", "7.0", ""])
    async def test_non_integer_header(self, client, provider, value):
        provider.on("HEAD", "/feeds/payment", headers={"Current-Sequence-Number": value})

        with pytest.raises(ResponseDecodeError):
            await client.feeds.sequence_number("payment")

    @pytest.mark.asyncio
    async def test_unexpected_status(self, client, provider):
        provider.on("HEAD", "/feeds/payment", 404)

        with pytest.raises(UnexpectedStatusError):
            await client.feeds.sequence_number("payment")


class TestIterEntries:
    """Tests for FeedsAPI.iter_entries()."""

    @pytest.mark.asyncio
    async def test_follows_pages_until_has_more_is_false(self, client, provider):
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(1, 2, has_more=True))
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(3, 2, has_more=True))
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(5, 1, has_more=False))

        entries = [entry async for entry in client.feeds.iter_entries("payment")]

        assert [entry.sequence_number for entry in entries] == [1, 2, 3, 4, 5]
        cursors = [request.url.params.get("since") for request in provider.requests]
        assert cursors == [None, "2", "4"]

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self, client, provider):
        provider.on("GET", "/feeds/payment", json={"entries": [], "hasMore": True})

        entries = [entry async for entry in client.feeds.iter_entries("payment", since=10)]

        assert entries == []
        assert len(provider.requests) == 1
        assert provider.last_request.url.params["since"] == "10"

    @pytest.mark.asyncio
    async def test_stops_when_cursor_does_not_advance(self, client, provider, caplog):
        """A provider repeating a page with has_more set does not loop forever."""
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(1, 2, has_more=True))

        entries = [entry async for entry in client.feeds.iter_entries("payment")]

        assert [entry.sequence_number for entry in entries] == [1, 2]
        assert len(provider.requests) == 2
        assert "did not advance past sequence 2" in caplog.text

    @pytest.mark.asyncio
    async def test_pages_run_inside_iteration_span(self, client, provider, tracer):
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(1, 2, has_more=True))
        provider.on("GET", "/feeds/payment", json=sample_feed_payload(3, 1, has_more=False))

        async for _ in client.feeds.iter_entries("payment", since=0):
            pass

        assert tracer.span_names == [
            "serialized.feeds.iter_entries",
            "serialized.feeds.get",
            "serialized.feeds.get",
        ]
        assert tracer.kinds == [SpanKindEnum.INTERNAL, SpanKindEnum.CLIENT, SpanKindEnum.CLIENT]
        assert tracer.spans[0][1] == {
            "serialized.feed.name": "payment",
            "serialized.feed.since": 0,
        }
