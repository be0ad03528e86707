"""
Unit tests for SerializedClient.

Tests for:
- Resource API wiring
- Async context manager and closing
- Logging when no credentials are configured
"""

import logging

import pytest

from serialized_client import (
    AggregatesAPI,
    ClientClosedError,
    ClientConfig,
    FeedsAPI,
    ProjectionsAPI,
    ReactionsAPI,
    SerializedClient,
)


class TestSerializedClient:
    """Tests for client construction."""

    def test_exposes_resource_apis(self, client):
        assert isinstance(client.feeds, FeedsAPI)
        assert isinstance(client.projections, ProjectionsAPI)
        assert isinstance(client.reactions, ReactionsAPI)
        assert isinstance(client.aggregates, AggregatesAPI)

    def test_default_config(self):
        client = SerializedClient(ClientConfig(enable_tracing=False))

        assert client.config.base_url == "https://api.serialized.io"
        assert client.transport.config is client.config

    def test_repr(self, client):
        assert repr(client) == (
            "SerializedClient(base_url='https://api.serialized.test', closed=False)"
        )

    def test_logs_missing_credentials(self, caplog):
        with caplog.at_level(logging.INFO, logger="serialized_client.client"):
            SerializedClient(ClientConfig(enable_tracing=False))

        assert "no access keys configured" in caplog.text


class TestClientLifecycle:
    """Tests for closing the client."""

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, config, http_client, tracer):
        async with SerializedClient(config, http_client=http_client, tracer=tracer) as client:
            assert client.closed is False

        assert client.closed is True

    @pytest.mark.asyncio
    async def test_operations_after_close_raise(self, config, http_client, tracer):
        client = SerializedClient(config, http_client=http_client, tracer=tracer)
        await client.aclose()

        with pytest.raises(ClientClosedError):
            await client.feeds.list()

    @pytest.mark.asyncio
    async def test_owned_http_client_closed(self, config):
        client = SerializedClient(config)

        await client.aclose()

        assert client.transport._client.is_closed is True
