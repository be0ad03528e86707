"""
Shared pytest fixtures for the serialized_client library tests.

This module provides:
- config: A ClientConfig pointing at a fake provider host with credentials
- provider: A fresh ProviderStub route table
- tracer: A MockTracer recording request spans
- client: A SerializedClient whose requests are answered by the provider stub
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from serialized_client import ClientConfig, SerializedClient
from serialized_client.observability import MockTracer
from tests.fixtures import ProviderStub

TEST_BASE_URL = "https://api.serialized.test"


@pytest.fixture
def config() -> ClientConfig:
    """Config with credentials and tracing left to the injected tracer."""
    return ClientConfig(
        base_url=TEST_BASE_URL,
        access_key="test-access-key",
        secret_access_key="test-secret-access-key",
        enable_tracing=False,
    )


@pytest.fixture
def provider() -> ProviderStub:
    """Create a fresh provider stub for each test."""
    return ProviderStub()


@pytest.fixture
def tracer() -> MockTracer:
    return MockTracer()


@pytest_asyncio.fixture
async def http_client(provider: ProviderStub) -> AsyncGenerator[httpx.AsyncClient, None]:
    """AsyncClient routed through the provider stub."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(provider)) as client:
        yield client


@pytest_asyncio.fixture
async def client(
    config: ClientConfig,
    http_client: httpx.AsyncClient,
    tracer: MockTracer,
) -> AsyncGenerator[SerializedClient, None]:
    """SerializedClient talking to the provider stub."""
    async with SerializedClient(config, http_client=http_client, tracer=tracer) as client:
        yield client
