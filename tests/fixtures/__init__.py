"""
Shared test fixtures for the serialized_client library.

Usage:
    from tests.fixtures import ProviderStub, sample_reaction_payload
"""

from tests.fixtures.payloads import (
    REACTION_ID,
    sample_feed_payload,
    sample_reaction_payload,
)
from tests.fixtures.provider import ProviderStub

__all__ = [
    "ProviderStub",
    "REACTION_ID",
    "sample_feed_payload",
    "sample_reaction_payload",
]
