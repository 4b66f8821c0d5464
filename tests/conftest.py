"""
Test bootstrap:
- Mock transport and client fixtures
- Backoff sleeps replaced by a recorder so retry tests run instantly
"""
import pytest
from unittest.mock import patch

from hedera_mirror_client import HederaMirrorNode, MirrorNodeConfig, RetryPolicy

from helpers import MockTransport


@pytest.fixture
def sleeps():
    """Record backoff delays instead of sleeping."""
    recorded = []

    async def fake_sleep(delay):
        recorded.append(delay)

    with patch("hedera_mirror_client.recovery.retry.asyncio.sleep", side_effect=fake_sleep):
        yield recorded


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def fast_config():
    """Testnet config with a three-attempt policy."""
    return MirrorNodeConfig(retry=RetryPolicy(max_attempts=3, initial_delay=0.01, max_delay=0.04))


@pytest.fixture
def mirror(transport, fast_config, sleeps):
    return HederaMirrorNode(config=fast_config, transport=transport)
