"""
Tests for the retry policy.

Covers backoff delay calculation, terminal vs retryable classification and
the attempt ceiling.
"""

import pytest
from unittest.mock import AsyncMock

from hedera_mirror_client.recovery.retry import RetryPolicy, DEFAULT_RETRY_POLICY
from hedera_mirror_client.runtime.errors import (
    ClientRequestError,
    ConfigurationError,
    MaxRetriesExceeded,
    RequestError,
    TransportError,
)


URL = "https://testnet.mirrornode.hedera.com/api/v1/accounts/0.0.1"


def status_error(status: int) -> RequestError:
    return RequestError.from_status(URL, status, "Reason")


class TestBackoff:
    """Test delay calculation."""

    def test_defaults(self):
        assert DEFAULT_RETRY_POLICY.max_attempts == 5
        assert DEFAULT_RETRY_POLICY.initial_delay == 2.0
        assert DEFAULT_RETRY_POLICY.max_delay == 30.0
        assert DEFAULT_RETRY_POLICY.backoff_factor == 2.0

    def test_exponential_growth(self):
        policy = RetryPolicy(max_attempts=5, initial_delay=1.0, max_delay=100.0, backoff_factor=2.0)

        assert policy.calculate_delay(1) == 1.0
        assert policy.calculate_delay(2) == 2.0
        assert policy.calculate_delay(3) == 4.0
        assert policy.calculate_delay(4) == 8.0

    def test_delay_clamped_to_max(self):
        policy = RetryPolicy(max_attempts=10, initial_delay=2.0, max_delay=30.0, backoff_factor=2.0)

        assert list(policy.delays()) == [2.0, 4.0, 8.0, 16.0, 30.0, 30.0, 30.0, 30.0, 30.0]

    @pytest.mark.parametrize("attempts,initial,factor,cap", [
        (1, 0.5, 2.0, 1.0),
        (4, 1.0, 3.0, 5.0),
        (6, 0.25, 1.5, 2.0),
        (3, 2.0, 1.0, 2.0),
    ])
    def test_delay_formula(self, attempts, initial, factor, cap):
        policy = RetryPolicy(max_attempts=attempts, initial_delay=initial, max_delay=cap, backoff_factor=factor)

        delays = list(policy.delays())
        assert len(delays) == attempts - 1
        # delay before attempt k (k >= 2)
        for k, delay in enumerate(delays, start=2):
            assert delay == min(initial * factor ** (k - 2), cap)

    def test_updated_ignores_none(self):
        policy = RetryPolicy().updated(max_attempts=2, initial_delay=None)

        assert policy.max_attempts == 2
        assert policy.initial_delay == 2.0


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {"max_attempts": 0},
        {"initial_delay": -1.0},
        {"initial_delay": 40.0, "max_delay": 30.0},
        {"backoff_factor": 0.5},
    ])
    def test_invalid_policy_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            RetryPolicy(**kwargs)


class TestClassification:
    """Test terminal vs retryable status classification."""

    @pytest.mark.parametrize("status", [400, 401, 402, 403, 405, 409, 410, 422, 451, 499])
    def test_client_errors_are_terminal(self, status):
        assert RetryPolicy().is_terminal_status(status)

    @pytest.mark.parametrize("status", [404, 429, 500, 502, 503, 504, None])
    def test_retryable_statuses(self, status):
        assert not RetryPolicy().is_terminal_status(status)

    def test_not_found_terminal_when_disabled(self):
        assert RetryPolicy(retry_not_found=False).is_terminal_status(404)


class TestExecute:
    """Test the retry loop."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self, sleeps):
        operation = AsyncMock(return_value={"ok": True})

        result = await RetryPolicy().execute(operation, URL)

        assert result == {"ok": True}
        assert operation.await_count == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self, sleeps):
        operation = AsyncMock(side_effect=[status_error(503), status_error(429), {"ok": True}])
        policy = RetryPolicy(max_attempts=5, initial_delay=1.0, max_delay=10.0)

        result = await policy.execute(operation, URL)

        assert result == {"ok": True}
        assert operation.await_count == 3
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 405, 422])
    async def test_terminal_status_single_attempt(self, sleeps, status):
        operation = AsyncMock(side_effect=status_error(status))

        with pytest.raises(ClientRequestError) as exc_info:
            await RetryPolicy().execute(operation, URL)

        assert operation.await_count == 1
        assert exc_info.value.status == status
        assert sleeps == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 500, 502, 503])
    async def test_retryable_status_exhausts_attempts(self, sleeps, status):
        operation = AsyncMock(side_effect=status_error(status))
        policy = RetryPolicy(max_attempts=4, initial_delay=0.5, max_delay=1.0)

        with pytest.raises(MaxRetriesExceeded) as exc_info:
            await policy.execute(operation, URL)

        assert operation.await_count == 4
        assert sleeps == [0.5, 1.0, 1.0]
        assert exc_info.value.attempts == 4
        assert exc_info.value.status == status
        assert f"Request failed with status {status}" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_errors_are_retried(self, sleeps):
        operation = AsyncMock(side_effect=TransportError("connection reset", url=URL))

        with pytest.raises(MaxRetriesExceeded) as exc_info:
            await RetryPolicy(max_attempts=3).execute(operation, URL)

        assert operation.await_count == 3
        assert exc_info.value.status is None
        assert isinstance(exc_info.value.last_error, TransportError)
        assert "connection reset" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_not_found_retried_by_default(self, sleeps):
        operation = AsyncMock(side_effect=[status_error(404), {"account": "0.0.1"}])

        result = await RetryPolicy().execute(operation, URL)

        assert result == {"account": "0.0.1"}
        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_not_found_single_attempt_when_disabled(self, sleeps):
        operation = AsyncMock(side_effect=status_error(404))

        with pytest.raises(ClientRequestError) as exc_info:
            await RetryPolicy(retry_not_found=False).execute(operation, URL)

        assert exc_info.value.is_not_found
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_single_attempt_policy(self, sleeps):
        operation = AsyncMock(side_effect=status_error(500))

        with pytest.raises(MaxRetriesExceeded):
            await RetryPolicy(max_attempts=1).execute(operation, URL)

        assert operation.await_count == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_other_exceptions_propagate(self, sleeps):
        operation = AsyncMock(side_effect=KeyError("boom"))

        with pytest.raises(KeyError):
            await RetryPolicy().execute(operation, URL)

        assert operation.await_count == 1
