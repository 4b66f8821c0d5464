"""
Retry policy for mirror node requests.

Provides exponential backoff with a delay ceiling and status-based
classification of failed attempts into terminal and retryable failures.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Iterator, Optional

from ..runtime.errors import (
    ClientRequestError,
    ConfigurationError,
    MaxRetriesExceeded,
    RequestError,
    TransportError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff retry policy.

    The delay before attempt k (k >= 2) is
    ``min(initial_delay * backoff_factor ** (k - 2), max_delay)`` and no more
    than ``max_attempts`` attempts are made.

    Attributes:
        max_attempts: Maximum number of attempts, counted from 1
        initial_delay: Delay in seconds after the first failed attempt
        max_delay: Ceiling applied to every delay
        backoff_factor: Multiplier applied to the delay after each failure
        retry_not_found: Whether 404 responses are retried; the index lags
            consensus, so an entity created moments ago can appear later
    """
    max_attempts: int = 5
    initial_delay: float = 2.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0
    retry_not_found: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.initial_delay < 0:
            raise ConfigurationError(f"initial_delay must be non-negative, got {self.initial_delay}")
        if self.initial_delay > self.max_delay:
            raise ConfigurationError(
                f"initial_delay ({self.initial_delay}) must not exceed max_delay ({self.max_delay})"
            )
        if self.backoff_factor < 1:
            raise ConfigurationError(f"backoff_factor must be at least 1, got {self.backoff_factor}")

    def updated(self, **changes: Any) -> "RetryPolicy":
        """Return a copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate the delay to wait after a failed attempt.

        Args:
            attempt: Number of the attempt that just failed (1-based)

        Returns:
            Delay in seconds before the next attempt
        """
        delay = self.initial_delay * (self.backoff_factor ** (attempt - 1))
        return min(delay, self.max_delay)

    def delays(self) -> Iterator[float]:
        """Yield every delay this policy can produce, in order."""
        for attempt in range(1, self.max_attempts):
            yield self.calculate_delay(attempt)

    def is_terminal_status(self, status: Optional[int]) -> bool:
        """
        Check whether a status marks the request itself as bad.

        Client errors are terminal except 429 (rate limited) and 404, which
        is retried unless ``retry_not_found`` is off.
        """
        if status is None or not 400 <= status < 500:
            return False
        if status == 429:
            return False
        if status == 404:
            return not self.retry_not_found
        return True

    def should_retry(self, attempt: int, error: Exception) -> bool:
        """Determine if another attempt should follow a failed one."""
        if attempt >= self.max_attempts:
            return False
        if isinstance(error, RequestError):
            return not self.is_terminal_status(error.status)
        return isinstance(error, TransportError)

    async def execute(self, operation: Callable[[], Awaitable[Any]], url: Optional[str] = None) -> Any:
        """
        Run an operation under this policy.

        Args:
            operation: Zero-argument coroutine function performing one attempt
            url: URL being requested, used for diagnostics

        Returns:
            The operation's result

        Raises:
            ClientRequestError: On a terminal status, after one attempt
            MaxRetriesExceeded: When retryable failures exhaust the attempts
        """
        attempt = 0

        while attempt < self.max_attempts:
            attempt += 1
            try:
                result = await operation()
                if attempt > 1:
                    logger.info(f"Request to {url} succeeded on attempt {attempt}")
                return result

            except (RequestError, TransportError) as e:
                if isinstance(e, RequestError) and self.is_terminal_status(e.status):
                    logger.error(f"Client error for {url} (status {e.status}): {e}. Not retrying.")
                    raise ClientRequestError(e) from e

                if not self.should_retry(attempt, e):
                    logger.error(f"Max retries ({self.max_attempts}) reached for {url}. Last error: {e}")
                    raise MaxRetriesExceeded(attempt, e, url) from e

                delay = self.calculate_delay(attempt)
                logger.warning(
                    f"Attempt {attempt}/{self.max_attempts} failed for {url}: {e}. "
                    f"Retrying in {delay:.2f}s..."
                )
                await asyncio.sleep(delay)

        # max_attempts >= 1 is enforced, so the loop always returns or raises
        raise MaxRetriesExceeded(attempt, RequestError("no attempt made", url=url), url)


DEFAULT_RETRY_POLICY = RetryPolicy()
