"""
Error recovery components for the mirror node client.

Provides the exponential backoff retry policy used by the request executor.
"""

from .retry import RetryPolicy, DEFAULT_RETRY_POLICY

__all__ = [
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
]
