"""
Operations over ledger data that need no network access.
"""

from .key_access import KeyAccessEvaluator, has_access

__all__ = [
    "KeyAccessEvaluator",
    "has_access",
]
