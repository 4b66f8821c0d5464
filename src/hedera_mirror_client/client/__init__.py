"""
Request execution for the mirror node client.
"""

from .executor import RequestExecutor, build_headers

__all__ = [
    "RequestExecutor",
    "build_headers",
]
