"""
Transport layer for the mirror node client.
"""

from .http import HttpTransport, HttpResponse, AiohttpTransport

__all__ = [
    "HttpTransport",
    "HttpResponse",
    "AiohttpTransport",
]
