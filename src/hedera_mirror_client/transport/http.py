"""
HTTP transport for mirror node requests.

A transport performs exactly one HTTP exchange and reports the outcome;
retries live in the request executor. The default implementation runs on
an aiohttp session that is created lazily and reused across requests.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import aiohttp

from ..runtime.errors import DecodeError, TransportError


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Outcome of one HTTP exchange."""
    status: int
    reason: str = ""
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport(ABC):
    """One-shot HTTP exchange."""

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Perform one request.

        Returns:
            The response; a 2xx body is the decoded JSON document

        Raises:
            TransportError: On network failure or timeout
            DecodeError: If a 2xx body is not JSON
        """

    async def close(self) -> None:
        """Release transport resources."""


class AiohttpTransport(HttpTransport):
    """
    aiohttp-backed transport.

    The session is created on first use so the transport can be built
    outside a running event loop.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
            logger.debug("Created aiohttp session")
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        session = await self._get_session()
        client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None

        try:
            async with session.request(
                method, url, headers=dict(headers), json=json_body, timeout=client_timeout
            ) as response:
                text = await response.text()
                status = response.status
                reason = response.reason or ""
                response_headers = dict(response.headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Network error for {url}: {str(e) or type(e).__name__}", url=url, cause=e)

        if not 200 <= status < 300:
            return HttpResponse(status, reason, text, response_headers)

        try:
            body = json.loads(text) if text else None
        except ValueError as e:
            raise DecodeError(f"Invalid JSON response from {url}: {e}", cause=e)
        return HttpResponse(status, reason, body, response_headers)

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed aiohttp session")
