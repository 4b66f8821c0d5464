"""
Retrying request executor.

Performs one logical GET or POST against the mirror node. Each attempt goes
through the transport once; the configured ``RetryPolicy`` decides whether
a failed attempt is retried.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..config import MirrorNodeConfig
from ..runtime.errors import DecodeError, RequestError, TransportError
from ..transport.http import HttpTransport, AiohttpTransport


logger = logging.getLogger(__name__)


def build_headers(config: MirrorNodeConfig, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Build request headers.

    Provider headers are applied over the defaults and per-call headers over
    those. When an API key is configured it is sent both as a bearer token
    and as ``X-API-Key``.
    """
    headers = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    headers.update(config.provider.headers)
    if extra:
        headers.update(extra)
    if config.provider.api_key:
        headers["Authorization"] = f"Bearer {config.provider.api_key}"
        headers["X-API-Key"] = config.provider.api_key
    return headers


class RequestExecutor:
    """
    Executes mirror node requests under a retry policy.

    The configuration is passed per call, so a request keeps the config it
    started with even if the client is reconfigured meanwhile.
    """

    def __init__(self, transport: Optional[HttpTransport] = None):
        self.transport = transport or AiohttpTransport()

    async def get(self, url: str, config: MirrorNodeConfig,
                  headers: Optional[Mapping[str, str]] = None) -> Any:
        """
        GET a URL and return the decoded JSON body.

        Raises:
            ClientRequestError: On a terminal 4xx status
            MaxRetriesExceeded: When retryable failures exhaust the policy
        """
        return await self._execute("GET", url, config, headers)

    async def post(self, url: str, body: Dict[str, Any], config: MirrorNodeConfig,
                   headers: Optional[Mapping[str, str]] = None) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        post_headers = {"Content-Type": "application/json"}
        if headers:
            post_headers.update(headers)
        return await self._execute("POST", url, config, post_headers, body)

    async def _execute(self, method: str, url: str, config: MirrorNodeConfig,
                       headers: Optional[Mapping[str, str]] = None,
                       body: Optional[Dict[str, Any]] = None) -> Any:
        request_headers = build_headers(config, headers)
        resolver = config.resolver
        # logs and errors carry the URL with the key placeholder, not the key
        display_url = resolver.redact(url)

        async def attempt() -> Any:
            logger.debug(f"{method} {display_url}")
            try:
                response = await self.transport.request(
                    method, url, request_headers, json_body=body, timeout=config.timeout
                )
            except TransportError as e:
                if display_url == url:
                    raise
                raise TransportError(resolver.redact(e.message), url=display_url, cause=e.cause) from None
            except DecodeError as e:
                if display_url == url:
                    raise
                raise DecodeError(resolver.redact(e.message), cause=e.cause) from None
            if not response.ok:
                raise RequestError.from_status(display_url, response.status, response.reason)
            return response.body

        return await config.retry.execute(attempt, display_url)

    async def close(self) -> None:
        await self.transport.close()
