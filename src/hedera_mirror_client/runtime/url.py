"""
Endpoint resolution for mirror node URLs.

Builds absolute request URLs from relative paths against the configured
origin, including providers that embed the API key in the URL path.
"""

import re
from typing import Optional, Union
from urllib.parse import urlparse

from .errors import ConfigurationError


API_KEY_PLACEHOLDER = "<API-KEY>"

RANGE_OPERATORS = ("gt", "gte", "lt", "lte", "eq", "ne")
_RANGE_RE = re.compile(r"^(gt|gte|lt|lte|eq|ne):")

_ENTITY_ID_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


class EndpointResolver:
    """
    Resolves relative API paths against a mirror node origin.

    If the origin contains the ``<API-KEY>`` placeholder and an API key is
    configured, the key is substituted into the origin. Without a key the
    placeholder is left in place; the provider then rejects the request.
    """

    def __init__(self, origin: str, api_key: Optional[str] = None):
        self._origin = origin
        self._api_key = api_key

    @property
    def origin(self) -> str:
        """The origin with the API key substituted where possible."""
        if self._api_key and API_KEY_PLACEHOLDER in self._origin:
            return self._origin.replace(API_KEY_PLACEHOLDER, self._api_key)
        return self._origin

    def resolve(self, path: str) -> str:
        """
        Build an absolute URL for a path.

        Args:
            path: Relative path, with or without a leading separator

        Returns:
            Absolute URL
        """
        origin = self.origin
        if path.startswith("/"):
            return f"{origin}{path}"
        return f"{origin}/{path}"

    def redact(self, text: str) -> str:
        """Put the placeholder back wherever the key-bearing origin appears in ``text``."""
        origin = self.origin
        if origin == self._origin:
            return text
        return text.replace(origin, self._origin)

    def resolve_cursor(self, cursor: str) -> str:
        """Resolve a next-page cursor, which is relative unless it carries a scheme."""
        if urlparse(cursor).scheme:
            return cursor
        return self.resolve(cursor)


def range_filter(value: Union[str, int], default_operator: Optional[str] = None) -> str:
    """
    Format a range filter value as ``<op>:<value>``.

    Values already carrying an operator are passed through. Bare values get
    ``default_operator`` when one is given.
    """
    text = str(value)
    if _RANGE_RE.match(text) or default_operator is None:
        return text
    if default_operator not in RANGE_OPERATORS:
        raise ConfigurationError(f"Unknown range operator: {default_operator}")
    return f"{default_operator}:{text}"


def to_evm_address(entity_or_address: str) -> str:
    """
    Convert a ``shard.realm.num`` entity id to a ``0x`` EVM address.

    The address packs shard into 4 bytes, realm and num into 8 bytes each.
    Values already starting with ``0x`` are returned unchanged.
    """
    if entity_or_address.startswith("0x"):
        return entity_or_address
    match = _ENTITY_ID_RE.match(entity_or_address)
    if not match:
        raise ValueError(f"Invalid entity id: {entity_or_address}")
    shard, realm, num = (int(part) for part in match.groups())
    return "0x" + shard.to_bytes(4, "big").hex() + realm.to_bytes(8, "big").hex() + num.to_bytes(8, "big").hex()
