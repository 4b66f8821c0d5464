"""
Client configuration.

Configuration values are immutable. Reconfiguring a client builds a new
``MirrorNodeConfig`` and swaps it in as a whole.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from .recovery.retry import RetryPolicy, DEFAULT_RETRY_POLICY
from .runtime.errors import ConfigurationError
from .runtime.url import EndpointResolver


class NetworkTarget(str, Enum):
    """Ledger networks with a public mirror node."""
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def default_origin(self) -> str:
        return NETWORK_ORIGINS[self]

    @classmethod
    def parse(cls, value: str) -> NetworkTarget:
        try:
            return cls(value.lower())
        except ValueError:
            raise ConfigurationError(f"Unsupported network: {value}")


NETWORK_ORIGINS = {
    NetworkTarget.MAINNET: "https://mainnet-public.mirrornode.hedera.com",
    NetworkTarget.TESTNET: "https://testnet.mirrornode.hedera.com",
}


@dataclass(frozen=True)
class ProviderConfig:
    """
    Custom mirror node provider settings.

    Attributes:
        custom_url: Origin overriding the network default; may contain the
            ``<API-KEY>`` placeholder
        api_key: Key sent as bearer token and ``X-API-Key`` header, and
            substituted into ``custom_url``
        headers: Extra headers sent with every request
    """
    custom_url: Optional[str] = None
    api_key: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def merged(self, custom_url: Optional[str] = None, api_key: Optional[str] = None,
               headers: Optional[Mapping[str, str]] = None) -> ProviderConfig:
        """Return a copy with the given values applied; headers are merged."""
        merged_headers = dict(self.headers)
        if headers:
            merged_headers.update(headers)
        return ProviderConfig(
            custom_url=custom_url or self.custom_url,
            api_key=api_key or self.api_key,
            headers=merged_headers,
        )


@dataclass(frozen=True)
class MirrorNodeConfig:
    """Complete configuration of a mirror node client."""

    network: NetworkTarget = NetworkTarget.TESTNET
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    retry: RetryPolicy = DEFAULT_RETRY_POLICY
    timeout: float = 30.0
    user_agent: str = "hedera-mirror-client-python/1.0.0"

    @property
    def origin(self) -> str:
        """Configured origin before API key substitution."""
        return (self.provider.custom_url or self.network.default_origin).rstrip("/")

    @property
    def resolver(self) -> EndpointResolver:
        return EndpointResolver(self.origin, self.provider.api_key)

    def with_provider(self, **changes) -> MirrorNodeConfig:
        return replace(self, provider=self.provider.merged(**changes))

    def with_retry(self, **changes) -> MirrorNodeConfig:
        return replace(self, retry=self.retry.updated(**changes))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> MirrorNodeConfig:
        """
        Build a configuration from environment variables.

        Reads ``HEDERA_NETWORK``, ``MIRROR_NODE_URL`` and ``MIRROR_NODE_API_KEY``.
        """
        env = os.environ if environ is None else environ
        network = NetworkTarget.parse(env.get("HEDERA_NETWORK", NetworkTarget.TESTNET.value))
        provider = ProviderConfig(
            custom_url=env.get("MIRROR_NODE_URL") or None,
            api_key=env.get("MIRROR_NODE_API_KEY") or None,
        )
        return cls(network=network, provider=provider)
