"""
Hedera Mirror Node Python Client

This package provides a resilient, read-only async client for the Hedera
mirror node REST API, together with an evaluator that checks whether a
public key appears in an account's key structure.
"""

# Facade and configuration
from .facade import HederaMirrorNode, create_client
from .config import MirrorNodeConfig, NetworkTarget, ProviderConfig

# Error handling and URL resolution
from .runtime.errors import *
from .runtime.url import EndpointResolver, API_KEY_PLACEHOLDER, range_filter, to_evm_address

# Request execution
from .recovery import RetryPolicy, DEFAULT_RETRY_POLICY
from .client import RequestExecutor
from .pagination import Paginator
from .transport import HttpTransport, HttpResponse, AiohttpTransport

# Keys and decoding
from .crypto import PublicKey, KeyType
from .codec import (
    KeyList, SimpleKey, ThresholdKey, UnsupportedKey, MalformedKey,
    decode_key, encode_key, MAX_KEY_DEPTH,
    PayloadDecoder, Base64PayloadDecoder, tinybars_to_hbar,
)
from .operations import KeyAccessEvaluator, has_access

# Options and results
from .options import (
    AirdropQuery, BlocksQuery, ContractActionsQuery, ContractCallOptions,
    ContractLogsQuery, ContractResultsQuery, ContractsQuery, ContractStateQuery,
    NftsQuery, OpcodeTraceOptions, TopicMessagesFilter, TopicMessagesQuery,
)
from .models import JsonPayload, RawPayload, TopicMessage, NftDetail, ScheduleStatus

__version__ = "1.0.0"
__all__ = [
    "HederaMirrorNode",
    "create_client",
    "MirrorNodeConfig",
    "NetworkTarget",
    "ProviderConfig",
    "ErrorCode",
    "MirrorNodeError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "RequestError",
    "ClientRequestError",
    "MaxRetriesExceeded",
    "DecodeError",
    "KeyDecodeError",
    "KeyDepthExceeded",
    "PublicKeyError",
    "EndpointResolver",
    "API_KEY_PLACEHOLDER",
    "range_filter",
    "to_evm_address",
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "RequestExecutor",
    "Paginator",
    "HttpTransport",
    "HttpResponse",
    "AiohttpTransport",
    "PublicKey",
    "KeyType",
    "KeyList",
    "SimpleKey",
    "ThresholdKey",
    "UnsupportedKey",
    "MalformedKey",
    "decode_key",
    "encode_key",
    "MAX_KEY_DEPTH",
    "PayloadDecoder",
    "Base64PayloadDecoder",
    "tinybars_to_hbar",
    "KeyAccessEvaluator",
    "has_access",
    "AirdropQuery",
    "BlocksQuery",
    "ContractActionsQuery",
    "ContractCallOptions",
    "ContractLogsQuery",
    "ContractResultsQuery",
    "ContractsQuery",
    "ContractStateQuery",
    "NftsQuery",
    "OpcodeTraceOptions",
    "TopicMessagesFilter",
    "TopicMessagesQuery",
    "JsonPayload",
    "RawPayload",
    "TopicMessage",
    "NftDetail",
    "ScheduleStatus",
]
