from .mocks import MockTransport, RecordedRequest, error_response
from .factories import (
    b64,
    mk_account,
    mk_ed25519_key,
    mk_message,
    mk_nft,
    mk_page,
    mk_secp256k1_key,
    simple,
)

__all__ = [
    "MockTransport",
    "RecordedRequest",
    "error_response",
    "b64",
    "mk_account",
    "mk_ed25519_key",
    "mk_message",
    "mk_nft",
    "mk_page",
    "mk_secp256k1_key",
    "simple",
]
