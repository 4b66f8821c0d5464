"""
Key structure codec.

Decodes and encodes the ledger's protobuf ``Key`` message::

    message Key {
      oneof key {
        ContractID contractID = 1;
        bytes ed25519 = 2;
        bytes RSA_3072 = 3;
        bytes ECDSA_384 = 4;
        ThresholdKey thresholdKey = 5;
        KeyList keyList = 6;
        bytes ECDSA_secp256k1 = 7;
        ContractID delegatable_contract_id = 8;
      }
    }
    message ThresholdKey { uint32 threshold = 1; KeyList keys = 2; }
    message KeyList { repeated Key keys = 1; }

Structures nest arbitrarily in the format, so decoding enforces a maximum
depth. A child of a key list that cannot be decoded becomes a
``MalformedKey`` leaf instead of failing the whole structure.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from ..crypto.public_key import KeyType
from ..runtime.errors import KeyDecodeError, KeyDepthExceeded
from .reader import WIRE_LEN, WIRE_VARINT, WireFormatError, WireReader
from .writer import WireWriter

logger = logging.getLogger(__name__)

MAX_KEY_DEPTH = 128

FIELD_CONTRACT_ID = 1
FIELD_ED25519 = 2
FIELD_RSA_3072 = 3
FIELD_ECDSA_384 = 4
FIELD_THRESHOLD_KEY = 5
FIELD_KEY_LIST = 6
FIELD_ECDSA_SECP256K1 = 7
FIELD_DELEGATABLE_CONTRACT_ID = 8

_SIMPLE_KEY_FIELDS = {
    FIELD_ED25519: KeyType.ED25519,
    FIELD_ECDSA_SECP256K1: KeyType.ECDSA_SECP256K1,
}
_SIMPLE_KEY_FIELD_BY_TYPE = {v: k for k, v in _SIMPLE_KEY_FIELDS.items()}
_UNSUPPORTED_FIELDS = (FIELD_CONTRACT_ID, FIELD_RSA_3072, FIELD_ECDSA_384, FIELD_DELEGATABLE_CONTRACT_ID)


@dataclass(frozen=True)
class SimpleKey:
    """A single public key."""
    key_bytes: bytes
    key_type: KeyType = KeyType.ED25519


@dataclass(frozen=True)
class KeyList:
    """Ordered list of keys; all must sign for full authorization."""
    keys: Tuple[KeyStructure, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "keys", tuple(self.keys))


@dataclass(frozen=True)
class ThresholdKey:
    """Ordered list of keys of which ``threshold`` must sign."""
    threshold: int
    keys: Tuple[KeyStructure, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "keys", tuple(self.keys))


@dataclass(frozen=True)
class UnsupportedKey:
    """
    A key variant that carries no comparable public key (contract ids,
    RSA, ECDSA P-384), or no key at all when ``field_number`` is None.
    """
    field_number: Optional[int] = None
    value: bytes = b""


@dataclass(frozen=True)
class MalformedKey:
    """A key list entry whose bytes could not be decoded."""
    raw: bytes
    error: str = ""


KeyStructure = Union[SimpleKey, KeyList, ThresholdKey, UnsupportedKey, MalformedKey]


@dataclass
class _Frame:
    """A key list or threshold key whose children are still being walked."""
    threshold: Optional[int]
    children: Sequence
    depth: int = 0
    results: List = field(default_factory=list)
    position: int = 0

    def next_child(self):
        if self.position >= len(self.children):
            return None
        child = self.children[self.position]
        self.position += 1
        return child


def decode_key(data: bytes, max_depth: int = MAX_KEY_DEPTH) -> KeyStructure:
    """
    Decode a serialized key structure.

    The structure is walked depth first with an explicit stack, so nesting is
    bounded only by ``max_depth``.

    Args:
        data: Protobuf-encoded ``Key`` message
        max_depth: Maximum nesting of key lists below the top-level key

    Returns:
        The decoded key structure

    Raises:
        KeyDecodeError: If the top-level message is malformed
        KeyDepthExceeded: If nesting exceeds ``max_depth``
    """
    if max_depth < 0:
        raise KeyDepthExceeded(max_depth)
    try:
        root = _scan_key(bytes(data))
    except WireFormatError as e:
        raise KeyDecodeError(f"Error decoding protobuf key: {e}", cause=e)
    if not isinstance(root, _Frame):
        return root

    stack = [root]
    while True:
        frame = stack[-1]
        raw = frame.next_child()
        if raw is not None:
            depth = frame.depth + 1
            if depth > max_depth:
                raise KeyDepthExceeded(max_depth)
            try:
                child = _scan_key(raw)
            except WireFormatError as e:
                error = KeyDecodeError(f"Error decoding protobuf key: {e}", cause=e)
                logger.debug(f"Error in nested key at depth {depth}: {error}")
                frame.results.append(MalformedKey(raw, str(error)))
                continue
            if isinstance(child, _Frame):
                child.depth = depth
                stack.append(child)
            else:
                frame.results.append(child)
            continue

        stack.pop()
        if frame.threshold is None:
            built: KeyStructure = KeyList(frame.results)
        else:
            built = ThresholdKey(frame.threshold, frame.results)
        if not stack:
            return built
        stack[-1].results.append(built)


def _scan_key(data: bytes) -> Union[KeyStructure, _Frame]:
    """Read one ``Key`` message; composite keys come back as a frame of undecoded children."""
    result: Union[KeyStructure, _Frame] = UnsupportedKey()
    # oneof semantics: the last key field on the wire wins
    for field_number, wire_type, value in WireReader(data).fields():
        if field_number in _SIMPLE_KEY_FIELDS:
            _expect_len(field_number, wire_type)
            result = SimpleKey(value, _SIMPLE_KEY_FIELDS[field_number])
        elif field_number == FIELD_KEY_LIST:
            _expect_len(field_number, wire_type)
            result = _Frame(None, _key_list_entries(value))
        elif field_number == FIELD_THRESHOLD_KEY:
            _expect_len(field_number, wire_type)
            result = _scan_threshold_key(value)
        elif field_number in _UNSUPPORTED_FIELDS:
            result = UnsupportedKey(field_number, value if isinstance(value, bytes) else b"")
    return result


def _expect_len(field_number: int, wire_type: int) -> None:
    if wire_type != WIRE_LEN:
        raise WireFormatError(f"Field {field_number} has wire type {wire_type}, expected {WIRE_LEN}")


def _key_list_entries(data: bytes) -> List[bytes]:
    entries: List[bytes] = []
    for field_number, wire_type, value in WireReader(data).fields():
        if field_number != 1:
            continue
        _expect_len(field_number, wire_type)
        entries.append(value)
    return entries


def _scan_threshold_key(data: bytes) -> _Frame:
    threshold = 0
    entries: List[bytes] = []
    for field_number, wire_type, value in WireReader(data).fields():
        if field_number == 1:
            if wire_type != WIRE_VARINT:
                raise WireFormatError(f"Threshold has wire type {wire_type}, expected {WIRE_VARINT}")
            threshold = value
        elif field_number == 2:
            _expect_len(field_number, wire_type)
            entries = _key_list_entries(value)
    return _Frame(threshold, entries)


def encode_key(key: KeyStructure) -> bytes:
    """Encode a key structure as a protobuf ``Key`` message."""
    if not isinstance(key, (KeyList, ThresholdKey)):
        return _encode_leaf(key)

    stack = [(key, _Frame(None, key.keys))]
    while True:
        composite, frame = stack[-1]
        child = frame.next_child()
        if child is not None:
            if isinstance(child, (KeyList, ThresholdKey)):
                stack.append((child, _Frame(None, child.keys)))
            else:
                frame.results.append(_encode_leaf(child))
            continue

        stack.pop()
        encoded = _encode_composite(composite, frame.results)
        if not stack:
            return encoded
        stack[-1][1].results.append(encoded)


def _encode_leaf(key: KeyStructure) -> bytes:
    writer = WireWriter()
    if isinstance(key, SimpleKey):
        writer.bytes_field(_SIMPLE_KEY_FIELD_BY_TYPE[key.key_type], key.key_bytes)
    elif isinstance(key, UnsupportedKey):
        if key.field_number is not None:
            writer.bytes_field(key.field_number, key.value)
    elif isinstance(key, MalformedKey):
        return key.raw
    else:
        raise TypeError(f"Not a key structure: {type(key).__name__}")
    return writer.to_bytes()


def _encode_composite(key: Union[KeyList, ThresholdKey], encoded_children: List[bytes]) -> bytes:
    key_list = WireWriter()
    for child in encoded_children:
        key_list.bytes_field(1, child)

    writer = WireWriter()
    if isinstance(key, KeyList):
        writer.bytes_field(FIELD_KEY_LIST, key_list.to_bytes())
    else:
        inner = WireWriter()
        inner.varint_field(1, key.threshold)
        inner.bytes_field(2, key_list.to_bytes())
        writer.bytes_field(FIELD_THRESHOLD_KEY, inner.to_bytes())
    return writer.to_bytes()
