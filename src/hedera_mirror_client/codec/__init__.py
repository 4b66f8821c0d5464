"""
Mirror Node Codec Module

Key components:
- reader.py / writer.py: protobuf wire-format primitives
- key_codec.py: the ledger's serialized key structure (simple keys, key lists, threshold keys)
- decoders.py: response decoders (base64 payloads, embedded JSON, timestamps, tinybars)
"""

from .reader import WireReader, WireFormatError
from .writer import WireWriter
from .key_codec import (
    MAX_KEY_DEPTH,
    KeyList,
    KeyStructure,
    MalformedKey,
    SimpleKey,
    ThresholdKey,
    UnsupportedKey,
    decode_key,
    encode_key,
)
from .decoders import (
    TINYBARS_PER_HBAR,
    Base64PayloadDecoder,
    PayloadDecoder,
    datetime_to_timestamp,
    decode_nft,
    decode_topic_message,
    parse_embedded_json,
    split_timestamp,
    timestamp_to_datetime,
    timestamp_to_millis,
    tinybars_to_hbar,
)

__all__ = [
    "WireReader",
    "WireFormatError",
    "WireWriter",
    "MAX_KEY_DEPTH",
    "KeyList",
    "KeyStructure",
    "MalformedKey",
    "SimpleKey",
    "ThresholdKey",
    "UnsupportedKey",
    "decode_key",
    "encode_key",
    "TINYBARS_PER_HBAR",
    "Base64PayloadDecoder",
    "PayloadDecoder",
    "datetime_to_timestamp",
    "decode_nft",
    "decode_topic_message",
    "parse_embedded_json",
    "split_timestamp",
    "timestamp_to_datetime",
    "timestamp_to_millis",
    "tinybars_to_hbar",
]
