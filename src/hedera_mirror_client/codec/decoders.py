"""
Response decoders.

Pure transforms applied to mirror node responses: base64 payloads, embedded
JSON, ledger timestamps and tinybar amounts.
"""

from __future__ import annotations
import base64
import binascii
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple, Union

from ..models import JsonPayload, MessagePayload, NftDetail, RawPayload, TopicMessage
from ..runtime.errors import DecodeError

logger = logging.getLogger(__name__)

TINYBARS_PER_HBAR = 100_000_000


class PayloadDecoder(ABC):
    """Strategy for turning an encoded payload field into text."""

    @abstractmethod
    def decode(self, value: str) -> str:
        """
        Decode a payload.

        Raises:
            DecodeError: If the value cannot be decoded
        """


class Base64PayloadDecoder(PayloadDecoder):
    """Strict base64 to UTF-8 text."""

    def decode(self, value: str) -> str:
        try:
            return base64.b64decode(value, validate=True).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            # UnicodeDecodeError is a ValueError
            raise DecodeError(f"Error decoding payload: {e}", cause=e)


def parse_embedded_json(text: str) -> MessagePayload:
    """Parse text as JSON, falling back to raw content."""
    try:
        return JsonPayload(data=json.loads(text))
    except ValueError:
        logger.debug(f"Message content is not valid JSON, using raw: {text[:200]}")
        return RawPayload(raw_content=text)


def split_timestamp(timestamp: str) -> Tuple[int, int]:
    """
    Split a ``seconds.nanoseconds`` ledger timestamp.

    A missing fractional part counts as zero nanoseconds.
    """
    seconds, _, fraction = str(timestamp).partition(".")
    try:
        nanos = int(fraction.ljust(9, "0")[:9]) if fraction else 0
        return int(seconds), nanos
    except ValueError as e:
        raise DecodeError(f"Invalid timestamp: {timestamp}", cause=e)


def timestamp_to_millis(timestamp: str) -> float:
    seconds, nanos = split_timestamp(timestamp)
    return seconds * 1000 + nanos / 1_000_000


def timestamp_to_datetime(timestamp: str) -> datetime:
    return datetime.fromtimestamp(timestamp_to_millis(timestamp) / 1000, tz=timezone.utc)


def datetime_to_timestamp(value: datetime) -> str:
    """Format a datetime as a ``seconds.nanoseconds`` ledger timestamp."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
    seconds = delta.days * 86400 + delta.seconds
    return f"{seconds}.{delta.microseconds * 1000:09d}"


def tinybars_to_hbar(tinybars: Union[int, str]) -> Decimal:
    return Decimal(tinybars) / TINYBARS_PER_HBAR


def decode_topic_message(
    message: Dict[str, Any],
    decoder: PayloadDecoder,
    keep_raw: bool = True,
) -> Optional[TopicMessage]:
    """
    Decode one topic message from a messages page.

    Returns None, after logging, when the item has no payload, the payload
    fails to decode, or it is not JSON and ``keep_raw`` is off.
    """
    content = message.get("message")
    if not content:
        return None

    try:
        text = decoder.decode(content)
    except DecodeError as e:
        logger.debug(f"Skipping message {message.get('sequence_number')}: {e}")
        return None

    payload = parse_embedded_json(text)
    if isinstance(payload, RawPayload) and not keep_raw:
        logger.debug(f"Skipping message {message.get('sequence_number')}: invalid JSON content")
        return None

    try:
        return TopicMessage(
            consensus_timestamp=message["consensus_timestamp"],
            sequence_number=message["sequence_number"],
            payer_account_id=message.get("payer_account_id"),
            topic_id=message.get("topic_id"),
            running_hash=message.get("running_hash"),
            running_hash_version=message.get("running_hash_version"),
            chunk_info=message.get("chunk_info") or {},
            created=timestamp_to_datetime(message["consensus_timestamp"]),
            payload=payload,
        )
    except (KeyError, ValueError, DecodeError) as e:
        # pydantic's ValidationError is a ValueError
        logger.debug(f"Error processing individual message: {e}")
        return None


def decode_nft(nft: Dict[str, Any], decoder: PayloadDecoder) -> Optional[NftDetail]:
    """
    Attach the decoded metadata as ``token_uri``.

    Undecodable metadata leaves ``token_uri`` unset; the NFT is kept. An item
    that is not a valid NFT record is dropped (returns None).
    """
    if not isinstance(nft, dict):
        logger.debug(f"Skipping NFT entry that is not an object: {nft!r}")
        return None
    token_uri = None
    metadata = nft.get("metadata")
    if metadata:
        try:
            token_uri = decoder.decode(metadata)
        except DecodeError as e:
            logger.warning(
                f"Failed to decode metadata for NFT {nft.get('token_id')} "
                f"SN {nft.get('serial_number')}: {e}"
            )
    try:
        return NftDetail(**{**nft, "token_uri": token_uri})
    except ValueError as e:
        logger.debug(f"Skipping NFT {nft.get('token_id')} SN {nft.get('serial_number')}: {e}")
        return None
