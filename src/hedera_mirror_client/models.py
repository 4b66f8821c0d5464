"""
Shaped result types.

Most façade methods return the mirror node's JSON objects verbatim as
dictionaries. The types here cover results the client decodes or derives:
topic messages with a tagged payload, NFTs with a decoded token URI and
scheduled transaction status.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field


class JsonPayload(BaseModel):
    """Message content that parsed as JSON."""
    kind: Literal["json"] = "json"
    data: Any = None


class RawPayload(BaseModel):
    """Message content that is text but not JSON."""
    kind: Literal["raw"] = "raw"
    raw_content: str


MessagePayload = Union[JsonPayload, RawPayload]


class TopicMessage(BaseModel):
    """A consensus topic message with its decoded payload."""
    consensus_timestamp: str
    sequence_number: int
    payer_account_id: Optional[str] = None
    topic_id: Optional[str] = None
    running_hash: Optional[str] = None
    running_hash_version: Optional[int] = None
    chunk_info: Dict[str, Any] = Field(default_factory=dict)
    created: datetime
    payload: MessagePayload

    @property
    def is_json(self) -> bool:
        return isinstance(self.payload, JsonPayload)

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten into a single dictionary.

        JSON object content is merged at the top level, other JSON values are
        placed under ``content`` and raw text under ``raw_content``.
        Message metadata overrides content keys of the same name.
        """
        result: Dict[str, Any] = {}
        if isinstance(self.payload, RawPayload):
            result["raw_content"] = self.payload.raw_content
        elif isinstance(self.payload.data, dict):
            result.update(self.payload.data)
        else:
            result["content"] = self.payload.data
        result.update({
            "consensus_timestamp": self.consensus_timestamp,
            "sequence_number": self.sequence_number,
            "payer_account_id": self.payer_account_id,
            "payer": self.payer_account_id,
            "topic_id": self.topic_id,
            "running_hash": self.running_hash,
            "running_hash_version": self.running_hash_version,
            "chunk_info": self.chunk_info,
            "created": self.created,
        })
        return result


class NftDetail(BaseModel):
    """An NFT as returned by the mirror node, plus its decoded token URI."""
    token_id: str
    serial_number: int
    account_id: Optional[str] = None
    metadata: Optional[str] = None
    token_uri: Optional[str] = None

    model_config = {"extra": "allow"}


class ScheduleStatus(BaseModel):
    """Execution state of a scheduled transaction."""
    executed: bool
    executed_date: Optional[datetime] = None
    deleted: bool = False
