"""
Query options for mirror node list endpoints.

Each model renders its fields as query parameters through ``to_params()``,
in declaration order, leaving out unset fields. Range-filter fields accept
either a bare value or an ``<op>:<value>`` string.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple, Union
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from .codec.decoders import datetime_to_timestamp
from .runtime.url import range_filter


Order = Literal["asc", "desc"]
QueryParams = List[Tuple[str, str]]


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return datetime_to_timestamp(value)
    return str(value)


def with_query(path: str, params: QueryParams) -> str:
    """Append encoded query parameters to a path."""
    if not params:
        return path
    return f"{path}?{urlencode(params, safe=':')}"


class QueryOptions(BaseModel):
    """
    Base class for endpoint options.

    Subclasses map field names to parameter names in ``param_names``; fields
    not listed use their own name.
    """
    param_names: ClassVar[Dict[str, str]] = {}

    model_config = {"populate_by_name": True}

    def to_params(self) -> QueryParams:
        """Convert to an ordered list of query parameters."""
        params: QueryParams = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None:
                continue
            params.append((self.param_names.get(name, name), _param_value(value)))
        return params

    def to_dict(self) -> Dict[str, str]:
        return dict(self.to_params())


class PageOptions(QueryOptions):
    """Page size and ordering shared by most list endpoints."""
    limit: Optional[int] = Field(default=None, ge=1, description="Items per page")
    order: Optional[Order] = Field(default=None, description="Sort order by consensus time")


class TopicMessagesQuery(QueryOptions):
    """
    Options for reading every message of a topic.

    A bare sequence number means "after this message".
    """
    sequence_number: Optional[Union[int, str]] = Field(default=None, description="Sequence number filter")
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None

    def to_params(self) -> QueryParams:
        params: QueryParams = []
        if self.sequence_number is not None:
            params.append(("sequencenumber", range_filter(self.sequence_number, "gt")))
        if self.limit:
            params.append(("limit", str(self.limit)))
        if self.order:
            params.append(("order", self.order))
        return params


class TopicMessagesFilter(QueryOptions):
    """
    Options for a bounded read of topic messages.

    ``limit`` is both the page size and the total number of messages returned.
    The time range is inclusive at the start and exclusive at the end.
    """
    sequence_number: Optional[Union[int, str]] = None
    start_time: Optional[Union[datetime, str]] = Field(default=None, description="Earliest consensus time")
    end_time: Optional[Union[datetime, str]] = Field(default=None, description="Consensus time upper bound")
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None

    def to_params(self) -> QueryParams:
        params: QueryParams = []
        if self.limit:
            params.append(("limit", str(self.limit)))
        if self.sequence_number is not None:
            params.append(("sequencenumber", range_filter(self.sequence_number, "gt")))
        if self.start_time is not None:
            params.append(("timestamp", range_filter(_param_value(self.start_time), "gte")))
        if self.end_time is not None:
            params.append(("timestamp", range_filter(_param_value(self.end_time), "lt")))
        if self.order:
            params.append(("order", self.order))
        return params


class AirdropQuery(PageOptions):
    """
    Filters for token airdrops.

    ``counterparty_id`` is the receiver for outstanding airdrops and the
    sender for pending ones.
    """
    counterparty_id: Optional[str] = None
    serial_number: Optional[str] = None
    token_id: Optional[str] = None

    param_names: ClassVar[Dict[str, str]] = {
        "serial_number": "serialnumber",
        "token_id": "token.id",
    }

    def to_params_for(self, counterparty_param: str) -> QueryParams:
        return [
            (counterparty_param if name == "counterparty_id" else name, value)
            for name, value in self.to_params()
        ]


class BlocksQuery(PageOptions):
    timestamp: Optional[str] = None
    block_number: Optional[str] = None

    param_names: ClassVar[Dict[str, str]] = {"block_number": "block.number"}


class ContractsQuery(QueryOptions):
    contract_id: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None

    param_names: ClassVar[Dict[str, str]] = {"contract_id": "contract.id"}


class ContractResultsQuery(QueryOptions):
    """Filters for contract results, globally or for one contract."""
    from_address: Optional[str] = Field(default=None, alias="from")
    block_hash: Optional[str] = None
    block_number: Optional[str] = None
    internal: Optional[bool] = None
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None
    timestamp: Optional[str] = None
    transaction_index: Optional[int] = None

    param_names: ClassVar[Dict[str, str]] = {
        "from_address": "from",
        "block_hash": "block.hash",
        "block_number": "block.number",
        "transaction_index": "transaction.index",
    }


class ContractStateQuery(PageOptions):
    slot: Optional[str] = None
    timestamp: Optional[str] = None


class ContractActionsQuery(QueryOptions):
    index: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None


class ContractLogsQuery(QueryOptions):
    """Filters for contract logs; ``transaction_hash`` applies to the global listing."""
    index: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None
    timestamp: Optional[str] = None
    topic0: Optional[str] = None
    topic1: Optional[str] = None
    topic2: Optional[str] = None
    topic3: Optional[str] = None
    transaction_hash: Optional[str] = None

    param_names: ClassVar[Dict[str, str]] = {"transaction_hash": "transaction.hash"}


class NftsQuery(QueryOptions):
    account_id: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    order: Optional[Order] = None
    serial_number: Optional[str] = None

    param_names: ClassVar[Dict[str, str]] = {
        "account_id": "account.id",
        "serial_number": "serialnumber",
    }


class OpcodeTraceOptions(QueryOptions):
    """Which parts of the EVM state to include in opcode traces."""
    stack: Optional[bool] = None
    memory: Optional[bool] = None
    storage: Optional[bool] = None


class ContractCallOptions(BaseModel):
    """
    Options for a read-only contract call.

    Matches the mirror node's ``/contracts/call`` request body.
    """
    block: str = Field(default="latest", description="Block number, hash or tag")
    estimate: bool = Field(default=False, description="Estimate gas instead of executing")
    gas: Optional[int] = Field(default=None, ge=0)
    gas_price: Optional[int] = Field(default=None, ge=0, alias="gasPrice")
    value: int = Field(default=0, ge=0, description="Tinybars sent with the call")

    model_config = {"populate_by_name": True}

    def to_body(self, data: str, from_address: str, to_address: str) -> Dict[str, Any]:
        """Build the request body; unset fields are left out."""
        body: Dict[str, Any] = {
            "block": self.block,
            "data": data,
            "estimate": self.estimate,
            "from": from_address,
            "to": to_address,
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "value": self.value,
        }
        return {key: value for key, value in body.items() if value is not None}
