"""
Hedera Mirror Node facade.

Provides one async method per mirror node resource: accounts, topics,
tokens, NFTs, schedules, transactions, blocks, contracts and network-level
aggregates.

Example:
    ```python
    from hedera_mirror_client import HederaMirrorNode

    async with HederaMirrorNode.testnet() as mirror:
        account = await mirror.request_account("0.0.1234")
        messages = await mirror.get_topic_messages("0.0.5678")

    # Custom provider embedding the key in its URL
    mirror = HederaMirrorNode.mainnet()
    mirror.configure_mirror_node(
        custom_url="https://mainnet.provider.example/<API-KEY>",
        api_key="my-key",
    )
    ```

Not-found semantics: lookups of a single resource return None when the
mirror node answers 404 after the retry policy is exhausted. Every other
failure is raised.
"""

from __future__ import annotations
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .client.executor import RequestExecutor
from .codec.decoders import (
    Base64PayloadDecoder,
    PayloadDecoder,
    datetime_to_timestamp,
    decode_nft,
    decode_topic_message,
    timestamp_to_datetime,
    tinybars_to_hbar,
)
from .config import MirrorNodeConfig, NetworkTarget, ProviderConfig
from .crypto.public_key import PublicKey
from .models import NftDetail, ScheduleStatus, TopicMessage
from .operations.key_access import CandidateKey, KeyAccessEvaluator
from .options import (
    AirdropQuery,
    BlocksQuery,
    ContractActionsQuery,
    ContractCallOptions,
    ContractLogsQuery,
    ContractResultsQuery,
    ContractsQuery,
    ContractStateQuery,
    NftsQuery,
    OpcodeTraceOptions,
    QueryParams,
    TopicMessagesFilter,
    TopicMessagesQuery,
    with_query,
)
from .pagination import Paginator
from .runtime.errors import NotFoundError, RequestError
from .runtime.url import to_evm_address
from .transport.http import HttpTransport


logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Page bound for endpoints that would otherwise follow cursors indefinitely
DEFAULT_MAX_PAGES = 10

PROTOBUF_KEY_TYPE = "ProtobufEncoded"


class HederaMirrorNode:
    """
    Async client for the Hedera mirror node REST API.

    The client holds one immutable ``MirrorNodeConfig``. Reconfiguration
    swaps in a new config; requests already running finish with the config
    they started with.

    Attributes:
        decoder: Strategy used for base64 message and metadata payloads
        key_evaluator: Evaluator used by the key access checks
    """

    def __init__(
        self,
        network: Union[NetworkTarget, str] = NetworkTarget.TESTNET,
        config: Optional[MirrorNodeConfig] = None,
        transport: Optional[HttpTransport] = None,
        decoder: Optional[PayloadDecoder] = None,
        key_evaluator: Optional[KeyAccessEvaluator] = None,
    ):
        """
        Initialize the mirror node client.

        Args:
            network: Network whose public mirror node is used by default
            config: Complete configuration; overrides ``network``
            transport: HTTP transport (default: aiohttp)
            decoder: Payload decode strategy (default: strict base64)
            key_evaluator: Key access evaluator
        """
        if config is None:
            if isinstance(network, str):
                network = NetworkTarget.parse(network)
            config = MirrorNodeConfig(network=network)

        self._config = config
        self._executor = RequestExecutor(transport)
        self.decoder = decoder or Base64PayloadDecoder()
        self.key_evaluator = key_evaluator or KeyAccessEvaluator()

    @property
    def config(self) -> MirrorNodeConfig:
        return self._config

    async def close(self) -> None:
        await self._executor.close()

    async def __aenter__(self) -> HederaMirrorNode:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def mainnet(cls, **kwargs) -> HederaMirrorNode:
        return cls(NetworkTarget.MAINNET, **kwargs)

    @classmethod
    def testnet(cls, **kwargs) -> HederaMirrorNode:
        return cls(NetworkTarget.TESTNET, **kwargs)

    @classmethod
    def from_env(cls, **kwargs) -> HederaMirrorNode:
        """Create a client configured from ``HEDERA_NETWORK``, ``MIRROR_NODE_URL`` and ``MIRROR_NODE_API_KEY``."""
        return cls(config=MirrorNodeConfig.from_env(), **kwargs)

    # =========================================================================
    # Configuration
    # =========================================================================

    def configure_retry(
        self,
        max_attempts: Optional[int] = None,
        initial_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        backoff_factor: Optional[float] = None,
        retry_not_found: Optional[bool] = None,
    ) -> None:
        """
        Replace the retry policy; unspecified values are kept.

        Raises:
            ConfigurationError: If the resulting policy is invalid
        """
        self._config = self._config.with_retry(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            max_delay=max_delay,
            backoff_factor=backoff_factor,
            retry_not_found=retry_not_found,
        )
        retry = self._config.retry
        logger.info(
            f"Retry configuration updated: max_attempts={retry.max_attempts}, "
            f"initial_delay={retry.initial_delay}s, max_delay={retry.max_delay}s, "
            f"backoff_factor={retry.backoff_factor}"
        )

    def configure_mirror_node(
        self,
        custom_url: Optional[str] = None,
        api_key: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Configure a custom mirror node provider.

        Headers are merged into the existing provider headers.
        """
        self._config = self._config.with_provider(custom_url=custom_url, api_key=api_key, headers=headers)
        logger.info(f"Mirror node configured: {self._config.origin}")

    def get_base_url(self) -> str:
        """Origin requests are sent to, with the API key substituted."""
        return self._config.resolver.origin

    # =========================================================================
    # Request helpers
    # =========================================================================

    async def _get(self, path: str, params: Optional[QueryParams] = None) -> Any:
        config = self._config
        url = config.resolver.resolve(with_query(f"{API_PREFIX}{path}", params or []))
        return await self._executor.get(url, config)

    async def _get_or_none(self, path: str, params: Optional[QueryParams] = None) -> Any:
        try:
            return await self._get(path, params)
        except RequestError as e:
            if not e.is_not_found:
                raise
            logger.warning(f"Resource not found: {API_PREFIX}{path}")
            return None

    async def _collect(
        self,
        path: str,
        items_key: str,
        params: Optional[QueryParams] = None,
        limit: Optional[int] = None,
        max_pages: Optional[int] = None,
        transform: Optional[Callable[[Any], Any]] = None,
    ) -> List[Any]:
        paginator = Paginator(self._executor, self._config)
        first = with_query(f"{API_PREFIX}{path}", params or [])
        return await paginator.collect(first, items_key, limit=limit, max_pages=max_pages, transform=transform)

    async def _collect_or_none(self, path: str, items_key: str, params: Optional[QueryParams] = None,
                               max_pages: Optional[int] = 1) -> Optional[List[Any]]:
        try:
            return await self._collect(path, items_key, params, max_pages=max_pages)
        except RequestError as e:
            if not e.is_not_found:
                raise
            logger.warning(f"Resource not found: {API_PREFIX}{path}")
            return None

    # =========================================================================
    # Accounts
    # =========================================================================

    async def request_account(self, account_id: str) -> Dict[str, Any]:
        """
        Fetch an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        logger.debug(f"Requesting account info for {account_id}")
        account = await self._get_or_none(f"/accounts/{account_id}")
        if not account:
            raise NotFoundError(f"No data received from mirror node for account: {account_id}",
                                {"account_id": account_id})
        return account

    async def get_public_key(self, account_id: str) -> PublicKey:
        """
        Fetch an account's simple public key.

        Raises:
            NotFoundError: If the account or its key does not exist
            PublicKeyError: If the account key is not a simple key
        """
        logger.info(f"Getting public key for account {account_id}")
        account = await self.request_account(account_id)
        key = account.get("key") or {}
        if not key.get("key"):
            raise NotFoundError(f"Failed to retrieve public key for account ID: {account_id}",
                                {"account_id": account_id})
        return PublicKey.from_string(key["key"])

    async def get_account_memo(self, account_id: str) -> Optional[str]:
        logger.info(f"Getting account memo for account ID: {account_id}")
        account = await self._get_or_none(f"/accounts/{account_id}")
        if account and account.get("memo"):
            return account["memo"]
        logger.warning(f"No memo found for account {account_id}")
        return None

    async def get_account_balance(self, account_id: str) -> Optional[Decimal]:
        """Account balance in HBAR, or None if the account or balance is missing."""
        logger.info(f"Getting balance for account {account_id}")
        account = await self._get_or_none(f"/accounts/{account_id}")
        balance = (account or {}).get("balance") or {}
        if balance.get("balance") is None:
            logger.warning(f"Could not retrieve balance for account {account_id} from account info.")
            return None
        return tinybars_to_hbar(balance["balance"])

    async def get_account_tokens(self, account_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Token balances of an account, at most ``limit`` entries."""
        logger.info(f"Getting tokens for account {account_id}")
        return await self._collect(
            f"/accounts/{account_id}/tokens",
            "tokens",
            [("limit", str(limit))],
            limit=limit,
            max_pages=DEFAULT_MAX_PAGES,
        )

    async def get_account_nfts(self, account_id: str, token_id: Optional[str] = None,
                               limit: int = 100) -> List[NftDetail]:
        """
        NFTs owned by an account.

        Args:
            account_id: Owner account
            token_id: Restrict to one token
            limit: Page size

        Returns:
            NFTs with ``token_uri`` decoded from their metadata
        """
        logger.info(f"Getting NFTs for account {account_id}" + (f" for token {token_id}" if token_id else ""))
        params = [("limit", str(limit))]
        if token_id:
            params.append(("token.id", token_id))
        return await self._collect(
            f"/accounts/{account_id}/nfts",
            "nfts",
            params,
            max_pages=DEFAULT_MAX_PAGES,
            transform=lambda nft: decode_nft(nft, self.decoder),
        )

    async def validate_nft_ownership(self, account_id: str, token_id: str,
                                     serial_number: int) -> Optional[NftDetail]:
        """Return the NFT if the account owns the given serial, otherwise None."""
        logger.info(f"Validating ownership of NFT {token_id} SN {serial_number} for account {account_id}")
        for nft in await self.get_account_nfts(account_id, token_id):
            if nft.token_id == token_id and nft.serial_number == serial_number:
                return nft
        return None

    async def get_outstanding_token_airdrops(self, account_id: str, options: Optional[AirdropQuery] = None,
                                             max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        """Airdrops sent by an account that receivers have not claimed."""
        logger.info(f"Getting outstanding token airdrops for account {account_id}")
        params = (options or AirdropQuery()).to_params_for("receiver.id")
        return await self._collect_or_none(f"/accounts/{account_id}/airdrops/outstanding", "airdrops",
                                           params, max_pages)

    async def get_pending_token_airdrops(self, account_id: str, options: Optional[AirdropQuery] = None,
                                         max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        """Airdrops waiting to be claimed by an account."""
        logger.info(f"Getting pending token airdrops for account {account_id}")
        params = (options or AirdropQuery()).to_params_for("sender.id")
        return await self._collect_or_none(f"/accounts/{account_id}/airdrops/pending", "airdrops",
                                           params, max_pages)

    # =========================================================================
    # Key access
    # =========================================================================

    def check_key_list_access(self, key_bytes: bytes, public_key: CandidateKey) -> bool:
        """
        Check whether a public key appears in a serialized key structure.

        Raises:
            KeyDecodeError: If the key structure cannot be parsed
        """
        return self.key_evaluator.has_access(key_bytes, public_key)

    async def check_account_key_access(self, account_id: str, public_key: CandidateKey) -> bool:
        """
        Check whether a public key is among an account's signers.

        Protobuf-encoded keys (key lists, threshold keys) are walked by the
        key evaluator; simple keys are compared directly.
        """
        logger.info(f"Checking key access for account {account_id}")
        account = await self.request_account(account_id)
        key = account.get("key") or {}
        if not key.get("key"):
            return False

        if key.get("_type") == PROTOBUF_KEY_TYPE:
            return self.check_key_list_access(bytes.fromhex(key["key"]), public_key)
        return PublicKey.from_string(key["key"]) == PublicKey.coerce(public_key)

    # =========================================================================
    # Topics
    # =========================================================================

    async def get_topic_info(self, topic_id: str) -> Optional[Dict[str, Any]]:
        logger.debug(f"Fetching topic info for {topic_id}")
        return await self._get_or_none(f"/topics/{topic_id}")

    async def get_topic_fees(self, topic_id: str) -> Optional[Dict[str, Any]]:
        topic = await self.get_topic_info(topic_id)
        if not topic:
            return None
        return topic.get("custom_fees")

    async def get_topic_messages(self, topic_id: str,
                                 options: Optional[TopicMessagesQuery] = None) -> List[TopicMessage]:
        """
        Read every message of a topic, following all cursors.

        Messages whose payload is not base64 encoded UTF-8 JSON are skipped.
        """
        logger.debug(f"Querying messages for topic {topic_id}{' with filters' if options else ''}")
        params = options.to_params() if options else []
        return await self._collect(
            f"/topics/{topic_id}/messages",
            "messages",
            params,
            transform=lambda message: decode_topic_message(message, self.decoder, keep_raw=False),
        )

    async def get_topic_messages_by_filter(self, topic_id: str,
                                           options: Optional[TopicMessagesFilter] = None) -> List[TopicMessage]:
        """
        Read a bounded range of topic messages.

        At most ``DEFAULT_MAX_PAGES`` pages are read and the result is cut at
        ``options.limit``. Non-JSON payloads are kept as raw content.
        """
        logger.debug(f"Querying messages for topic {topic_id} with filters: {options}")
        options = options or TopicMessagesFilter()
        return await self._collect(
            f"/topics/{topic_id}/messages",
            "messages",
            options.to_params(),
            limit=options.limit,
            max_pages=DEFAULT_MAX_PAGES,
            transform=lambda message: decode_topic_message(message, self.decoder, keep_raw=True),
        )

    # =========================================================================
    # Tokens and NFTs
    # =========================================================================

    async def get_token_info(self, token_id: str) -> Optional[Dict[str, Any]]:
        logger.debug(f"Fetching token info for {token_id}")
        return await self._get_or_none(f"/tokens/{token_id}")

    async def get_token_holders(self, token_id: str, threshold: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        All holders of a token.

        Args:
            token_id: Token to list balances for
            threshold: Minimum balance in the token's smallest unit; without
                it, holders with a zero balance are left out
        """
        logger.info(f"Getting holders of token {token_id}")
        balance_filter = f"gte:{threshold}" if threshold is not None else "gt:0"
        return await self._collect(
            f"/tokens/{token_id}/balances",
            "balances",
            [("limit", "100"), ("account.balance", balance_filter)],
        )

    async def get_nft_info(self, token_id: str, serial_number: int) -> Optional[Dict[str, Any]]:
        logger.info(f"Getting NFT info for {token_id}/{serial_number}")
        return await self._get_or_none(f"/tokens/{token_id}/nfts/{serial_number}")

    async def get_nfts_by_token(self, token_id: str, options: Optional[NftsQuery] = None,
                                max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info(f"Getting NFTs for token {token_id}")
        params = options.to_params() if options else []
        return await self._collect_or_none(f"/tokens/{token_id}/nfts", "nfts", params, max_pages)

    # =========================================================================
    # Schedules and transactions
    # =========================================================================

    async def get_schedule_info(self, schedule_id: str) -> Optional[Dict[str, Any]]:
        logger.info(f"Getting information for scheduled transaction {schedule_id}")
        return await self._get_or_none(f"/schedules/{schedule_id}")

    async def get_scheduled_transaction_status(self, schedule_id: str) -> ScheduleStatus:
        """
        Execution state of a scheduled transaction.

        Raises:
            NotFoundError: If the schedule does not exist
        """
        logger.info(f"Checking status of scheduled transaction {schedule_id}")
        schedule = await self.get_schedule_info(schedule_id)
        if not schedule:
            raise NotFoundError(f"Schedule {schedule_id} not found", {"schedule_id": schedule_id})

        executed_timestamp = schedule.get("executed_timestamp")
        return ScheduleStatus(
            executed=bool(executed_timestamp),
            executed_date=timestamp_to_datetime(executed_timestamp) if executed_timestamp else None,
            deleted=bool(schedule.get("deleted")),
        )

    async def get_transaction(self, transaction_id_or_hash: str) -> Optional[Dict[str, Any]]:
        """First transaction matching an id or hash."""
        logger.info(f"Getting transaction details for ID/hash: {transaction_id_or_hash}")
        response = await self._get_or_none(f"/transactions/{transaction_id_or_hash}")
        transactions = (response or {}).get("transactions") or []
        if not transactions:
            logger.warning(f"No transaction details found for {transaction_id_or_hash}")
            return None
        return transactions[0]

    async def get_transaction_by_timestamp(self, timestamp: str) -> List[Dict[str, Any]]:
        logger.info(f"Getting transaction by timestamp: {timestamp}")
        response = await self._get("/transactions", [("timestamp", timestamp), ("limit", "1")])
        return (response or {}).get("transactions") or []

    # =========================================================================
    # Network
    # =========================================================================

    async def get_hbar_price(self, date: datetime) -> Optional[float]:
        """USD price of one HBAR at the given time."""
        timestamp = datetime_to_timestamp(date)
        logger.debug(f"Fetching HBAR price for timestamp {timestamp}")
        response = await self._get_or_none("/network/exchangerate", [("timestamp", timestamp)])
        rate = (response or {}).get("current_rate")
        if not rate or not rate.get("hbar_equivalent") or rate.get("cent_equivalent") is None:
            logger.warning(f"Exchange rate unavailable for timestamp {timestamp}")
            return None
        return float(rate["cent_equivalent"]) / float(rate["hbar_equivalent"]) / 100

    async def get_network_info(self) -> Optional[Dict[str, Any]]:
        logger.info("Getting network information")
        return await self._get_or_none("/network/nodes")

    async def get_network_fees(self, timestamp: Optional[str] = None) -> Optional[Dict[str, Any]]:
        logger.info("Getting network fees")
        return await self._get_or_none("/network/fees", _timestamp_params(timestamp))

    async def get_network_supply(self, timestamp: Optional[str] = None) -> Optional[Dict[str, Any]]:
        logger.info("Getting network supply")
        return await self._get_or_none("/network/supply", _timestamp_params(timestamp))

    async def get_network_stake(self, timestamp: Optional[str] = None) -> Optional[Dict[str, Any]]:
        logger.info("Getting network stake")
        return await self._get_or_none("/network/stake", _timestamp_params(timestamp))

    # =========================================================================
    # Blocks
    # =========================================================================

    async def get_blocks(self, options: Optional[BlocksQuery] = None,
                         max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info("Getting blocks")
        params = options.to_params() if options else []
        return await self._collect_or_none("/blocks", "blocks", params, max_pages)

    async def get_block(self, block_number_or_hash: Union[int, str]) -> Optional[Dict[str, Any]]:
        logger.info(f"Getting block {block_number_or_hash}")
        return await self._get_or_none(f"/blocks/{block_number_or_hash}")

    # =========================================================================
    # Contracts
    # =========================================================================

    async def get_contracts(self, options: Optional[ContractsQuery] = None,
                            max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info("Getting contracts")
        params = options.to_params() if options else []
        return await self._collect_or_none("/contracts", "contracts", params, max_pages)

    async def get_contract(self, contract_id_or_address: str,
                           timestamp: Optional[str] = None) -> Optional[Dict[str, Any]]:
        logger.info(f"Getting contract {contract_id_or_address}")
        return await self._get_or_none(f"/contracts/{contract_id_or_address}", _timestamp_params(timestamp))

    async def get_contract_results(self, options: Optional[ContractResultsQuery] = None,
                                   max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info("Getting contract results")
        params = options.to_params() if options else []
        return await self._collect_or_none("/contracts/results", "results", params, max_pages)

    async def get_contract_result(self, transaction_id_or_hash: str,
                                  nonce: Optional[int] = None) -> Optional[Dict[str, Any]]:
        logger.info(f"Getting contract result for {transaction_id_or_hash}")
        params = [("nonce", str(nonce))] if nonce is not None else []
        return await self._get_or_none(f"/contracts/results/{transaction_id_or_hash}", params)

    async def get_contract_results_by_contract(self, contract_id_or_address: str,
                                               options: Optional[ContractResultsQuery] = None,
                                               max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info(f"Getting contract results for contract {contract_id_or_address}")
        params = options.to_params() if options else []
        return await self._collect_or_none(f"/contracts/{contract_id_or_address}/results", "results",
                                           params, max_pages)

    async def get_contract_state(self, contract_id_or_address: str,
                                 options: Optional[ContractStateQuery] = None,
                                 max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info(f"Getting contract state for {contract_id_or_address}")
        params = options.to_params() if options else []
        return await self._collect_or_none(f"/contracts/{contract_id_or_address}/state", "state",
                                           params, max_pages)

    async def get_contract_actions(self, transaction_id_or_hash: str,
                                   options: Optional[ContractActionsQuery] = None,
                                   max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info(f"Getting contract actions for {transaction_id_or_hash}")
        params = options.to_params() if options else []
        return await self._collect_or_none(f"/contracts/results/{transaction_id_or_hash}/actions", "actions",
                                           params, max_pages)

    async def get_contract_logs(self, options: Optional[ContractLogsQuery] = None,
                                max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info("Getting contract logs")
        params = options.to_params() if options else []
        return await self._collect_or_none("/contracts/results/logs", "logs", params, max_pages)

    async def get_contract_logs_by_contract(self, contract_id_or_address: str,
                                            options: Optional[ContractLogsQuery] = None,
                                            max_pages: int = 1) -> Optional[List[Dict[str, Any]]]:
        logger.info(f"Getting contract logs for contract {contract_id_or_address}")
        params = options.to_params() if options else []
        return await self._collect_or_none(f"/contracts/{contract_id_or_address}/results/logs", "logs",
                                           params, max_pages)

    async def get_opcode_traces(self, transaction_id_or_hash: str,
                                options: Optional[OpcodeTraceOptions] = None) -> Optional[Dict[str, Any]]:
        logger.info(f"Getting opcode traces for {transaction_id_or_hash}")
        params = options.to_params() if options else []
        return await self._get_or_none(f"/contracts/results/{transaction_id_or_hash}/opcodes", params)

    async def read_smart_contract_query(
        self,
        contract_id_or_address: str,
        function_selector: str,
        payer_account_id: str,
        options: Optional[ContractCallOptions] = None,
    ) -> Dict[str, Any]:
        """
        Execute a read-only contract call.

        Args:
            contract_id_or_address: Contract entity id or ``0x`` EVM address
            function_selector: ABI-encoded call data
            payer_account_id: Caller entity id or ``0x`` EVM address
            options: Block, gas and value settings

        Returns:
            The call response, with the result under ``result``
        """
        logger.info(f"Reading smart contract {contract_id_or_address} with selector {function_selector}")
        body = (options or ContractCallOptions()).to_body(
            data=function_selector,
            from_address=to_evm_address(payer_account_id),
            to_address=to_evm_address(contract_id_or_address),
        )
        config = self._config
        url = config.resolver.resolve(f"{API_PREFIX}/contracts/call")
        return await self._executor.post(url, body, config)


def _timestamp_params(timestamp: Optional[str]) -> QueryParams:
    return [("timestamp", timestamp)] if timestamp else []


def create_client(network: Union[NetworkTarget, str] = NetworkTarget.TESTNET,
                  custom_url: Optional[str] = None, api_key: Optional[str] = None,
                  headers: Optional[Mapping[str, str]] = None, **kwargs) -> HederaMirrorNode:
    """Create a client, optionally for a custom provider."""
    if isinstance(network, str):
        network = NetworkTarget.parse(network)
    provider = ProviderConfig(custom_url=custom_url, api_key=api_key, headers=headers or {})
    return HederaMirrorNode(config=MirrorNodeConfig(network=network, provider=provider), **kwargs)
