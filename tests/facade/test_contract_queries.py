"""
Tests for contract, block and network queries of the HederaMirrorNode facade.
"""

from datetime import datetime, timezone

import pytest

from hedera_mirror_client.options import (
    BlocksQuery,
    ContractActionsQuery,
    ContractCallOptions,
    ContractLogsQuery,
    ContractResultsQuery,
    ContractStateQuery,
    ContractsQuery,
    NftsQuery,
    OpcodeTraceOptions,
)
from hedera_mirror_client.runtime.errors import ClientRequestError

from helpers import error_response, mk_page


TESTNET = "https://testnet.mirrornode.hedera.com"


class TestContractCall:

    @pytest.mark.asyncio
    async def test_posts_call_body(self, mirror, transport):
        transport.set_response("/api/v1/contracts/call", {"result": "0x0000"})

        result = await mirror.read_smart_contract_query("0.0.1234", "0x06fdde03", "0.0.1001")

        assert result == {"result": "0x0000"}
        request = transport.last_request
        assert request.method == "POST"
        assert request.url == f"{TESTNET}/api/v1/contracts/call"
        assert request.json_body == {
            "block": "latest",
            "data": "0x06fdde03",
            "estimate": False,
            "from": "0x00000000000000000000000000000000000003e9",
            "to": "0x00000000000000000000000000000000000004d2",
            "value": 0,
        }

    @pytest.mark.asyncio
    async def test_call_options(self, mirror, transport):
        transport.set_response("/api/v1/contracts/call", {"result": "0x"})
        evm = "0x" + "ab" * 20
        options = ContractCallOptions(block="123", estimate=True, gas=50_000, gas_price=10, value=5)

        await mirror.read_smart_contract_query(evm, "0x", evm, options)

        body = transport.last_request.json_body
        assert body["to"] == evm
        assert body["from"] == evm
        assert body["gas"] == 50_000
        assert body["gasPrice"] == 10
        assert body["estimate"] is True
        assert body["block"] == "123"

    @pytest.mark.asyncio
    async def test_call_revert_is_terminal(self, mirror, transport):
        transport.queue(error_response(400, "Bad Request"))

        with pytest.raises(ClientRequestError):
            await mirror.read_smart_contract_query("0.0.1234", "0x00", "0.0.1001")

        assert transport.call_count == 1


class TestContracts:

    @pytest.mark.asyncio
    async def test_contracts_listing(self, mirror, transport):
        transport.set_response("/api/v1/contracts", mk_page("contracts", [{"contract_id": "0.0.1234"}],
                                                            "/api/v1/contracts?page=2"))

        contracts = await mirror.get_contracts(ContractsQuery(contract_id="0.0.1234", limit=1, order="desc"))

        assert contracts == [{"contract_id": "0.0.1234"}]
        # single page by default
        assert transport.call_count == 1
        assert transport.last_request.params == [("contract.id", "0.0.1234"), ("limit", "1"), ("order", "desc")]

    @pytest.mark.asyncio
    async def test_contracts_max_pages(self, mirror, transport):
        transport.queue(
            mk_page("contracts", [{"contract_id": "0.0.1"}], "/api/v1/contracts?page=2"),
            mk_page("contracts", [{"contract_id": "0.0.2"}], "/api/v1/contracts?page=3"),
            mk_page("contracts", [{"contract_id": "0.0.3"}], "/api/v1/contracts?page=4"),
        )

        contracts = await mirror.get_contracts(max_pages=2)

        assert [c["contract_id"] for c in contracts] == ["0.0.1", "0.0.2"]

    @pytest.mark.asyncio
    async def test_contract_with_timestamp(self, mirror, transport):
        transport.set_response("/api/v1/contracts/0.0.1234", {"contract_id": "0.0.1234"})

        await mirror.get_contract("0.0.1234", timestamp="1700000000.000000000")

        assert transport.last_request.params == [("timestamp", "1700000000.000000000")]

    @pytest.mark.asyncio
    async def test_contract_results_params(self, mirror, transport):
        transport.set_response("/api/v1/contracts/results", mk_page("results", [{"hash": "0x1"}]))
        options = ContractResultsQuery(from_address="0x" + "01" * 20, block_number="10", internal=True,
                                       transaction_index=2)

        results = await mirror.get_contract_results(options)

        assert results == [{"hash": "0x1"}]
        assert transport.last_request.params == [
            ("from", "0x" + "01" * 20),
            ("block.number", "10"),
            ("internal", "true"),
            ("transaction.index", "2"),
        ]

    @pytest.mark.asyncio
    async def test_contract_result_with_nonce(self, mirror, transport):
        transport.set_response("/api/v1/contracts/results/0xabc", {"hash": "0xabc"})

        assert await mirror.get_contract_result("0xabc", nonce=0) == {"hash": "0xabc"}
        assert transport.last_request.params == [("nonce", "0")]

    @pytest.mark.asyncio
    async def test_results_by_contract(self, mirror, transport):
        transport.set_response("/api/v1/contracts/0.0.1234/results", mk_page("results", [{"hash": "0x2"}]))

        assert await mirror.get_contract_results_by_contract("0.0.1234") == [{"hash": "0x2"}]

    @pytest.mark.asyncio
    async def test_contract_state(self, mirror, transport):
        transport.set_response("/api/v1/contracts/0.0.1234/state", mk_page("state", [{"slot": "0x0"}]))

        state = await mirror.get_contract_state("0.0.1234", ContractStateQuery(slot="0x0", limit=1))

        assert state == [{"slot": "0x0"}]
        assert transport.last_request.params == [("limit", "1"), ("slot", "0x0")]

    @pytest.mark.asyncio
    async def test_contract_actions(self, mirror, transport):
        transport.set_response("/api/v1/contracts/results/0xabc/actions", mk_page("actions", [{"index": 0}]))

        actions = await mirror.get_contract_actions("0xabc", ContractActionsQuery(index="gte:0"))

        assert actions == [{"index": 0}]
        assert transport.last_request.params == [("index", "gte:0")]

    @pytest.mark.asyncio
    async def test_contract_logs(self, mirror, transport):
        transport.set_response("/api/v1/contracts/results/logs", mk_page("logs", [{"index": 1}]))
        transport.set_response("/api/v1/contracts/0.0.1234/results/logs", mk_page("logs", [{"index": 2}]))
        options = ContractLogsQuery(topic0="0xddf2", transaction_hash="0xabc")

        assert await mirror.get_contract_logs(options) == [{"index": 1}]
        assert transport.last_request.params == [("topic0", "0xddf2"), ("transaction.hash", "0xabc")]
        assert await mirror.get_contract_logs_by_contract("0.0.1234") == [{"index": 2}]

    @pytest.mark.asyncio
    async def test_opcode_traces(self, mirror, transport):
        transport.set_response("/api/v1/contracts/results/0xabc/opcodes", {"opcodes": []})

        traces = await mirror.get_opcode_traces("0xabc", OpcodeTraceOptions(stack=False, storage=True))

        assert traces == {"opcodes": []}
        assert transport.last_request.params == [("stack", "false"), ("storage", "true")]

    @pytest.mark.asyncio
    async def test_missing_contract(self, mirror, transport):
        assert await mirror.get_contract("0.0.404") is None
        assert await mirror.get_contract_state("0.0.404") is None


class TestBlocksAndNfts:

    @pytest.mark.asyncio
    async def test_blocks(self, mirror, transport):
        transport.set_response("/api/v1/blocks", mk_page("blocks", [{"number": 10}]))

        blocks = await mirror.get_blocks(BlocksQuery(block_number="gte:10", limit=1))

        assert blocks == [{"number": 10}]
        assert transport.last_request.params == [("limit", "1"), ("block.number", "gte:10")]

    @pytest.mark.asyncio
    async def test_block(self, mirror, transport):
        transport.set_response("/api/v1/blocks/10", {"number": 10})

        assert await mirror.get_block(10) == {"number": 10}
        assert await mirror.get_block(11) is None

    @pytest.mark.asyncio
    async def test_nfts_by_token(self, mirror, transport):
        transport.set_response("/api/v1/tokens/0.0.700/nfts", mk_page("nfts", [{"serial_number": 1}]))

        nfts = await mirror.get_nfts_by_token("0.0.700", NftsQuery(account_id="0.0.1001", serial_number="gt:0"))

        assert nfts == [{"serial_number": 1}]
        assert transport.last_request.params == [("account.id", "0.0.1001"), ("serialnumber", "gt:0")]


class TestNetwork:

    @pytest.mark.asyncio
    async def test_hbar_price(self, mirror, transport):
        transport.set_response("/api/v1/network/exchangerate",
                               {"current_rate": {"cent_equivalent": 120000, "hbar_equivalent": 10000}})

        price = await mirror.get_hbar_price(datetime(2024, 1, 1, tzinfo=timezone.utc))

        assert price == pytest.approx(0.12)
        assert transport.last_request.params == [("timestamp", "1704067200.000000000")]

    @pytest.mark.asyncio
    async def test_hbar_price_unavailable(self, mirror, transport):
        assert await mirror.get_hbar_price(datetime(2024, 1, 1, tzinfo=timezone.utc)) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rate", [
        {"hbar_equivalent": 10000},
        {"cent_equivalent": 120000},
        {"cent_equivalent": 120000, "hbar_equivalent": 0},
    ])
    async def test_hbar_price_incomplete_rate(self, mirror, transport, rate):
        transport.set_response("/api/v1/network/exchangerate", {"current_rate": rate})

        assert await mirror.get_hbar_price(datetime(2024, 1, 1, tzinfo=timezone.utc)) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method,path", [
        ("get_network_fees", "/api/v1/network/fees"),
        ("get_network_supply", "/api/v1/network/supply"),
        ("get_network_stake", "/api/v1/network/stake"),
    ])
    async def test_network_aggregates(self, mirror, transport, method, path):
        transport.set_response(path, {"value": 1})

        assert await getattr(mirror, method)() == {"value": 1}
        assert transport.last_request.params == []
        assert await getattr(mirror, method)("1700000000.000000000") == {"value": 1}
        assert transport.last_request.params == [("timestamp", "1700000000.000000000")]

    @pytest.mark.asyncio
    async def test_network_nodes(self, mirror, transport):
        transport.set_response("/api/v1/network/nodes", {"nodes": []})

        assert await mirror.get_network_info() == {"nodes": []}
