"""
Tests for cursor pagination.
"""

import pytest

from hedera_mirror_client.client.executor import RequestExecutor
from hedera_mirror_client.config import MirrorNodeConfig, ProviderConfig
from hedera_mirror_client.pagination import Paginator, next_cursor
from hedera_mirror_client.recovery.retry import RetryPolicy
from hedera_mirror_client.runtime.errors import MaxRetriesExceeded

from helpers import MockTransport, mk_page


ORIGIN = "https://testnet.mirrornode.hedera.com"
FIRST = "/api/v1/blocks?limit=2"


def paginator_for(transport, config=None):
    config = config or MirrorNodeConfig(retry=RetryPolicy(max_attempts=2, initial_delay=0.0))
    return Paginator(RequestExecutor(transport), config)


def queue_pages(transport, pages):
    """Queue pages of ``blocks``; every page but the last links to the next."""
    for index, items in enumerate(pages):
        last = index == len(pages) - 1
        link = None if last else f"/api/v1/blocks?limit=2&page={index + 2}"
        transport.queue(mk_page("blocks", items, link))


class TestNextCursor:

    @pytest.mark.parametrize("page", [{}, {"links": None}, {"links": {"next": None}}, {"links": {"next": ""}}, None])
    def test_absent_cursor(self, page):
        assert next_cursor(page) is None

    def test_present_cursor(self):
        assert next_cursor({"links": {"next": "/api/v1/x?page=2"}}) == "/api/v1/x?page=2"


class TestCollect:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[{"number": 1}], "blocks", 7, {"blocks": "not-a-list"}])
    async def test_unexpected_page_shape_yields_no_items(self, body):
        transport = MockTransport()
        transport.queue(body)

        assert await paginator_for(transport).collect(FIRST, "blocks") == []
        assert transport.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_count", [1, 2, 5])
    async def test_concatenates_until_cursor_empty(self, page_count):
        transport = MockTransport()
        pages = [[{"number": p * 10 + i} for i in range(2)] for p in range(page_count)]
        queue_pages(transport, pages)

        items = await paginator_for(transport).collect(FIRST, "blocks")

        assert items == [item for page in pages for item in page]
        assert transport.call_count == page_count

    @pytest.mark.asyncio
    async def test_cursor_resolved_against_origin(self):
        transport = MockTransport()
        queue_pages(transport, [[1], [2]])
        config = MirrorNodeConfig(provider=ProviderConfig(custom_url="https://provider.example/<API-KEY>",
                                                          api_key="abc"))

        await paginator_for(transport, config).collect(FIRST, "blocks")

        assert [r.url for r in transport.requests] == [
            "https://provider.example/abc/api/v1/blocks?limit=2",
            "https://provider.example/abc/api/v1/blocks?limit=2&page=2",
        ]

    @pytest.mark.asyncio
    async def test_limit_truncates_exactly(self):
        transport = MockTransport()
        queue_pages(transport, [[1, 2], [3, 4], [5, 6]])

        items = await paginator_for(transport).collect(FIRST, "blocks", limit=3)

        assert items == [1, 2, 3]
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_limit_larger_than_available(self):
        transport = MockTransport()
        queue_pages(transport, [[1, 2], [3]])

        items = await paginator_for(transport).collect(FIRST, "blocks", limit=50)

        assert items == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_max_pages_stops_with_cursor_remaining(self):
        transport = MockTransport()
        queue_pages(transport, [[1], [2], [3], [4]])

        items = await paginator_for(transport).collect(FIRST, "blocks", max_pages=2)

        assert items == [1, 2]
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_transform_drops_none(self):
        transport = MockTransport()
        queue_pages(transport, [[1, 2, 3, 4]])

        items = await paginator_for(transport).collect(
            FIRST, "blocks", transform=lambda n: n * 10 if n % 2 else None)

        assert items == [10, 30]

    @pytest.mark.asyncio
    async def test_missing_items_key(self):
        transport = MockTransport()
        transport.queue({"links": {"next": None}})

        assert await paginator_for(transport).collect(FIRST, "blocks") == []

    @pytest.mark.asyncio
    async def test_page_failure_propagates(self, sleeps):
        transport = MockTransport()
        # the second page is unrouted and answers 404
        transport.queue(mk_page("blocks", [1], "/api/v1/blocks?limit=2&page=2"))

        with pytest.raises(MaxRetriesExceeded) as exc_info:
            await paginator_for(transport).collect(FIRST, "blocks")

        assert exc_info.value.status == 404
        assert transport.call_count == 3

    @pytest.mark.asyncio
    async def test_iter_pages_in_order(self):
        transport = MockTransport()
        queue_pages(transport, [["a"], ["b"], ["c"]])

        pages = [page["blocks"] async for page in paginator_for(transport).iter_pages(FIRST)]

        assert pages == [["a"], ["b"], ["c"]]
