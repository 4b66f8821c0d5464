"""
Cursor pagination over mirror node list endpoints.

List responses carry their items under an endpoint-specific key and a
``links.next`` cursor. Pages are fetched one at a time in cursor order.
"""

import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from .client.executor import RequestExecutor
from .config import MirrorNodeConfig


logger = logging.getLogger(__name__)


def next_cursor(page: Any) -> Optional[str]:
    """Extract the next-page cursor; empty or absent means no more pages."""
    if not isinstance(page, dict):
        return None
    links = page.get("links") or {}
    return links.get("next") or None


class Paginator:
    """
    Follows ``links.next`` cursors through a paged endpoint.

    Args:
        executor: Executor used for every page request
        config: Configuration used for the whole traversal
    """

    def __init__(self, executor: RequestExecutor, config: MirrorNodeConfig):
        self.executor = executor
        self.config = config

    async def iter_pages(self, first: str, max_pages: Optional[int] = None) -> AsyncIterator[Dict[str, Any]]:
        """
        Yield page bodies in order.

        Args:
            first: Relative path or absolute URL of the first page
            max_pages: Stop after this many pages even if a cursor remains
        """
        resolver = self.config.resolver
        url: Optional[str] = resolver.resolve_cursor(first)
        pages = 0

        while url:
            page = await self.executor.get(url, self.config)
            pages += 1
            yield page or {}

            cursor = next_cursor(page)
            if max_pages is not None and pages >= max_pages:
                if cursor:
                    logger.debug(f"Stopping after {pages} pages with cursor remaining: {cursor}")
                break
            url = resolver.resolve_cursor(cursor) if cursor else None

    async def collect(
        self,
        first: str,
        items_key: str,
        limit: Optional[int] = None,
        max_pages: Optional[int] = None,
        transform: Optional[Callable[[Any], Any]] = None,
    ) -> List[Any]:
        """
        Collect items from every page.

        Args:
            first: Relative path or absolute URL of the first page
            items_key: Key holding the items in each page body
            limit: Truncate to exactly this many items and stop
            max_pages: Upper bound on pages fetched
            transform: Applied to each item; items mapped to None are dropped

        Returns:
            Items in server order
        """
        items: List[Any] = []
        pages = self.iter_pages(first, max_pages)
        try:
            async for page in pages:
                entries = page.get(items_key) if isinstance(page, dict) else None
                if not isinstance(entries, list):
                    entries = []
                for item in entries:
                    if transform is not None:
                        item = transform(item)
                        if item is None:
                            continue
                    items.append(item)
                logger.debug(f"Collected {len(items)} {items_key} so far")

                if limit is not None and len(items) >= limit:
                    return items[:limit]
        finally:
            await pages.aclose()
        return items
