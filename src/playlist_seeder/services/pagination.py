"""Sequential, rate limited retrieval of paginated collections."""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from playlist_seeder.schemas.external import SpotifyPaging
from playlist_seeder.services.base import APIError, AuthenticationError, TransientFetchError
from playlist_seeder.services.spotify import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

PageFunc = Callable[[str, int, int], Awaitable[SpotifyPaging]]
SleepFunc = Callable[[float], Awaitable[None]]


class PagedFetcher:
    """Collects every item of a collection by walking its pages in order.

    The first page reveals the total; the remaining offsets are then requested
    one after another with `delay` seconds between requests (never before the
    first or after the last). Items keep their source order, which later
    becomes the playlist position.
    """

    def __init__(
        self,
        fetch_page: PageFunc,
        page_size: int = MAX_PAGE_SIZE,
        delay: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the fetcher.

        Args:
            fetch_page: Async callable `(collection_id, limit, offset) -> SpotifyPaging`.
            page_size: Items per request, capped at the API maximum.
            delay: Seconds to wait between requests.
            sleep: Awaitable used for the delay; tests pass a fake.
        """
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._fetch_page = fetch_page
        self.page_size = min(page_size, MAX_PAGE_SIZE)
        self.delay = delay
        self._sleep = sleep

    async def fetch_all(self, collection_id: str) -> list[dict[str, Any]]:
        """Fetch all items of a collection.

        Raises:
            AuthenticationError: If a token cannot be obtained.
            TransientFetchError: If any page request fails.
        """
        first = await self._get_page(collection_id, 0)
        total = first.total
        page_count = math.ceil(total / self.page_size)
        items: list[dict[str, Any]] = list(first.items)

        logger.info(
            "Fetching %d items of %s in %d batches of %d (~%ds)",
            total,
            collection_id,
            page_count,
            self.page_size,
            math.ceil(max(page_count - 1, 0) * self.delay),
        )
        logger.info("Batch 1/%d fetched: %d items", max(page_count, 1), len(first.items))

        for page_index in range(1, page_count):
            await self._sleep(self.delay)
            offset = page_index * self.page_size
            page = await self._get_page(collection_id, offset)
            items.extend(page.items)
            logger.info(
                "Batch %d/%d fetched: items %d-%d",
                page_index + 1,
                page_count,
                offset + 1,
                offset + len(page.items),
            )

        logger.info("All %d items of %s fetched", len(items), collection_id)
        return items

    async def _get_page(self, collection_id: str, offset: int) -> SpotifyPaging:
        try:
            return await self._fetch_page(collection_id, self.page_size, offset)
        except AuthenticationError:
            raise
        except APIError as e:
            raise TransientFetchError(
                f"Failed to fetch {collection_id} at offset {offset}: {e}",
                offset=offset,
                status_code=e.status_code,
            ) from e
        except ValidationError as e:
            raise TransientFetchError(
                f"Malformed page of {collection_id} at offset {offset}: {e}", offset=offset
            ) from e
