"""Page iterator — Drains a scroll search page by page.

The sequence ends at the first page that comes back without hits. Hits are
yielded in the order the store returned them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from searchtable.models.hit import RawHit
from searchtable.stores.base.client import PagedRequest, ScrollPage, StoreClient
from searchtable.stores.base.exceptions import StoreError, StoreProtocolError

logger = logging.getLogger(__name__)


class PageIterator:
    """Drives one scroll session.

    Iterating yields hits lazily, one page in memory at a time. ``drain()``
    materializes the whole result. Store failures propagate unchanged and end
    the scan; nothing is retried here.

    Args:
        client: Transport to the search store.
        request: The built scroll search.
    """

    def __init__(self, client: StoreClient, request: PagedRequest) -> None:
        self._client = client
        self._request = request
        self._scroll_id: str | None = None
        self.requests_issued = 0
        self.hits_returned = 0

    @property
    def scroll_id(self) -> str | None:
        """Token currently held, if any."""
        return self._scroll_id

    def pages(self) -> Iterator[ScrollPage]:
        """Yield every non-empty page, requesting the next one as needed.

        The scroll context is released however the sequence ends, including a
        failed request or an abandoned generator.
        """
        logger.info("Starting scroll over %s", self._request.index)
        try:
            page = self._track(self._client.search(self._request))
            while page.hits:
                yield page
                if self._scroll_id is None:
                    raise StoreProtocolError("Search response carried hits but no scroll id")
                page = self._track(self._client.scroll(self._scroll_id, self._request.keep_alive))
        finally:
            self.close()

        logger.info(
            "Scroll over %s finished: %d hits in %d requests",
            self._request.index,
            self.hits_returned,
            self.requests_issued,
        )

    def __iter__(self) -> Iterator[RawHit]:
        for page in self.pages():
            yield from page.hits

    def drain(self) -> list[RawHit]:
        """Fetch every page and return all hits."""
        return list(self)

    def close(self) -> None:
        """Release the held scroll context. Safe to call repeatedly."""
        scroll_id, self._scroll_id = self._scroll_id, None
        if scroll_id is None:
            return
        try:
            self._client.clear_scroll(scroll_id)
        except StoreError:
            logger.warning("Failed to clear scroll for %s", self._request.index, exc_info=True)

    def _track(self, page: ScrollPage) -> ScrollPage:
        self.requests_issued += 1
        self.hits_returned += len(page.hits)
        if page.scroll_id:
            self._scroll_id = page.scroll_id
        logger.debug(
            "Scroll page %d for %s: %d hits",
            self.requests_issued,
            self._request.index,
            len(page.hits),
        )
        return page
