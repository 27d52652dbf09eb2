"""Base store client — Abstract interface to a scroll-capable search store.

Every transport must implement this interface so the page iterator can drive
it. The client is responsible for:
  1. Issuing the initial scroll search for a built request
  2. Fetching the next page for a scroll token
  3. Releasing scroll tokens
  4. Parsing responses into ``ScrollPage``s (malformed -> StoreProtocolError)

Retries and timeouts, if wanted, belong to the concrete transport.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from searchtable.models.hit import RawHit
from searchtable.stores.base.exceptions import StoreProtocolError


class PagedRequest(BaseModel):
    """A scroll search request, ready to be sent."""

    index: str = Field(description="Index or index pattern to search")
    body: dict[str, Any] = Field(default_factory=dict, description="Search request body")
    params: dict[str, str] = Field(default_factory=dict, description="Extra query parameters (preference, routing)")
    keep_alive: str = Field(default="1m", description="Scroll context expiry, in store time units")
    page_size: int = Field(default=1000, ge=1, description="Hits per page")
    use_field_projection: bool = Field(default=True, description="Whether hits carry projected fields")
    projected_fields: list[str] = Field(default_factory=list, description="Projected document paths")


class ScrollPage(BaseModel):
    """One page of hits plus the token for the next one."""

    hits: list[RawHit] = Field(default_factory=list, description="Hits in store order")
    scroll_id: str | None = Field(default=None, description="Opaque continuation token")
    total_hits: int | None = Field(default=None, description="Total matches, when reported")

    @classmethod
    def from_response(cls, response: Any) -> ScrollPage:
        """Parse a search or scroll response body."""
        if not isinstance(response, dict):
            raise StoreProtocolError(f"Expected a JSON object, got {type(response).__name__}")
        hits_section = response.get("hits")
        if not isinstance(hits_section, dict) or not isinstance(hits_section.get("hits"), list):
            raise StoreProtocolError("Response has no 'hits.hits' list")

        total = hits_section.get("total")
        # ES 7+ reports {"value": n, "relation": ...}, older versions a bare int
        if isinstance(total, dict):
            total = total.get("value")

        return cls(
            hits=[RawHit.from_response(hit) for hit in hits_section["hits"]],
            scroll_id=response.get("_scroll_id"),
            total_hits=total if isinstance(total, int) else None,
        )


class StoreClient(ABC):
    """Abstract base class for search store transports.

    Clients are created once per connection and shared by every cursor on it.
    They hold no per-scan state: scroll tokens are owned by the caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique client name (e.g., 'http', 'opensearch')."""

    @abstractmethod
    def search(self, request: PagedRequest) -> ScrollPage:
        """Execute the initial scroll search.

        Args:
            request: The built request.

        Returns:
            The first page and its scroll token.

        Raises:
            StoreProtocolError: On any transport or response failure.
        """

    @abstractmethod
    def scroll(self, scroll_id: str, keep_alive: str) -> ScrollPage:
        """Fetch the page following ``scroll_id``.

        Args:
            scroll_id: Token from the previous page.
            keep_alive: Refreshed expiry for the scroll context.

        Returns:
            The next page and a refreshed token.

        Raises:
            StoreProtocolError: On any transport or response failure.
        """

    @abstractmethod
    def clear_scroll(self, scroll_id: str) -> None:
        """Release the store-side scroll context for ``scroll_id``."""

    @abstractmethod
    def close(self) -> None:
        """Close the underlying transport."""
