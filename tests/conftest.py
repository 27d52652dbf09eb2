"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from searchtable.config.settings import ScrollSettings
from searchtable.models.column import ColumnDescriptor
from searchtable.models.hit import RawHit
from searchtable.models.split import PartitionDescriptor
from searchtable.stores.base.client import PagedRequest, ScrollPage, StoreClient
from searchtable.stores.connection import StoreConnection


def make_hit(
    doc_id: str,
    index: str = "products",
    source: dict[str, Any] | None = None,
    fields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a hit the way it appears in a search response."""
    hit: dict[str, Any] = {"_index": index, "_id": doc_id, "_score": None}
    if source is not None:
        hit["_source"] = source
    if fields is not None:
        hit["fields"] = fields
    return hit


class ScriptedStoreClient(StoreClient):
    """Store client that replays a fixed list of pages.

    Requests past the end of the script return empty pages.
    """

    def __init__(self, pages: list[list[dict[str, Any]]], with_scroll_ids: bool = True) -> None:
        self.pages = pages
        self.with_scroll_ids = with_scroll_ids
        self.searches: list[PagedRequest] = []
        self.scrolls: list[tuple[str, str]] = []
        self.cleared: list[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "scripted"

    @property
    def request_count(self) -> int:
        return len(self.searches) + len(self.scrolls)

    def search(self, request: PagedRequest) -> ScrollPage:
        self.searches.append(request)
        return self._next_page()

    def scroll(self, scroll_id: str, keep_alive: str) -> ScrollPage:
        self.scrolls.append((scroll_id, keep_alive))
        return self._next_page()

    def clear_scroll(self, scroll_id: str) -> None:
        self.cleared.append(scroll_id)

    def close(self) -> None:
        self.closed = True

    def _next_page(self) -> ScrollPage:
        n = self.request_count
        hits = self.pages[n - 1] if n <= len(self.pages) else []
        return ScrollPage(
            hits=[RawHit.from_response(h) for h in hits],
            scroll_id=f"scroll-{n}" if self.with_scroll_ids else None,
        )


@pytest.fixture
def split() -> PartitionDescriptor:
    return PartitionDescriptor(index="products")


@pytest.fixture
def scalar_columns() -> list[ColumnDescriptor]:
    """Columns eligible for field projection."""
    return [
        ColumnDescriptor(path="_id", output_type="varchar"),
        ColumnDescriptor(path="name", output_type="varchar"),
        ColumnDescriptor(path="price", output_type="double"),
        ColumnDescriptor(path="stock", output_type="bigint"),
        ColumnDescriptor(path="active", output_type="boolean"),
        ColumnDescriptor(path="_index", output_type="varchar"),
    ]


@pytest.fixture
def nested_columns() -> list[ColumnDescriptor]:
    """Columns that force full-document retrieval."""
    return [
        ColumnDescriptor(path="_id", output_type="varchar"),
        ColumnDescriptor(path="name", output_type="varchar"),
        ColumnDescriptor(path="reviews", category="nested", output_type="varchar"),
        ColumnDescriptor(path="price", output_type="double"),
    ]


@pytest.fixture
def make_connection():
    """Factory: wrap a scripted client in a connection."""

    def _make(
        client: StoreClient,
        page_size: int = 2,
        materialize: bool = True,
    ) -> StoreConnection:
        return StoreConnection(
            client=client,
            scroll=ScrollSettings(page_size=page_size, keep_alive="30s", materialize=materialize),
        )

    return _make


@pytest.fixture(name="make_hit")
def make_hit_fixture():
    """Factory: build a raw response hit."""
    return make_hit


@pytest.fixture
def scripted_client():
    """Factory: build a ``ScriptedStoreClient`` from pages of raw hits."""
    return ScriptedStoreClient
