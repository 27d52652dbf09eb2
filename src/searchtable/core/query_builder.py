"""Request builder — Turns column descriptors and a split into a scroll search.

The store's field projection cannot extract nested objects, so the choice
between projected fields and full documents is made once for the whole column
list: a single nested column forces full-document retrieval for every column.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from searchtable.models.column import ColumnDescriptor, PathKind
from searchtable.models.split import PartitionDescriptor
from searchtable.stores.base.client import PagedRequest
from searchtable.stores.connection import StoreConnection

logger = logging.getLogger(__name__)


def supports_field_projection(columns: Sequence[ColumnDescriptor]) -> bool:
    """True unless any column is nested."""
    return not any(column.is_nested for column in columns)


def projected_paths(columns: Sequence[ColumnDescriptor]) -> list[str]:
    """Document paths to request by name. ``_id``/``_index`` come with every hit."""
    return [column.path for column in columns if column.path_kind is PathKind.DOCUMENT]


def split_params(split: PartitionDescriptor) -> dict[str, str]:
    params: dict[str, str] = {}
    if split.shard is not None:
        params["preference"] = f"_shards:{split.shard}"
    if split.routing:
        params["routing"] = split.routing
    return params


def build_search_request(
    columns: Sequence[ColumnDescriptor],
    split: PartitionDescriptor,
    connection: StoreConnection,
) -> PagedRequest:
    """Build the scroll search for one split.

    Args:
        columns: Requested columns, in output order.
        split: The partition to scan.
        connection: Supplies the page size and scroll keep-alive.

    Returns:
        The request, flagged with the projection mode its hits will use.
    """
    use_projection = supports_field_projection(columns)
    page_size = connection.scroll.page_size

    body: dict[str, Any] = {
        "size": page_size,
        "query": {"match_all": {}},
        "sort": ["_doc"],
    }
    fields: list[str] = []
    if use_projection:
        fields = projected_paths(columns)
        body["_source"] = False
        body["fields"] = fields
    else:
        body["_source"] = True

    logger.debug(
        "Built scroll request for %s (projection=%s, fields=%s)",
        split.index,
        use_projection,
        fields,
    )
    return PagedRequest(
        index=split.index,
        body=body,
        params=split_params(split),
        keep_alive=connection.scroll.keep_alive,
        page_size=page_size,
        use_field_projection=use_projection,
        projected_fields=fields,
    )
