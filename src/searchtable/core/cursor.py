"""Record cursor — Row-at-a-time access to one split, for the query engine.

The cursor builds the scroll request, drains the store through a
``PageIterator`` and projects each hit into a row when the engine advances.
Values are coerced to the engine's types only when read.

States: NOT_STARTED -> ACTIVE -> EXHAUSTED. A store error while paging moves
the cursor to FAILED instead, which is terminal. CLOSED is reachable from any
state.

Byte statistics are an approximation: every advanced row adds its column
count, not its serialized size.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from enum import Enum
from types import TracebackType
from typing import Any

from searchtable.core import coercion
from searchtable.core.exceptions import (
    CursorClosedError,
    CursorFailedError,
    CursorNotAdvancedError,
    InvalidColumnIndexError,
    TypeMismatchError,
)
from searchtable.core.pages import PageIterator
from searchtable.core.projector import RowProjector
from searchtable.core.query_builder import build_search_request
from searchtable.models.column import ColumnDescriptor, OutputType
from searchtable.models.hit import RawHit
from searchtable.models.split import PartitionDescriptor
from searchtable.models.value import FieldValue
from searchtable.stores.base.client import PagedRequest
from searchtable.stores.base.exceptions import StoreError
from searchtable.stores.connection import StoreConnection

logger = logging.getLogger(__name__)


class CursorState(str, Enum):
    """Lifecycle of a record cursor."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
    CLOSED = "closed"


class RecordCursor:
    """Pull-based, single-threaded cursor over the hits of one split.

    With ``connection.scroll.materialize`` set (the default) every page is
    fetched during construction, so store errors surface before the first row
    and no partial result is ever exposed. Otherwise pages are fetched as
    the engine advances.

    Args:
        columns: Output columns, in order. Paths must be unique.
        split: The partition to scan.
        connection: Store client and scroll settings.

    Raises:
        DuplicateColumnPathError: If two columns share a path.
        StoreProtocolError: If draining the scroll fails (materialized mode).
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        split: PartitionDescriptor,
        connection: StoreConnection,
    ) -> None:
        self._columns = list(columns)
        self._projector = RowProjector(self._columns)
        self._request = build_search_request(self._columns, split, connection)
        self._pages = PageIterator(connection.client, self._request)
        self._state = CursorState.NOT_STARTED
        self._row: list[FieldValue] | None = None
        self._total_bytes = 0
        self._failure: StoreError | None = None

        self._hits: Iterator[RawHit]
        if connection.scroll.materialize:
            self._hits = iter(self._pages.drain())
        else:
            self._hits = iter(self._pages)

    # ── Lifecycle ────────────────────────────────────────────────────────

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def request(self) -> PagedRequest:
        """The scroll search this cursor was built with."""
        return self._request

    @property
    def column_count(self) -> int:
        return len(self._columns)

    def advance_position(self) -> bool:
        """Move to the next hit.

        Returns:
            True if a new row is current, False once the split is exhausted
            (and on every call after that, or after ``close()``).

        Raises:
            StoreError: If fetching the next page fails. The cursor is left
                FAILED with no current row.
            CursorFailedError: On any call after such a failure.
        """
        if self._state is CursorState.FAILED:
            raise CursorFailedError(f"Scan of {self._request.index} failed") from self._failure
        if self._state in (CursorState.EXHAUSTED, CursorState.CLOSED):
            return False

        try:
            hit = next(self._hits, None)
        except StoreError as e:
            self._fail(e)
            raise
        if hit is None:
            self._state = CursorState.EXHAUSTED
            self._row = None
            self._pages.close()
            logger.debug("Cursor over %s exhausted", self._request.index)
            return False

        self._row = self._projector.project(hit, self._request.use_field_projection)
        self._total_bytes += len(self._row)
        self._state = CursorState.ACTIVE
        return True

    def close(self) -> None:
        """Release paging resources. Idempotent."""
        if self._state is CursorState.CLOSED:
            return
        self._state = CursorState.CLOSED
        self._row = None
        self._pages.close()

    def __enter__(self) -> RecordCursor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── Statistics ───────────────────────────────────────────────────────

    @property
    def completed_bytes(self) -> int:
        return self._total_bytes

    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    @property
    def read_time_nanos(self) -> int:
        """Read time is not measured."""
        return 0

    # ── Accessors ────────────────────────────────────────────────────────

    def get_type(self, field: int) -> OutputType:
        """Declared output type of column ``field``."""
        self._check_index(field)
        return self._columns[field].output_type

    def is_null(self, field: int) -> bool:
        return self._value(field).is_absent

    def read_boolean(self, field: int) -> bool:
        return coercion.to_boolean(self._value(field))

    def read_integer(self, field: int) -> int:
        return coercion.to_integer(self._value(field))

    def read_float(self, field: int) -> float:
        return coercion.to_float(self._value(field))

    def read_text(self, field: int) -> str:
        self._check_type(field, OutputType.TEXT)
        return coercion.render_text(self._value(field))

    def read_value(self, field: int) -> Any:
        """Read column ``field`` with the accessor matching its declared type.

        Returns None for null values and for ``unsupported`` columns.
        """
        value = self._value(field)
        output_type = self._columns[field].output_type
        if value.is_absent or output_type is OutputType.UNSUPPORTED:
            return None
        if output_type is OutputType.BOOLEAN:
            return coercion.to_boolean(value)
        if output_type is OutputType.INTEGER:
            return coercion.to_integer(value)
        if output_type is OutputType.FLOAT:
            return coercion.to_float(value)
        return coercion.render_text(value)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _check_index(self, field: int) -> None:
        if not 0 <= field < len(self._columns):
            raise InvalidColumnIndexError(f"Invalid field index {field} for {len(self._columns)} columns")

    def _check_type(self, field: int, expected: OutputType) -> None:
        actual = self.get_type(field)
        if actual is not expected:
            raise TypeMismatchError(f"Expected field {field} to be type {expected.value} but is {actual.value}")

    def _fail(self, error: StoreError) -> None:
        self._state = CursorState.FAILED
        self._failure = error
        self._row = None
        self._pages.close()
        logger.warning("Scan of %s failed: %s", self._request.index, error)

    def _value(self, field: int) -> FieldValue:
        self._check_index(field)
        if self._row is None:
            if self._state is CursorState.CLOSED:
                raise CursorClosedError("Cursor is closed")
            if self._state is CursorState.FAILED:
                raise CursorFailedError(f"Scan of {self._request.index} failed") from self._failure
            raise CursorNotAdvancedError("Cursor has not been advanced yet")
        return self._row[field]
