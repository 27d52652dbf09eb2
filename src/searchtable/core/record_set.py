"""Record set — The per-split cursor factory handed to the query engine."""

from __future__ import annotations

from collections.abc import Sequence

from searchtable.core.cursor import RecordCursor
from searchtable.models.column import ColumnDescriptor, OutputType
from searchtable.models.split import PartitionDescriptor
from searchtable.stores.connection import StoreConnection


class RecordSet:
    """Columns of one split, ready to be scanned.

    Args:
        columns: Output columns, in order.
        split: The partition to scan.
        connection: Store client and scroll settings.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        split: PartitionDescriptor,
        connection: StoreConnection,
    ) -> None:
        self._columns = list(columns)
        self._split = split
        self._connection = connection

    @property
    def columns(self) -> list[ColumnDescriptor]:
        return list(self._columns)

    @property
    def column_types(self) -> list[OutputType]:
        return [column.output_type for column in self._columns]

    def cursor(self) -> RecordCursor:
        """Open a new cursor. Each call starts its own scroll session."""
        return RecordCursor(self._columns, self._split, self._connection)
