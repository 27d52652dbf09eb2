"""searchtable — Read search-index documents as typed table rows."""

from searchtable.core.cursor import CursorState, RecordCursor
from searchtable.core.record_set import RecordSet
from searchtable.models.column import ColumnDescriptor, DocumentFieldCategory, OutputType
from searchtable.models.split import PartitionDescriptor
from searchtable.stores.connection import StoreConnection

__version__ = "0.1.0"

__all__ = [
    "ColumnDescriptor",
    "CursorState",
    "DocumentFieldCategory",
    "OutputType",
    "PartitionDescriptor",
    "RecordCursor",
    "RecordSet",
    "StoreConnection",
    "__version__",
]
