"""Column descriptors — What the query engine asks to read from each hit.

Descriptors are created once per query by the external column catalog and
handed to the cursor read-only. The cursor honors the declared output type
even when the underlying document disagrees.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

IDENTIFIER_PATH = "_id"
INDEX_PATH = "_index"


class DocumentFieldCategory(str, Enum):
    """How a field is mapped in the search store."""

    SCALAR = "scalar"
    NESTED = "nested"

    @classmethod
    def from_mapping_type(cls, mapping_type: str) -> DocumentFieldCategory:
        """Classify a raw store mapping type (``"nested"``, ``"keyword"``, ...).

        Only ``nested`` blocks field projection. ``object`` fields are still
        treated as scalar.
        """
        return cls.NESTED if mapping_type.lower() == cls.NESTED.value else cls.SCALAR


class OutputType(str, Enum):
    """Semantic type of an output column, as declared by the query engine."""

    BOOLEAN = "boolean"
    INTEGER = "bigint"
    FLOAT = "double"
    TEXT = "varchar"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, value: str) -> OutputType:
        """Parse a type name, accepting a few common SQL aliases."""
        aliases = {
            "bool": cls.BOOLEAN,
            "int": cls.INTEGER,
            "integer": cls.INTEGER,
            "long": cls.INTEGER,
            "float": cls.FLOAT,
            "real": cls.FLOAT,
            "text": cls.TEXT,
            "string": cls.TEXT,
        }
        key = value.strip().lower()
        if key in aliases:
            return aliases[key]
        return cls(key)


class PathKind(str, Enum):
    """Where a column's value comes from."""

    IDENTIFIER = "identifier"
    INDEX = "index"
    DOCUMENT = "document"


class ColumnDescriptor(BaseModel):
    """One output column of the table view over an index."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1, description="Document key, projected field name, or _id/_index")
    category: DocumentFieldCategory = Field(
        default=DocumentFieldCategory.SCALAR,
        description="Store mapping category of the field",
    )
    output_type: OutputType = Field(default=OutputType.TEXT, description="Declared output type")

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, v: Any) -> Any:
        """Accept raw store mapping types as well as category names."""
        if isinstance(v, str) and not isinstance(v, DocumentFieldCategory):
            return DocumentFieldCategory.from_mapping_type(v)
        return v

    @field_validator("output_type", mode="before")
    @classmethod
    def _parse_output_type(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, OutputType):
            return OutputType.parse(v)
        return v

    @property
    def path_kind(self) -> PathKind:
        if self.path == IDENTIFIER_PATH:
            return PathKind.IDENTIFIER
        if self.path == INDEX_PATH:
            return PathKind.INDEX
        return PathKind.DOCUMENT

    @property
    def is_nested(self) -> bool:
        return self.category is DocumentFieldCategory.NESTED

    @classmethod
    def parse(cls, definition: str) -> ColumnDescriptor:
        """Build a descriptor from ``path[:type[:category]]``.

        Example::

            ColumnDescriptor.parse("price:double")
            ColumnDescriptor.parse("authors:varchar:nested")
        """
        parts = definition.split(":")
        if not parts[0] or len(parts) > 3:
            raise ValueError(f"Invalid column definition '{definition}', expected path[:type[:category]]")
        data: dict[str, Any] = {"path": parts[0]}
        if len(parts) > 1:
            data["output_type"] = parts[1]
        if len(parts) > 2:
            data["category"] = parts[2]
        return cls(**data)
