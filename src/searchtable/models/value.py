"""Field values — The closed set of shapes a row position can hold.

Search documents are semi-structured, so a position is only resolved to a
concrete output type when the engine reads it. ``FieldValue`` tags the raw
value once, at projection time, and ``searchtable.core.coercion`` converts
from every tag to every output type.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class ValueKind(str, Enum):
    """Tag of a stored row value."""

    ABSENT = "absent"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    DOCUMENT = "document"
    COLLECTION = "collection"
    PROJECTED = "projected"


class FieldValue(BaseModel):
    """A tagged row value.

    ``PROJECTED`` holds a field-projection result exactly as the store returned
    it (usually a list, even for single-valued fields). ``COLLECTION`` holds a
    list taken from the document body.
    """

    model_config = ConfigDict(frozen=True)

    ABSENT: ClassVar[FieldValue]

    kind: ValueKind
    value: Any = None

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    @classmethod
    def of(cls, raw: Any) -> FieldValue:
        """Tag a value taken from a document body or hit metadata."""
        if raw is None:
            return cls.ABSENT
        # bool before int: True is an int in Python
        if isinstance(raw, bool):
            return cls(kind=ValueKind.BOOLEAN, value=raw)
        if isinstance(raw, int):
            return cls(kind=ValueKind.INTEGER, value=raw)
        if isinstance(raw, float):
            return cls(kind=ValueKind.FLOAT, value=raw)
        if isinstance(raw, str):
            return cls(kind=ValueKind.TEXT, value=raw)
        if isinstance(raw, Mapping):
            return cls(kind=ValueKind.DOCUMENT, value=dict(raw))
        if isinstance(raw, (list, tuple)):
            return cls(kind=ValueKind.COLLECTION, value=list(raw))
        return cls(kind=ValueKind.TEXT, value=str(raw))

    @classmethod
    def projected(cls, raw: Any) -> FieldValue:
        """Tag a field-projection result without unwrapping it."""
        if raw is None:
            return cls.ABSENT
        if not isinstance(raw, (list, tuple)):
            return cls.of(raw)
        return cls(kind=ValueKind.PROJECTED, value=list(raw))


FieldValue.ABSENT = FieldValue(kind=ValueKind.ABSENT)
