"""Row projector — Lays one raw hit out as a fixed-width row.

Positions follow the caller's column order. A document key that matches no
column path is ignored, and a column whose path matches no key stays absent.
Only top-level keys are matched: a dotted path such as ``author.name`` is
compared literally against top-level keys and never walks into sub-documents.
"""

from __future__ import annotations

from collections.abc import Sequence

from searchtable.core.exceptions import DuplicateColumnPathError
from searchtable.models.column import ColumnDescriptor, PathKind
from searchtable.models.hit import RawHit
from searchtable.models.value import FieldValue


class RowProjector:
    """Projects hits onto a fixed column list."""

    def __init__(self, columns: Sequence[ColumnDescriptor]) -> None:
        self._column_count = len(columns)
        self._path_to_index: dict[str, int] = {}
        self._synthetic: list[tuple[int, PathKind]] = []

        seen: set[str] = set()
        for position, column in enumerate(columns):
            if column.path in seen:
                raise DuplicateColumnPathError(f"Column path '{column.path}' is requested more than once")
            seen.add(column.path)
            if column.path_kind is PathKind.DOCUMENT:
                self._path_to_index[column.path] = position
            else:
                self._synthetic.append((position, column.path_kind))

    @property
    def column_count(self) -> int:
        return self._column_count

    @property
    def path_to_index(self) -> dict[str, int]:
        """Document path -> row position (synthetic columns excluded)."""
        return dict(self._path_to_index)

    def project(self, hit: RawHit, use_field_projection: bool) -> list[FieldValue]:
        """Build a fresh row for ``hit``.

        Args:
            hit: The raw hit.
            use_field_projection: Read ``hit.fields`` (projection results) when
                true, the top level of ``hit.source`` otherwise.
        """
        row = [FieldValue.ABSENT] * self._column_count

        for position, kind in self._synthetic:
            row[position] = FieldValue.of(hit.id if kind is PathKind.IDENTIFIER else hit.index)

        if use_field_projection:
            for key, values in (hit.fields or {}).items():
                position = self._path_to_index.get(key)
                if position is not None:
                    row[position] = FieldValue.projected(values)
        else:
            for key, value in (hit.source or {}).items():
                position = self._path_to_index.get(key)
                if position is not None:
                    row[position] = FieldValue.of(value)

        return row
