"""Type coercion from stored ``FieldValue``s to the engine's output types.

Every function here is total over ``ValueKind``: it either returns a value of
the requested type or raises ``TypeCoercionError``. Numeric and boolean reads
go through the value's text form, so ``"42"`` reads as an integer and ``42.0``
does not.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from searchtable.core.exceptions import TypeCoercionError
from searchtable.models.value import FieldValue, ValueKind

FALSE_STRINGS = frozenset({"", "false", "off", "no", "0"})

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _scalar_text(kind: ValueKind, value: Any) -> str:
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.FLOAT:
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    return str(value)


def _flatten(value: FieldValue) -> FieldValue:
    """Unwrap a single-element projection result to the element itself."""
    if value.kind is ValueKind.PROJECTED and len(value.value) == 1:
        return FieldValue.of(value.value[0])
    return value


def to_text(value: FieldValue) -> str:
    """Plain text form of a stored value. Absent values are empty."""
    value = _flatten(value)
    if value.kind is ValueKind.ABSENT:
        return ""
    if value.kind in (ValueKind.DOCUMENT, ValueKind.COLLECTION, ValueKind.PROJECTED):
        return _to_json(value.value)
    return _scalar_text(value.kind, value.value)


def render_text(value: FieldValue) -> str:
    """Text for a ``varchar`` column.

    Collections (document arrays, multi-valued projections) become a JSON
    array of their elements. Everything else uses ``to_text``.
    """
    value = _flatten(value)
    if value.kind in (ValueKind.COLLECTION, ValueKind.PROJECTED):
        return _to_json(list(value.value))
    return to_text(value)


def to_boolean(value: FieldValue) -> bool:
    """Permissive boolean parse.

    False only for ``""``, ``false``, ``off``, ``no`` and ``0`` (any case).
    Any other text, malformed input included, is true.
    """
    return to_text(value).lower() not in FALSE_STRINGS


def to_integer(value: FieldValue) -> int:
    """Parse the text form as a signed 64-bit integer."""
    text = to_text(value)
    if not _INTEGER_PATTERN.fullmatch(text):
        raise TypeCoercionError(f"Cannot read '{text}' as bigint")
    result = int(text)
    if not _INT64_MIN <= result <= _INT64_MAX:
        raise TypeCoercionError(f"Value '{text}' is out of bigint range")
    return result


def to_float(value: FieldValue) -> float:
    """Parse the text form as a double."""
    text = to_text(value)
    # float() would also take "1_000"
    if "_" in text:
        raise TypeCoercionError(f"Cannot read '{text}' as double")
    try:
        return float(text)
    except ValueError as e:
        raise TypeCoercionError(f"Cannot read '{text}' as double") from e
