"""Record cursor exceptions.

All of these are raised synchronously at the offending call. None is
retried by the cursor.
"""


class CursorError(Exception):
    """Base exception for record cursor errors."""


class InvalidColumnIndexError(CursorError, IndexError):
    """Raised when an accessor is called with an out-of-range column position."""


class CursorNotAdvancedError(CursorError):
    """Raised when a value is read before a successful ``advance_position()``."""


class CursorClosedError(CursorNotAdvancedError):
    """Raised when a value is read after the cursor was closed."""


class CursorFailedError(CursorNotAdvancedError):
    """Raised when the cursor is used after its scan failed.

    The store error that ended the scan is chained as ``__cause__``.
    """


class TypeMismatchError(CursorError, TypeError):
    """Raised when an accessor does not match the column's declared output type."""


class TypeCoercionError(CursorError, ValueError):
    """Raised when a stored value cannot be coerced to the requested type.

    Aborts the current read only, the scan itself stays usable.
    """


class DuplicateColumnPathError(CursorError, ValueError):
    """Raised when two column descriptors share the same document path."""
