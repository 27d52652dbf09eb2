"""Store-specific exceptions."""


class StoreError(Exception):
    """Base exception for search store errors."""


class ConnectionError(StoreError):
    """Raised when the client cannot reach the search store."""


class StoreProtocolError(StoreError):
    """Raised when a search or scroll request fails or returns a malformed response.

    Fatal to the whole scan. Nothing is retried at this layer.
    """


class ConfigurationError(StoreError):
    """Raised when store client configuration is invalid."""
