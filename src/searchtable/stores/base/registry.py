"""Store Registry — Maps configured client names to ``StoreClient`` classes.

The registry lets configuration pick a transport by name (``http``,
``opensearch``, or anything registered by the embedding application).
"""

from __future__ import annotations

import logging
from typing import Any

from searchtable.stores.base.client import StoreClient
from searchtable.stores.base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class StoreNotFoundError(ConfigurationError):
    """Raised when a requested store client is not registered."""


class StoreRegistry:
    """Registry of store client classes.

    Example:
        >>> registry = StoreRegistry()
        >>> registry.register("http", HttpStoreClient)
        >>> client = registry.create("http", base_url="http://localhost:9200")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[StoreClient]] = {}

    def register(self, name: str, client_class: type[StoreClient]) -> None:
        """Register a client class.

        Args:
            name: Unique name for this client type.
            client_class: The client class to register.
        """
        if name in self._classes:
            logger.warning("Overwriting existing store client registration: %s", name)
        self._classes[name] = client_class
        logger.debug("Registered store client: %s", name)

    def create(self, name: str, **kwargs: Any) -> StoreClient:
        """Instantiate a registered client.

        Args:
            name: The registered client name.
            **kwargs: Parameters passed to the client constructor.

        Raises:
            StoreNotFoundError: If no client is registered under this name.
        """
        if name not in self._classes:
            raise StoreNotFoundError(
                f"No store client registered with name '{name}'. "
                f"Available clients: {list(self._classes.keys())}"
            )
        client = self._classes[name](**kwargs)
        logger.info("Created store client: %s", name)
        return client

    @property
    def registered_clients(self) -> list[str]:
        """List all registered client names."""
        return list(self._classes.keys())


def default_registry() -> StoreRegistry:
    """Registry with the built-in ``http`` and ``opensearch`` clients."""
    from searchtable.stores.http.client import HttpStoreClient
    from searchtable.stores.opensearch.client import OpenSearchStoreClient

    registry = StoreRegistry()
    registry.register("http", HttpStoreClient)
    registry.register("opensearch", OpenSearchStoreClient)
    return registry
