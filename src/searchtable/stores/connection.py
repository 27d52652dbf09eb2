"""Store connection — A ready store client plus the paging configuration for it."""

from __future__ import annotations

import logging
from types import TracebackType

from searchtable.config.settings import ScrollSettings, Settings
from searchtable.stores.base.client import StoreClient
from searchtable.stores.base.registry import StoreRegistry, default_registry

logger = logging.getLogger(__name__)


class StoreConnection:
    """Validated connection handle shared by every cursor of a catalog.

    Args:
        client: The transport to the search store.
        scroll: Page size, keep-alive and materialization settings.
        schema_name: Schema the store's indices are exposed under.
    """

    def __init__(
        self,
        client: StoreClient,
        scroll: ScrollSettings | None = None,
        schema_name: str = "default",
    ) -> None:
        self.client = client
        self.scroll = scroll or ScrollSettings()
        self.schema_name = schema_name

    @classmethod
    def from_settings(cls, settings: Settings, registry: StoreRegistry | None = None) -> StoreConnection:
        """Create the configured client and wrap it in a connection."""
        registry = registry or default_registry()
        conn = settings.connection
        client = registry.create(conn.client, **conn.client_kwargs())
        logger.info("Connecting schema '%s' to %s via %s", conn.schema_name, conn.base_url, conn.client)
        return cls(client=client, scroll=settings.scroll, schema_name=conn.schema_name)

    def close(self) -> None:
        """Close the underlying client."""
        self.client.close()

    def __enter__(self) -> StoreConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
