"""OpenSearch store client — Scroll searches through ``opensearch-py``.

OpenSearch keeps Elasticsearch's scroll API, so this client also works
against API-compatible Elasticsearch clusters.

Install the optional dependency::

    pip install searchtable[opensearch]
    # or: pip install opensearch-py
"""

from __future__ import annotations

import logging
from typing import Any

from searchtable.stores.base.client import PagedRequest, ScrollPage, StoreClient
from searchtable.stores.base.exceptions import ConfigurationError, StoreProtocolError

logger = logging.getLogger(__name__)


class OpenSearchStoreClient(StoreClient):
    """Store client backed by the synchronous ``opensearchpy.OpenSearch`` client.

    The underlying client is created on first use.

    Args:
        hosts: List of node URLs.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        client: Pre-built ``OpenSearch`` client to use instead of creating one.
        **kwargs: Additional keyword arguments forwarded to ``OpenSearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        client: Any = None,
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["http://localhost:9200"]
        self._username = username
        self._password = password
        self._verify_certs = verify_certs
        self._extra_kwargs = kwargs
        self._client: Any = client

    @property
    def name(self) -> str:
        return "opensearch"

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        try:
            from opensearchpy import OpenSearch
        except ImportError as e:
            raise ConfigurationError(
                "opensearch-py package is required.  Install with: pip install searchtable[opensearch]"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
        }
        if self._username and self._password:
            client_kwargs["http_auth"] = (self._username, self._password)
        client_kwargs.update(self._extra_kwargs)

        self._client = OpenSearch(**client_kwargs)
        logger.info("Created OpenSearch client for %s", ", ".join(self._hosts))
        return self._client

    def search(self, request: PagedRequest) -> ScrollPage:
        """Start a scroll search on ``request.index``."""
        client = self._get_client()
        try:
            response = client.search(
                index=request.index,
                body=request.body,
                scroll=request.keep_alive,
                **request.params,
            )
        except Exception as e:
            raise StoreProtocolError(f"OpenSearch search failed: {e}") from e
        return ScrollPage.from_response(response)

    def scroll(self, scroll_id: str, keep_alive: str) -> ScrollPage:
        """Fetch the next page of a scroll."""
        client = self._get_client()
        try:
            response = client.scroll(body={"scroll_id": scroll_id, "scroll": keep_alive})
        except Exception as e:
            raise StoreProtocolError(f"OpenSearch scroll failed: {e}") from e
        return ScrollPage.from_response(response)

    def clear_scroll(self, scroll_id: str) -> None:
        """Release a scroll context."""
        client = self._get_client()
        try:
            client.clear_scroll(scroll_id=scroll_id)
        except Exception as e:
            raise StoreProtocolError(f"OpenSearch clear_scroll failed: {e}") from e

    def close(self) -> None:
        """Close the OpenSearch client."""
        if self._client is not None:
            self._client.close()
            self._client = None
