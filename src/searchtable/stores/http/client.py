"""HTTP store client — Scroll searches against the Elasticsearch REST API.

Talks to Elasticsearch (or any API-compatible store) with ``httpx`` over the
plain ``_search`` / ``_search/scroll`` endpoints, so no vendor client library
is needed.

Usage::

    client = HttpStoreClient(base_url="http://localhost:9200")
    page = client.search(request)
    while page.hits:
        page = client.scroll(page.scroll_id, request.keep_alive)
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import httpx

from searchtable.stores.base.client import PagedRequest, ScrollPage, StoreClient
from searchtable.stores.base.exceptions import StoreProtocolError

logger = logging.getLogger(__name__)


class HttpStoreClient(StoreClient):
    """Store client for the Elasticsearch REST API.

    Args:
        base_url: Store base URL, e.g. ``"http://localhost:9200"``.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        timeout: HTTP request timeout in seconds.
        client: Pre-built ``httpx.Client`` to use instead of creating one.
        **kwargs: Additional keyword arguments forwarded to ``httpx.Client``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
        **kwargs: Any,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        if client is None:
            auth = None
            if username and password:
                auth = httpx.BasicAuth(username, password)
            client = httpx.Client(
                base_url=self._base_url,
                timeout=httpx.Timeout(timeout),
                auth=auth,
                verify=verify_certs,
                **kwargs,
            )
        self._client = client

    @property
    def name(self) -> str:
        return "http"

    def search(self, request: PagedRequest) -> ScrollPage:
        """Start a scroll search on ``request.index``."""
        index = urllib.parse.quote(request.index, safe=",*")
        params = {"scroll": request.keep_alive, **request.params}
        return self._send("POST", f"/{index}/_search", params=params, json=request.body)

    def scroll(self, scroll_id: str, keep_alive: str) -> ScrollPage:
        """Fetch the next page of a scroll."""
        return self._send("POST", "/_search/scroll", json={"scroll": keep_alive, "scroll_id": scroll_id})

    def clear_scroll(self, scroll_id: str) -> None:
        """Release a scroll context."""
        try:
            resp = self._client.request("DELETE", "/_search/scroll", json={"scroll_id": [scroll_id]})
            # 404: the context already expired
            if resp.status_code != 404:
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise StoreProtocolError(f"Failed to clear scroll: {e}") from e

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> ScrollPage:
        try:
            resp = self._client.request(method, url, **kwargs)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise StoreProtocolError(f"Search request to {self._base_url}{url} failed: {e}") from e
        except ValueError as e:
            raise StoreProtocolError(f"Search response from {self._base_url}{url} is not JSON: {e}") from e
        return ScrollPage.from_response(data)
