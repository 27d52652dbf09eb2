"""Tests for the httpx-based store client."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from searchtable.stores.base.client import PagedRequest
from searchtable.stores.base.exceptions import StoreProtocolError
from searchtable.stores.http.client import HttpStoreClient

# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_response(make_hit) -> dict[str, Any]:
    """Sample scroll search response."""
    return {
        "_scroll_id": "c2Nyb2xsLTE=",
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "hits": [
                make_hit("p1", fields={"name": ["Lamp"]}),
                make_hit("p2", fields={"name": ["Chair"]}),
            ],
        },
    }


@pytest.fixture
def request_() -> PagedRequest:
    return PagedRequest(
        index="products",
        body={"size": 2, "query": {"match_all": {}}},
        params={"preference": "_shards:1"},
        keep_alive="30s",
    )


def _mock_client(payload: Any = None, status_code: int = 200) -> MagicMock:
    mock_response = MagicMock(spec=httpx.Response)
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    mock_response.raise_for_status = lambda: None

    mock_client = MagicMock(spec=httpx.Client)
    mock_client.request.return_value = mock_response
    return mock_client


# ── Properties ───────────────────────────────────────────────────────────────


class TestHttpClientProperties:
    def test_name(self) -> None:
        assert HttpStoreClient(client=MagicMock(spec=httpx.Client)).name == "http"

    def test_creates_httpx_client(self) -> None:
        store = HttpStoreClient(base_url="http://es.internal:9200/", username="u", password="p")
        assert isinstance(store._client, httpx.Client)
        assert store._base_url == "http://es.internal:9200"
        store.close()


# ── Requests ─────────────────────────────────────────────────────────────────


class TestHttpSearch:
    def test_search_posts_scroll_request(self, request_, sample_response) -> None:
        mock_client = _mock_client(sample_response)
        page = HttpStoreClient(client=mock_client).search(request_)

        mock_client.request.assert_called_once_with(
            "POST",
            "/products/_search",
            params={"scroll": "30s", "preference": "_shards:1"},
            json=request_.body,
        )
        assert page.scroll_id == "c2Nyb2xsLTE="
        assert page.total_hits == 2
        assert [h.id for h in page.hits] == ["p1", "p2"]
        assert page.hits[0].fields == {"name": ["Lamp"]}

    def test_index_pattern_not_escaped(self, request_, sample_response) -> None:
        mock_client = _mock_client(sample_response)
        request = request_.model_copy(update={"index": "logs-*,metrics"})
        HttpStoreClient(client=mock_client).search(request)
        assert mock_client.request.call_args.args[1] == "/logs-*,metrics/_search"

    def test_scroll_posts_token(self, sample_response) -> None:
        mock_client = _mock_client(sample_response)
        HttpStoreClient(client=mock_client).scroll("abc", "1m")
        mock_client.request.assert_called_once_with(
            "POST", "/_search/scroll", json={"scroll": "1m", "scroll_id": "abc"}
        )

    def test_clear_scroll(self) -> None:
        mock_client = _mock_client({"succeeded": True})
        HttpStoreClient(client=mock_client).clear_scroll("abc")
        mock_client.request.assert_called_once_with("DELETE", "/_search/scroll", json={"scroll_id": ["abc"]})

    def test_clear_expired_scroll_is_fine(self) -> None:
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 404
        mock_response.raise_for_status.side_effect = AssertionError("should not be called")
        mock_client = MagicMock(spec=httpx.Client)
        mock_client.request.return_value = mock_response
        HttpStoreClient(client=mock_client).clear_scroll("abc")

    def test_close(self) -> None:
        mock_client = MagicMock(spec=httpx.Client)
        HttpStoreClient(client=mock_client).close()
        mock_client.close.assert_called_once()


# ── Failures ─────────────────────────────────────────────────────────────────


class TestHttpFailures:
    def test_http_error(self, request_) -> None:
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Internal Server Error",
            request=httpx.Request("POST", "http://test"),
            response=httpx.Response(500),
        )
        mock_client = MagicMock(spec=httpx.Client)
        mock_client.request.return_value = mock_response

        with pytest.raises(StoreProtocolError, match="failed"):
            HttpStoreClient(client=mock_client).search(request_)

    def test_connection_error(self, request_) -> None:
        mock_client = MagicMock(spec=httpx.Client)
        mock_client.request.side_effect = httpx.ConnectError("Connection refused")
        with pytest.raises(StoreProtocolError, match="Connection refused"):
            HttpStoreClient(client=mock_client).scroll("abc", "1m")

    def test_non_json_body(self, request_) -> None:
        mock_client = _mock_client()
        mock_client.request.return_value.json.side_effect = ValueError("Expecting value")
        with pytest.raises(StoreProtocolError, match="not JSON"):
            HttpStoreClient(client=mock_client).search(request_)

    @pytest.mark.parametrize("payload", [[], {"took": 1}, {"hits": {"total": 0}}, {"hits": {"hits": [{"_id": "x"}]}}])
    def test_malformed_response(self, request_, payload) -> None:
        with pytest.raises(StoreProtocolError):
            HttpStoreClient(client=_mock_client(payload)).search(request_)

    def test_clear_scroll_error(self) -> None:
        mock_client = MagicMock(spec=httpx.Client)
        mock_client.request.side_effect = httpx.ReadTimeout("timed out")
        with pytest.raises(StoreProtocolError, match="clear scroll"):
            HttpStoreClient(client=mock_client).clear_scroll("abc")
