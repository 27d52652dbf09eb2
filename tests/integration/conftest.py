"""Integration test fixtures — A live Elasticsearch seeded with mock products.

Expects Elasticsearch to be running on localhost:9200, e.g.:
    docker run -p 9200:9200 -e discovery.type=single-node -e xpack.security.enabled=false elasticsearch:8.13.0

Run with ``pytest -m integration``.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import pytest

INDEX = "searchtable-products"

MOCK_DOCUMENTS: list[dict[str, Any]] = [
    {
        "id": f"p{i:03d}",
        "name": f"Product {i}",
        "price": round(9.99 + i, 2),
        "stock": i * 3,
        "active": i % 2 == 0,
        "reviews": [{"stars": (i % 5) + 1, "text": f"review {i}-{j}"} for j in range(i % 3)],
    }
    for i in range(25)
]


def _wait_for_service(url: str, timeout: float = 30.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


def _seed_elasticsearch(host: str, index: str = INDEX) -> None:
    with httpx.Client(base_url=host, timeout=30) as client:
        client.delete(f"/{index}", params={"ignore_unavailable": "true"})

        mapping = {
            "settings": {"number_of_shards": 2, "number_of_replicas": 0},
            "mappings": {
                "properties": {
                    "name": {"type": "keyword"},
                    "price": {"type": "double"},
                    "stock": {"type": "long"},
                    "active": {"type": "boolean"},
                    "reviews": {
                        "type": "nested",
                        "properties": {"stars": {"type": "integer"}, "text": {"type": "text"}},
                    },
                }
            },
        }
        resp = client.put(f"/{index}", json=mapping)
        resp.raise_for_status()

        for doc in MOCK_DOCUMENTS:
            body = {k: v for k, v in doc.items() if k != "id"}
            resp = client.put(f"/{index}/_doc/{doc['id']}", json=body)
            resp.raise_for_status()

        client.post(f"/{index}/_refresh")


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure Elasticsearch is running and seeded."""
    host = "http://localhost:9200"
    if not _wait_for_service(host):
        pytest.skip("Elasticsearch not available at localhost:9200")
    _seed_elasticsearch(host)
    return host


@pytest.fixture
def index_name() -> str:
    return INDEX


@pytest.fixture
def mock_documents() -> list[dict[str, Any]]:
    return MOCK_DOCUMENTS
