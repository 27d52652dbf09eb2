"""Search store layer — Pluggable transports to scroll-capable stores.

Built-in clients:
  - http: Elasticsearch REST API over httpx
  - opensearch: OpenSearch (and compatible Elasticsearch) via opensearch-py

Implement ``StoreClient`` to plug in another transport.
"""
