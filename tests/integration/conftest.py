"""Integration test fixtures — a live Solr core seeded with sample documents.

Expects Solr at localhost:8983 with a core named ``documents``, e.g.::

    docker run -d -p 8983:8983 solr:9 solr-precreate documents

Run with ``pytest -m integration``.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import pytest

from solrnode.models.credentials import SolrCredentials

SOLR_URL = "http://localhost:8983/solr"
CORE = "documents"

MOCK_DOCUMENTS: list[dict[str, Any]] = [
    {"id": "doc-001", "title_s": "Solr in Action", "category_s": "books", "price_f": 39.5},
    {"id": "doc-002", "title_s": "Lucene Internals", "category_s": "books", "price_f": 55.0},
    {"id": "doc-003", "title_s": "Mechanical Keyboard", "category_s": "electronics", "price_f": 120.0},
    {"id": "doc-004", "title_s": "USB-C Hub", "category_s": "electronics", "price_f": 25.0},
    {"id": "doc-005", "title_s": "Old Catalog", "category_s": "archived", "price_f": 0.0},
]


def _wait_for_service(url: str, timeout: float = 10.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(1)
    return False


def _seed_solr() -> None:
    with httpx.Client(base_url=f"{SOLR_URL}/{CORE}", timeout=30) as client:
        client.post("/update", json={"delete": {"query": "*:*"}}, params={"commit": "true"}).raise_for_status()
        client.post("/update", json=MOCK_DOCUMENTS, params={"commit": "true"}).raise_for_status()


@pytest.fixture(scope="session")
def solr_ready() -> None:
    if not _wait_for_service(f"{SOLR_URL}/{CORE}/admin/ping"):
        pytest.skip("Solr not available at localhost:8983")


@pytest.fixture
def solr_credentials(solr_ready: None) -> SolrCredentials:
    """Credentials for a freshly seeded core."""
    _seed_solr()
    return SolrCredentials(host="localhost", port="8983", core=CORE)
