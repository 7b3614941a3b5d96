"""Apache Solr client — ``SolrCapability`` over Solr's HTTP API.

Uses ``httpx`` (async). Searches go to ``/select`` and every mutation is a
JSON ``POST`` to ``/update`` with an explicit ``commit`` parameter.

Usage::

    async with SolrClient(credentials) as client:
        docs = await client.search(SearchRequest(query_string="title:solr"))
        await client.delete_by_id("doc-1", commit=True)
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

import httpx

from solrnode.client.base import SolrCapability, SolrHealth
from solrnode.exceptions import (
    ConfigurationError,
    ConnectionError,
    RemoteCallError,
    VersionConflictError,
)
from solrnode.models.credentials import SolrCredentials
from solrnode.models.parameters import DocumentPayload
from solrnode.models.query import SearchRequest

logger = logging.getLogger(__name__)

MATCH_ALL = "*:*"


def term_query(field: str, value: str) -> str:
    """Exact-match query for one indexed term.

    The term parser takes everything after the local params literally, so
    wildcards, whitespace, colons and brackets in ``value`` match only
    themselves instead of being read as query syntax.
    """
    return f"{{!term f={field}}}{value}"


class SolrClient(SolrCapability):
    """HTTP client for a single Solr core.

    Args:
        credentials: Connection settings for the core.
        timeout: HTTP request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.

    Raises:
        ConfigurationError: If the host or core is missing.
    """

    def __init__(
        self,
        credentials: SolrCredentials,
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        if not credentials.host.strip():
            raise ConfigurationError("Solr host is required.")
        if not credentials.core.strip():
            raise ConfigurationError("Solr core is required.")

        self._credentials = credentials
        self._base_url = credentials.base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs
        self._auth: httpx.BasicAuth | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_basic_auth(self, username: str, password: str) -> None:
        self._auth = httpx.BasicAuth(username, password)
        if self._client:
            self._client.auth = self._auth

    # ── Lifecycle ────────────────────────────────────────────────────────

    async def open(self) -> None:
        """Create the underlying ``httpx.AsyncClient``."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                auth=self._auth,
                **self._httpx_kwargs,
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> SolrClient:
        await self.open()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, request: SearchRequest) -> list[dict[str, Any]]:
        if request.response_writer and request.response_writer != "json":
            logger.debug("Ignoring wt=%s; responses are always read as JSON", request.response_writer)

        data = await self._request("GET", "/select", params=request.to_params())
        docs = data.get("response", {}).get("docs", [])
        logger.debug(
            "Solr search returned %d of %s documents",
            len(docs),
            data.get("response", {}).get("numFound", "?"),
        )
        return docs

    # ── Updates ──────────────────────────────────────────────────────────

    async def add_documents(self, payload: DocumentPayload, *, commit: bool) -> dict[str, Any] | None:
        docs = payload if isinstance(payload, list) else [payload]
        return await self._update(docs, commit=commit)

    async def delete_by_id(self, doc_id: str, *, commit: bool) -> dict[str, Any] | None:
        return await self._update({"delete": {"id": doc_id}}, commit=commit)

    async def delete_by_field(self, field: str, value: str, *, commit: bool) -> dict[str, Any] | None:
        return await self.delete_by_query(term_query(field, value), commit=commit)

    async def delete_by_query(self, query: str, *, commit: bool) -> dict[str, Any] | None:
        return await self._update({"delete": {"query": query}}, commit=commit)

    async def delete_all(self, *, commit: bool) -> dict[str, Any] | None:
        return await self.delete_by_query(MATCH_ALL, commit=commit)

    # ── Health ───────────────────────────────────────────────────────────

    async def ping(self) -> SolrHealth:
        """Ping the core's admin handler."""
        if not self._client:
            return SolrHealth(status="unhealthy", message="Client not open")

        try:
            start = time.monotonic()
            resp = await self._client.get("/admin/ping", params={"wt": "json"})
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                solr_status = resp.json().get("status", "unknown")
                return SolrHealth(
                    status="healthy" if solr_status == "OK" else "degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Core: {self._credentials.core}, status: {solr_status}",
                )
            return SolrHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Solr returned HTTP {resp.status_code}",
            )
        except (httpx.HTTPError, ValueError) as e:
            return SolrHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    async def _update(self, body: Any, *, commit: bool) -> dict[str, Any] | None:
        params = {"commit": "true" if commit else "false", "wt": "json"}
        return await self._request("POST", "/update", params=params, json=body) or None

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        if not self._client:
            raise ConnectionError("Solr client not open. Use 'async with SolrClient(...)'.")

        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise ConnectionError(f"Failed to reach Solr at {self._base_url}: {e}") from e

        if resp.is_error:
            message = self._error_message(resp)
            if resp.status_code == 409:
                raise VersionConflictError(message, status_code=resp.status_code)
            raise RemoteCallError(message, status_code=resp.status_code)

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteCallError(f"Solr returned a non-JSON response: {e}", status_code=resp.status_code) from e

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        """Prefer Solr's own ``error.msg`` over the bare HTTP status."""
        try:
            data = resp.json()
        except ValueError:
            data = None
        msg = data.get("error", {}).get("msg") if isinstance(data, dict) else None
        return msg or f"Solr request failed with HTTP {resp.status_code}"
