"""Solr capability — the interface the dispatcher calls for remote work.

The dispatcher never talks HTTP itself. Anything that implements
``SolrCapability`` can stand in for Solr: the bundled ``SolrClient``,
or a fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from solrnode.models.parameters import DocumentPayload
from solrnode.models.query import SearchRequest


class SolrHealth(BaseModel):
    """Result of pinging a Solr core."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of the ping in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of the ping")
    message: str | None = Field(default=None, description="Additional health message")


class SolrCapability(ABC):
    """Operations the node needs from a Solr client.

    Every mutating call takes a keyword-only ``commit`` flag: ``True`` asks
    Solr to make the change visible to searches immediately.
    """

    @abstractmethod
    async def search(self, request: SearchRequest) -> list[dict[str, Any]]:
        """Run a query and return the matched documents."""

    @abstractmethod
    async def add_documents(self, payload: DocumentPayload, *, commit: bool) -> dict[str, Any] | None:
        """Add or replace one document or a list of documents."""

    @abstractmethod
    async def delete_by_id(self, doc_id: str, *, commit: bool) -> dict[str, Any] | None:
        """Delete the document with the given unique key."""

    @abstractmethod
    async def delete_by_field(self, field: str, value: str, *, commit: bool) -> dict[str, Any] | None:
        """Delete every document where ``field`` equals ``value``."""

    @abstractmethod
    async def delete_by_query(self, query: str, *, commit: bool) -> dict[str, Any] | None:
        """Delete every document matching ``query``."""

    @abstractmethod
    async def delete_all(self, *, commit: bool) -> dict[str, Any] | None:
        """Delete every document in the core."""

    def set_basic_auth(self, username: str, password: str) -> None:  # noqa: B027
        """Authenticate subsequent requests. Optional; the default ignores it."""

    async def ping(self) -> SolrHealth:
        """Report core health. Clients that cannot ping report ``unknown``."""
        return SolrHealth(status="unknown", message=f"{type(self).__name__} does not support ping")
