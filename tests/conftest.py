"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from solrnode.client.base import SolrCapability
from solrnode.config.settings import Settings
from solrnode.core.host import StaticParameterSource
from solrnode.exceptions import RemoteCallError
from solrnode.models.credentials import SolrCredentials
from solrnode.models.execution import ExecutionRequest
from solrnode.models.parameters import OperationKind
from solrnode.models.query import SearchRequest


class FakeSolr(SolrCapability):
    """In-memory ``SolrCapability`` that records every call.

    ``failures`` maps a 0-based call number to the exception that call raises.
    Mutations return ``ack``; ``None`` simulates an empty acknowledgment.
    """

    def __init__(
        self,
        docs: list[dict[str, Any]] | None = None,
        ack: dict[str, Any] | None = None,
        failures: dict[int, Exception] | None = None,
    ) -> None:
        self.docs = docs if docs is not None else []
        self.ack = ack
        self.failures = failures or {}
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.auth: tuple[str, str] | None = None

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        call_number = len(self.calls)
        self.calls.append((name, args, kwargs))
        if call_number in self.failures:
            raise self.failures[call_number]

    async def search(self, request: SearchRequest) -> list[dict[str, Any]]:
        self._record("search", request)
        return list(self.docs)

    async def add_documents(self, payload: Any, *, commit: bool) -> dict[str, Any] | None:
        self._record("add_documents", payload, commit=commit)
        return self.ack

    async def delete_by_id(self, doc_id: str, *, commit: bool) -> dict[str, Any] | None:
        self._record("delete_by_id", doc_id, commit=commit)
        return self.ack

    async def delete_by_field(self, field: str, value: str, *, commit: bool) -> dict[str, Any] | None:
        self._record("delete_by_field", field, value, commit=commit)
        return self.ack

    async def delete_by_query(self, query: str, *, commit: bool) -> dict[str, Any] | None:
        self._record("delete_by_query", query, commit=commit)
        return self.ack

    async def delete_all(self, *, commit: bool) -> dict[str, Any] | None:
        self._record("delete_all", commit=commit)
        return self.ack

    def set_basic_auth(self, username: str, password: str) -> None:
        self.auth = (username, password)


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        solr={"credentials": {"host": "solr.test", "core": "products"}, "timeout": 5},
        observability={"log_format": "console"},
    )


@pytest.fixture
def credentials() -> SolrCredentials:
    return SolrCredentials(host="solr.test", port="8983", core="products")


@pytest.fixture
def fake_solr() -> FakeSolr:
    return FakeSolr(ack={"responseHeader": {"status": 0, "QTime": 2}})


@pytest.fixture
def make_fake_solr() -> Callable[..., FakeSolr]:
    return FakeSolr


@pytest.fixture
def make_source() -> Callable[..., StaticParameterSource]:
    """Factory for a parameter source over an in-memory execution request."""

    def _make(
        operation: OperationKind = OperationKind.SEARCH_BY_QUERY,
        parameters: dict[str, Any] | None = None,
        items: list[dict[str, Any]] | None = None,
        continue_on_failure: bool = False,
        credentials: SolrCredentials | None = None,
    ) -> StaticParameterSource:
        request = ExecutionRequest(
            operation=operation,
            parameters=parameters or {},
            items=items if items is not None else [{}],
            continue_on_failure=continue_on_failure,
            credentials=credentials,
        )
        return StaticParameterSource(request)

    return _make


@pytest.fixture
def remote_error() -> RemoteCallError:
    return RemoteCallError("undefined field foo", status_code=400)
