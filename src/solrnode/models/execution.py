"""Execution request/response models used by the HTTP API and the CLI."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from solrnode.models.credentials import SolrCredentials
from solrnode.models.parameters import OperationKind
from solrnode.models.result import ResultItem


class ExecutionRequest(BaseModel):
    """A single node run.

    ``parameters`` holds the values configured on the node; each entry of
    ``items`` is one input item whose keys override those values for that
    item only. An empty dict is a valid item that uses the node values as-is.
    """

    operation: OperationKind = Field(default=OperationKind.SEARCH_BY_QUERY)
    parameters: dict[str, Any] = Field(default_factory=dict, description="Node-level parameter values")
    items: list[dict[str, Any]] = Field(
        default_factory=lambda: [{}],
        description="Input items; per-item parameter overrides",
    )
    continue_on_failure: bool = Field(default=False, description="Record per-item errors instead of aborting")
    credentials: SolrCredentials | None = Field(
        default=None,
        description="Solr connection; falls back to the server's configured default",
    )


class ExecutionResponse(BaseModel):
    """Node output: one branch holding one record per input item."""

    output: list[list[ResultItem]]
