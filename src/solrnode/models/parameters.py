"""Typed node parameters.

The host hands over untyped values; each operation validates the values for
one item into one of these models before any request is built.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OperationKind(StrEnum):
    """The six operations the node can perform."""

    ADD_OR_UPDATE = "addOrUpdateDocument"
    DELETE_ALL = "deleteAllDocuments"
    DELETE_BY_FIELD = "deleteByField"
    DELETE_BY_ID = "deleteById"
    DELETE_BY_QUERY = "deleteByQuery"
    SEARCH_BY_QUERY = "searchByQuery"


DocumentPayload = dict[str, Any] | list[dict[str, Any]]


class AdditionalFields(BaseModel):
    """Optional search settings (the "Additional Fields" collection).

    Values arrive straight from the host, so nothing here is strict: an
    unusable value is dropped by the query builder instead of failing the item.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    df: str | None = None
    fl: str | None = None
    q_op: str | None = Field(default=None, alias="qOp")
    rows: Any = None
    sort: str | None = None
    start: Any = None
    wt: str | None = None

    @field_validator("df", "fl", "q_op", "sort", "wt", mode="before")
    @classmethod
    def _drop_non_strings(cls, v: Any) -> Any:
        return v if isinstance(v, str) else None


class FilterQueries(BaseModel):
    """The "Filter Queries" fixed collection: ``{"filters": [{"fq": "..."}]}``."""

    model_config = ConfigDict(extra="ignore")

    filters: list[dict[str, Any]] = Field(default_factory=list)

    def raw(self) -> list[str]:
        """Non-empty ``fq`` strings in their original order."""
        return [str(f["fq"]) for f in self.filters if f.get("fq")]


class SearchParameters(BaseModel):
    query: str = "*:*"
    additional_fields: AdditionalFields = Field(default_factory=AdditionalFields)
    filter_queries: FilterQueries = Field(default_factory=FilterQueries)

    @field_validator("query", mode="before")
    @classmethod
    def _default_query(cls, v: Any) -> Any:
        return v or "*:*"

    @field_validator("additional_fields", "filter_queries", mode="before")
    @classmethod
    def _empty_collection(cls, v: Any) -> Any:
        return {} if v is None else v


class MutationParameters(BaseModel):
    """Parameters shared by every operation that changes the index."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    commit: bool = True


class AddOrUpdateParameters(MutationParameters):
    document: DocumentPayload
    ignore_version_conflict: bool = False

    @field_validator("document", mode="before")
    @classmethod
    def _parse_document(cls, v: Any) -> Any:
        """Decode JSON text; structured values pass through unchanged."""
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("document must not be empty")
            try:
                return json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError(f"document is not valid JSON: {e}") from e
        return v


class DeleteByIdParameters(MutationParameters):
    document_id: str = Field(min_length=1)


class DeleteByFieldParameters(MutationParameters):
    field_name: str = Field(min_length=1)
    field_value: str = Field(min_length=1)


class DeleteByQueryParameters(MutationParameters):
    delete_query: str = Field(min_length=1)


class DeleteAllParameters(MutationParameters):
    pass
