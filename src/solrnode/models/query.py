"""Search request model — the structured form of a ``searchByQuery`` item."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class FilterQuery(BaseModel):
    """A single ``fq`` constraint, rendered as ``field:value``."""

    field: str
    value: str

    def to_fq(self) -> str:
        return f"{self.field}:{self.value}"


class SearchRequest(BaseModel):
    """Request consumed by ``SolrCapability.search``."""

    query_string: str = Field(default="*:*", description="Main query (q)")
    query_operator: Literal["AND", "OR"] | None = Field(default=None, description="Default operator (q.op)")
    filters: list[FilterQuery] = Field(default_factory=list, description="Filter queries (fq), in order")
    sort_field: str | None = Field(default=None, description="Field to sort on")
    sort_order: str | None = Field(default=None, description="Sort direction, normally asc or desc")
    limit: int | None = Field(default=None, description="Rows to return (rows)")
    offset: int | None = Field(default=None, description="Result offset (start)")
    return_fields: list[str] | None = Field(default=None, description="Field list (fl)")
    default_field: str | None = Field(default=None, description="Default search field (df)")
    response_writer: str | None = Field(
        default=None,
        description="Requested response writer (wt). Recorded only; responses are always read as JSON.",
    )

    def to_params(self) -> list[tuple[str, str]]:
        """Render as ``/select`` query parameters.

        Returns a list of pairs so that repeated keys (``fq``) keep their order.
        """
        params: list[tuple[str, str]] = [("q", self.query_string)]
        if self.query_operator:
            params.append(("q.op", self.query_operator))
        params.extend(("fq", f.to_fq()) for f in self.filters)
        if self.sort_field and self.sort_order:
            params.append(("sort", f"{self.sort_field} {self.sort_order}"))
        if self.limit is not None:
            params.append(("rows", str(self.limit)))
        if self.offset is not None:
            params.append(("start", str(self.offset)))
        if self.return_fields:
            params.append(("fl", ",".join(self.return_fields)))
        if self.default_field:
            params.append(("df", self.default_field))
        params.append(("wt", "json"))
        return params
