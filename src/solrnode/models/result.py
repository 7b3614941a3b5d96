"""Per-item outcomes and the output records handed back to the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PairedItem(BaseModel):
    item: int = Field(ge=0, description="Index of the input item this record came from")


class ResultItem(BaseModel):
    """One output record. There is exactly one per processed input item.

    Serializes as ``{"json": ..., "pairedItem": {"item": i}}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    json_: Any = Field(alias="json", description="Response payload, or {'error': message}")
    paired_item: PairedItem = Field(alias="pairedItem")

    @property
    def item_index(self) -> int:
        return self.paired_item.item

    @classmethod
    def for_item(cls, item_index: int, payload: Any) -> ResultItem:
        return cls(json=payload, pairedItem=PairedItem(item=item_index))


@dataclass(frozen=True)
class Success:
    """The remote call for an item completed; ``payload`` is what Solr returned."""

    payload: Any


@dataclass(frozen=True)
class Failure:
    """Processing an item raised ``error``."""

    error: Exception

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


Outcome = Success | Failure
