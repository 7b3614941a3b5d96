"""Operation handlers — one per ``OperationKind``.

A handler resolves the typed parameters for one item, makes exactly one
call on the ``SolrCapability`` and reports the result as an ``Outcome``.
Handlers never raise for per-item problems; the dispatcher decides whether a
``Failure`` ends the run.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from solrnode.client.base import SolrCapability
from solrnode.core.host import NO_DEFAULT, ParameterSource
from solrnode.core.query_builder import build_search_request
from solrnode.exceptions import ParameterError
from solrnode.models.parameters import (
    AddOrUpdateParameters,
    DeleteAllParameters,
    DeleteByFieldParameters,
    DeleteByIdParameters,
    DeleteByQueryParameters,
    DocumentPayload,
    OperationKind,
    SearchParameters,
)
from solrnode.models.result import Failure, Outcome, Success

logger = logging.getLogger(__name__)

VERSION_FIELD = "_version_"
EMPTY_ACKNOWLEDGMENT: dict[str, Any] = {"success": True}


def strip_version_field(payload: DocumentPayload) -> DocumentPayload:
    """Remove ``_version_`` from a document, or from each document of a list.

    Only the top level is touched; nested objects keep their fields.
    """
    docs = payload if isinstance(payload, list) else [payload]
    for doc in docs:
        if isinstance(doc, dict):
            doc.pop(VERSION_FIELD, None)
    return payload


def _has_payload(value: Any) -> bool:
    return value is not None and value != {}


class OperationHandler(ABC):
    """Executes one operation for one item at a time.

    Subclasses declare ``parameters``: a mapping from field name on
    ``parameters_model`` to ``(host parameter name, default)``. A default of
    ``NO_DEFAULT`` makes the host parameter required.
    """

    kind: ClassVar[OperationKind]
    parameters_model: ClassVar[type[BaseModel]]
    parameters: ClassVar[dict[str, tuple[str, Any]]]

    def __init__(self, client: SolrCapability) -> None:
        self._client = client

    def resolve(self, source: ParameterSource, item_index: int) -> Any:
        """Fetch and validate this item's parameters.

        Raises:
            ParameterError: If a required value is missing or invalid.
        """
        values = {
            field: source.get_parameter(name, item_index, default)
            for field, (name, default) in self.parameters.items()
        }
        try:
            return self.parameters_model.model_validate(values)
        except ValidationError as e:
            raise ParameterError(_describe(e, self.parameters)) from e

    @abstractmethod
    async def call(self, params: Any) -> Any:
        """Issue the remote call for already-resolved parameters."""

    async def execute(self, source: ParameterSource, item_index: int) -> Outcome:
        try:
            params = self.resolve(source, item_index)
            payload = await self.call(params)
        except Exception as e:
            return Failure(e)
        return Success(payload if _has_payload(payload) else dict(EMPTY_ACKNOWLEDGMENT))


class SearchByQueryHandler(OperationHandler):
    kind = OperationKind.SEARCH_BY_QUERY
    parameters_model = SearchParameters
    parameters = {
        "query": ("query", "*:*"),
        "additional_fields": ("additionalFields", {}),
        "filter_queries": ("filterQueries", {}),
    }

    async def call(self, params: SearchParameters) -> Any:
        request = build_search_request(
            params.query,
            params.additional_fields,
            params.filter_queries.raw(),
        )
        return await self._client.search(request)


class AddOrUpdateHandler(OperationHandler):
    kind = OperationKind.ADD_OR_UPDATE
    parameters_model = AddOrUpdateParameters
    parameters = {
        "commit": ("commit", True),
        "ignore_version_conflict": ("ignoreVersionConflict", False),
        "document": ("document", NO_DEFAULT),
    }

    async def call(self, params: AddOrUpdateParameters) -> Any:
        payload = params.document
        if params.ignore_version_conflict:
            payload = strip_version_field(payload)
            logger.debug("Removed %s before update; Solr will overwrite unconditionally", VERSION_FIELD)
        return await self._client.add_documents(payload, commit=params.commit)


class DeleteByIdHandler(OperationHandler):
    kind = OperationKind.DELETE_BY_ID
    parameters_model = DeleteByIdParameters
    parameters = {
        "commit": ("commit", True),
        "document_id": ("documentId", NO_DEFAULT),
    }

    async def call(self, params: DeleteByIdParameters) -> Any:
        return await self._client.delete_by_id(params.document_id, commit=params.commit)


class DeleteByFieldHandler(OperationHandler):
    kind = OperationKind.DELETE_BY_FIELD
    parameters_model = DeleteByFieldParameters
    parameters = {
        "commit": ("commit", True),
        "field_name": ("fieldName", NO_DEFAULT),
        "field_value": ("fieldValue", NO_DEFAULT),
    }

    async def call(self, params: DeleteByFieldParameters) -> Any:
        return await self._client.delete_by_field(params.field_name, params.field_value, commit=params.commit)


class DeleteByQueryHandler(OperationHandler):
    kind = OperationKind.DELETE_BY_QUERY
    parameters_model = DeleteByQueryParameters
    parameters = {
        "commit": ("commit", True),
        "delete_query": ("deleteQuery", NO_DEFAULT),
    }

    async def call(self, params: DeleteByQueryParameters) -> Any:
        return await self._client.delete_by_query(params.delete_query, commit=params.commit)


class DeleteAllHandler(OperationHandler):
    kind = OperationKind.DELETE_ALL
    parameters_model = DeleteAllParameters
    parameters = {
        "commit": ("commit", True),
    }

    async def call(self, params: DeleteAllParameters) -> Any:
        return await self._client.delete_all(commit=params.commit)


HANDLERS: dict[OperationKind, type[OperationHandler]] = {
    handler.kind: handler
    for handler in (
        SearchByQueryHandler,
        AddOrUpdateHandler,
        DeleteByIdHandler,
        DeleteByFieldHandler,
        DeleteByQueryHandler,
        DeleteAllHandler,
    )
}


def create_handler(kind: OperationKind, client: SolrCapability) -> OperationHandler:
    return HANDLERS[kind](client)


def _describe(error: ValidationError, parameters: dict[str, tuple[str, Any]]) -> str:
    """Render a validation error using the host's parameter names."""
    parts = []
    for err in error.errors():
        loc = err.get("loc") or ("",)
        field = str(loc[0])
        name = parameters.get(field, (field, None))[0]
        parts.append(f"Parameter '{name}': {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or str(error)
