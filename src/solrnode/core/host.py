"""Host collaborator — where credentials and per-item parameters come from.

The workflow host evaluates node parameters separately for every input item.
``ParameterSource`` is that contract; ``StaticParameterSource`` implements it
over an ``ExecutionRequest`` for the HTTP API and the CLI.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from solrnode.exceptions import ParameterError
from solrnode.models.credentials import SolrCredentials
from solrnode.models.execution import ExecutionRequest

NO_DEFAULT: Any = object()
"""Pass as ``default`` to make a parameter required."""


class ParameterSource(ABC):
    """Parameter and credential access for one node run."""

    @abstractmethod
    def get_credentials(self) -> SolrCredentials:
        """Return the Solr connection for this run."""

    @abstractmethod
    def get_parameter(self, name: str, item_index: int, default: Any = NO_DEFAULT) -> Any:
        """Return parameter ``name`` as evaluated for item ``item_index``.

        Raises:
            ParameterError: If the parameter is unset and no default is given.
        """

    @abstractmethod
    def input_item_count(self) -> int:
        """Number of input items."""

    @abstractmethod
    def continue_on_failure(self) -> bool:
        """Whether a failing item is recorded instead of aborting the run."""


class StaticParameterSource(ParameterSource):
    """Parameters from an ``ExecutionRequest``.

    Lookup order for item ``i``: the item's own keys, then the node-level
    ``parameters``, then ``default``.
    """

    def __init__(self, request: ExecutionRequest, default_credentials: SolrCredentials | None = None) -> None:
        self._request = request
        self._default_credentials = default_credentials

    def get_credentials(self) -> SolrCredentials:
        if self._request.credentials is not None:
            return self._request.credentials
        if self._default_credentials is not None:
            return self._default_credentials
        return SolrCredentials()

    def get_parameter(self, name: str, item_index: int, default: Any = NO_DEFAULT) -> Any:
        if name == "operation":
            return self._request.operation.value

        if not 0 <= item_index < len(self._request.items):
            raise ParameterError(f"Item index {item_index} is out of range.")

        item = self._request.items[item_index]
        if name in item:
            return item[name]
        if name in self._request.parameters:
            return self._request.parameters[name]
        if default is not NO_DEFAULT:
            return default
        raise ParameterError(f"Could not get parameter '{name}' for item {item_index}.")

    def input_item_count(self) -> int:
        return len(self._request.items)

    def continue_on_failure(self) -> bool:
        return self._request.continue_on_failure
