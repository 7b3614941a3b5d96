"""Operation dispatcher — runs one operation over every input item.

Items are processed strictly in order and one at a time. Each item yields
exactly one ``ResultItem``; on failure that is either an ``{"error": ...}``
record (continue-on-failure) or the end of the run.
"""

from __future__ import annotations

import structlog

from solrnode.client.base import SolrCapability
from solrnode.client.solr import SolrClient
from solrnode.core.host import ParameterSource
from solrnode.core.operations import create_handler
from solrnode.exceptions import ParameterError
from solrnode.models.credentials import SolrCredentials
from solrnode.models.parameters import OperationKind
from solrnode.models.result import Failure, Outcome, ResultItem, Success
from solrnode.observability.logging import run_context

logger = structlog.get_logger(__name__)


def to_result_item(outcome: Outcome, item_index: int, continue_on_failure: bool) -> ResultItem:
    """Map one outcome to its output record.

    Raises:
        Exception: The item's original error, when ``continue_on_failure`` is off.
    """
    if isinstance(outcome, Success):
        return ResultItem.for_item(item_index, outcome.payload)
    if continue_on_failure:
        return ResultItem.for_item(item_index, {"error": outcome.message})
    raise outcome.error


class OperationDispatcher:
    """Applies one operation to a batch of items through a ``SolrCapability``."""

    def __init__(self, client: SolrCapability, operation: OperationKind) -> None:
        self.operation = operation
        self._handler = create_handler(operation, client)

    async def run(self, source: ParameterSource, continue_on_failure: bool) -> list[ResultItem]:
        log = logger.bind(operation=self.operation.value)
        item_count = source.input_item_count()
        log.info("run_started", items=item_count, continue_on_failure=continue_on_failure)

        results: list[ResultItem] = []
        for item_index in range(item_count):
            outcome = await self._handler.execute(source, item_index)
            if isinstance(outcome, Failure):
                log.warning(
                    "item_failed",
                    item_index=item_index,
                    error=outcome.message,
                    error_type=type(outcome.error).__name__,
                )
            results.append(to_result_item(outcome, item_index, continue_on_failure))

        log.info("run_finished", items=len(results))
        return results


async def run(
    credentials: SolrCredentials,
    operation: OperationKind,
    source: ParameterSource,
    continue_on_failure: bool,
    *,
    client: SolrCapability | None = None,
    timeout: float = 30.0,
) -> list[ResultItem]:
    """Run ``operation`` for every item of ``source``.

    Args:
        credentials: Connection for the run.
        operation: The operation to apply to each item.
        source: Parameter values for each item.
        continue_on_failure: Record per-item errors instead of raising.
        client: Capability to use instead of a ``SolrClient`` built from
            ``credentials``. The caller owns its lifecycle.
        timeout: HTTP timeout for the ``SolrClient``.

    Returns:
        One ``ResultItem`` per input item, in input order.
    """
    with run_context(core=credentials.core):
        if client is not None:
            if credentials.has_basic_auth:
                client.set_basic_auth(credentials.username or "", credentials.password or "")
            return await OperationDispatcher(client, operation).run(source, continue_on_failure)

        solr = SolrClient(credentials, timeout=timeout)
        if credentials.has_basic_auth:
            solr.set_basic_auth(credentials.username or "", credentials.password or "")
        async with solr:
            return await OperationDispatcher(solr, operation).run(source, continue_on_failure)


def resolve_operation(source: ParameterSource) -> OperationKind:
    """Read the run's operation from item 0.

    Raises:
        ParameterError: If the value is not a known operation.
    """
    value = source.get_parameter("operation", 0, OperationKind.SEARCH_BY_QUERY.value)
    try:
        return OperationKind(value)
    except ValueError as e:
        raise ParameterError(f"Unknown operation '{value}'.") from e


async def execute_node(
    source: ParameterSource,
    *,
    client: SolrCapability | None = None,
    timeout: float = 30.0,
) -> list[list[ResultItem]]:
    """Execute a complete node run and return its single output branch."""
    results = await run(
        source.get_credentials(),
        resolve_operation(source),
        source,
        source.continue_on_failure(),
        client=client,
        timeout=timeout,
    )
    return [results]
