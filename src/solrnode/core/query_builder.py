"""Query builder — turns ``searchByQuery`` parameters into a ``SearchRequest``.

Pure and total: a facet whose value cannot be used is left out of the
request instead of failing the item.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from solrnode.models.parameters import AdditionalFields
from solrnode.models.query import FilterQuery, SearchRequest

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "*:*"
QUERY_OPERATORS = ("AND", "OR")


def build_search_request(
    query_string: str | None,
    additional_fields: AdditionalFields | Mapping[str, Any] | None = None,
    filter_queries: Iterable[str] = (),
) -> SearchRequest:
    """Build the search request for one item.

    Args:
        query_string: Main query; ``*:*`` when empty.
        additional_fields: The "Additional Fields" collection (``df``, ``fl``,
            ``qOp``, ``rows``, ``sort``, ``start``, ``wt``).
        filter_queries: Raw ``field:value`` filter strings.

    Returns:
        A complete ``SearchRequest``.
    """
    if additional_fields is None:
        fields = AdditionalFields()
    elif isinstance(additional_fields, AdditionalFields):
        fields = additional_fields
    else:
        fields = AdditionalFields.model_validate(dict(additional_fields))

    request = SearchRequest(
        query_string=query_string or DEFAULT_QUERY,
        filters=parse_filter_queries(filter_queries),
    )

    if fields.q_op in QUERY_OPERATORS:
        request.query_operator = fields.q_op

    sort = parse_sort(fields.sort)
    if sort:
        request.sort_field, request.sort_order = sort

    rows = _as_int(fields.rows)
    if rows is not None:
        request.limit = rows
    start = _as_int(fields.start)
    if start is not None:
        request.offset = start

    if fields.fl:
        return_fields = [f.strip() for f in fields.fl.split(",") if f.strip()]
        request.return_fields = return_fields or None

    if fields.df:
        request.default_field = fields.df
    if fields.wt:
        request.response_writer = fields.wt

    return request


def parse_filter_queries(filter_queries: Iterable[str]) -> list[FilterQuery]:
    """Split each filter at its first colon.

    ``price:[* TO 100]`` becomes ``price`` / ``[* TO 100]``. A string with no
    colon, or one starting with a colon, is dropped.
    """
    filters: list[FilterQuery] = []
    for fq in filter_queries:
        if not fq:
            continue
        field, sep, value = fq.partition(":")
        if not sep or not field:
            logger.debug("Dropping malformed filter query %r", fq)
            continue
        filters.append(FilterQuery(field=field, value=value))
    return filters


def parse_sort(sort: str | None) -> tuple[str, str] | None:
    """Parse ``"<field> <order>"``; anything other than two tokens is ignored."""
    if not sort:
        return None
    tokens = sort.split()
    if len(tokens) != 2:
        return None
    return tokens[0], tokens[1]


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
