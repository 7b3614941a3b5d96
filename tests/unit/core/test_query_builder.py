"""Tests for the search request builder."""

from __future__ import annotations

import pytest

from solrnode.core.query_builder import build_search_request, parse_filter_queries, parse_sort
from solrnode.models.parameters import AdditionalFields
from solrnode.models.query import FilterQuery


class TestBuildSearchRequest:
    def test_full_request(self) -> None:
        request = build_search_request(
            "title:solr",
            {"rows": 5, "sort": "score desc"},
            ["category:electronics"],
        )
        assert request.query_string == "title:solr"
        assert request.limit == 5
        assert request.sort_field == "score"
        assert request.sort_order == "desc"
        assert request.filters == [FilterQuery(field="category", value="electronics")]

    @pytest.mark.parametrize("query", [None, ""])
    def test_empty_query_matches_all(self, query: str | None) -> None:
        assert build_search_request(query).query_string == "*:*"

    def test_query_kept_verbatim(self) -> None:
        request = build_search_request('  title:"apache solr"  ')
        assert request.query_string == '  title:"apache solr"  '

    def test_no_additional_fields(self) -> None:
        request = build_search_request("*:*")
        assert request.query_operator is None
        assert request.filters == []
        assert request.sort_field is None and request.sort_order is None
        assert request.limit is None and request.offset is None
        assert request.return_fields is None

    def test_accepts_model(self) -> None:
        request = build_search_request("*:*", AdditionalFields(qOp="AND", start=20))
        assert request.query_operator == "AND"
        assert request.offset == 20

    def test_query_operator_becomes_directive(self) -> None:
        request = build_search_request("a b", {"qOp": "OR"})
        assert ("q.op", "OR") in request.to_params()

    def test_unknown_query_operator_dropped(self) -> None:
        assert build_search_request("a b", {"qOp": "XOR"}).query_operator is None

    def test_field_list_split(self) -> None:
        request = build_search_request("*:*", {"fl": "id, title,,score"})
        assert request.return_fields == ["id", "title", "score"]

    def test_field_list_of_only_commas_dropped(self) -> None:
        assert build_search_request("*:*", {"fl": " , "}).return_fields is None

    @pytest.mark.parametrize("rows", ["5", True, None, 2.5])
    def test_rows_requires_integer(self, rows: object) -> None:
        assert build_search_request("*:*", {"rows": rows}).limit is None

    def test_integral_float_rows_accepted(self) -> None:
        assert build_search_request("*:*", {"rows": 10.0}).limit == 10

    def test_start_zero_is_applied(self) -> None:
        assert build_search_request("*:*", {"start": 0}).offset == 0

    def test_default_field_forwarded(self) -> None:
        request = build_search_request("solr", {"df": "title"})
        assert request.default_field == "title"
        assert ("df", "title") in request.to_params()

    def test_response_writer_recorded_not_forwarded(self) -> None:
        request = build_search_request("*:*", {"wt": "xml"})
        assert request.response_writer == "xml"
        params = request.to_params()
        assert ("wt", "json") in params
        assert ("wt", "xml") not in params

    def test_non_string_values_are_dropped(self) -> None:
        request = build_search_request("*:*", {"sort": 7, "fl": ["id"], "df": None})
        assert request.sort_field is None
        assert request.return_fields is None
        assert request.default_field is None

    def test_unknown_options_ignored(self) -> None:
        request = build_search_request("*:*", {"hl": "true"})
        assert request.query_string == "*:*"


class TestFilterQueries:
    def test_split_on_first_colon(self) -> None:
        filters = parse_filter_queries(["price:[* TO 100]", "url:http://example.com/a"])
        assert filters == [
            FilterQuery(field="price", value="[* TO 100]"),
            FilterQuery(field="url", value="http://example.com/a"),
        ]

    @pytest.mark.parametrize("fq", ["electronics", ":electronics", ""])
    def test_malformed_dropped(self, fq: str) -> None:
        assert parse_filter_queries([fq]) == []

    def test_empty_value_kept(self) -> None:
        assert parse_filter_queries(["category:"]) == [FilterQuery(field="category", value="")]

    def test_order_preserved_around_dropped(self) -> None:
        filters = parse_filter_queries(["a:1", "bad", "b:2", ":3", "c:3"])
        assert [f.field for f in filters] == ["a", "b", "c"]

    def test_rendered_as_fq_params(self) -> None:
        request = build_search_request("*:*", filter_queries=["a:1", "b:2"])
        assert [v for k, v in request.to_params() if k == "fq"] == ["a:1", "b:2"]


class TestSort:
    @pytest.mark.parametrize(
        ("sort", "expected"),
        [
            ("price asc", ("price", "asc")),
            ("  score   desc ", ("score", "desc")),
            ("price\tdesc", ("price", "desc")),
        ],
    )
    def test_two_tokens(self, sort: str, expected: tuple[str, str]) -> None:
        assert parse_sort(sort) == expected

    @pytest.mark.parametrize("sort", ["", "price", "price asc extra", "   ", None])
    def test_other_token_counts_ignored(self, sort: str | None) -> None:
        assert parse_sort(sort) is None

    def test_three_tokens_leave_no_partial_sort(self) -> None:
        request = build_search_request("*:*", {"sort": "price asc, score"})
        assert request.sort_field is None
        assert request.sort_order is None
        assert all(k != "sort" for k, _ in request.to_params())
