"""Data models shared by the dispatcher, the client and the API."""

from solrnode.models.credentials import SolrCredentials
from solrnode.models.parameters import OperationKind
from solrnode.models.query import FilterQuery, SearchRequest
from solrnode.models.result import Failure, Outcome, ResultItem, Success

__all__ = [
    "Failure",
    "FilterQuery",
    "OperationKind",
    "Outcome",
    "ResultItem",
    "SearchRequest",
    "SolrCredentials",
    "Success",
]
