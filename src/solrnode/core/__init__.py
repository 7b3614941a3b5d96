"""Core node logic: query building and operation dispatch."""

from solrnode.core.dispatcher import OperationDispatcher, execute_node, run
from solrnode.core.query_builder import build_search_request

__all__ = ["OperationDispatcher", "build_search_request", "execute_node", "run"]
