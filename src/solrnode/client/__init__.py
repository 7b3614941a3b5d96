"""Solr client layer.

``SolrCapability`` is what the dispatcher depends on; ``SolrClient`` is the
``httpx`` implementation used in production.
"""

from solrnode.client.base import SolrCapability, SolrHealth
from solrnode.client.solr import SolrClient

__all__ = ["SolrCapability", "SolrClient", "SolrHealth"]
