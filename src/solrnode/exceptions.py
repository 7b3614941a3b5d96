"""Node-level exceptions.

Every error raised while processing an item derives from ``SolrNodeError``
so the dispatcher can record it against the item when the run is configured
to continue on failure.
"""


class SolrNodeError(Exception):
    """Base exception for solrnode errors."""


class ParameterError(SolrNodeError):
    """Raised when a node parameter is missing or malformed."""


class ConfigurationError(SolrNodeError):
    """Raised when the Solr credentials are incomplete or invalid."""


class RemoteCallError(SolrNodeError):
    """Raised when Solr rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConnectionError(RemoteCallError):
    """Raised when Solr cannot be reached."""


class VersionConflictError(RemoteCallError):
    """Raised when Solr rejects an update because of a ``_version_`` mismatch."""
