"""Solr connection credentials."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SolrCredentials(BaseModel):
    """Connection settings for a single Solr core.

    Built once per run and shared read-only across all items.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="127.0.0.1", description="Solr host name or address")
    port: str = Field(default="8983", description="Solr port (empty to use the scheme default)")
    core: str = Field(default="", description="Core / collection name")
    path: str = Field(default="/solr", description="Solr API path prefix")
    secure: bool = Field(default=False, description="Use HTTPS")
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")

    @field_validator("port", mode="before")
    @classmethod
    def _coerce_port(cls, v: object) -> str:
        """Accept numeric ports from YAML or JSON."""
        if v is None:
            return ""
        return str(v)

    @property
    def protocol(self) -> str:
        return "https" if self.secure else "http"

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.username and self.password)

    @property
    def base_url(self) -> str:
        """Root URL of the core, e.g. ``http://127.0.0.1:8983/solr/products``."""
        authority = f"{self.host}:{self.port}" if self.port else self.host
        path = "/" + self.path.strip("/") if self.path.strip("/") else ""
        return f"{self.protocol}://{authority}{path}/{self.core.strip('/')}"
