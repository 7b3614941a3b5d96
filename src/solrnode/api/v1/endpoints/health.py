"""Health check endpoints — Service and Solr core health."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from solrnode import __version__
from solrnode.api.deps import get_settings
from solrnode.client.base import SolrHealth
from solrnode.client.solr import SolrClient
from solrnode.config.settings import Settings
from solrnode.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="solrnode version")
    service: str = Field(description="Service name ('solrnode')")
    default_core: str = Field(description="Core used when a request carries no credentials")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service Health Check",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="solrnode",
        default_core=settings.solr.credentials.core,
    )


@router.get(
    "/health/solr",
    response_model=SolrHealth,
    summary="Solr Health Check",
    description="Ping the default Solr core's admin handler.",
)
async def solr_health(settings: Settings = Depends(get_settings)) -> SolrHealth:
    credentials = settings.solr.credentials
    try:
        client = SolrClient(credentials, timeout=settings.solr.timeout)
    except ConfigurationError as e:
        return SolrHealth(status="unhealthy", message=str(e))

    if credentials.has_basic_auth:
        client.set_basic_auth(credentials.username or "", credentials.password or "")
    async with client:
        return await client.ping()
