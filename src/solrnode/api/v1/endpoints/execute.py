"""Execute endpoint — Run one node operation over a batch of items."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from solrnode.api.deps import get_settings
from solrnode.config.settings import Settings
from solrnode.core.dispatcher import execute_node
from solrnode.core.host import StaticParameterSource
from solrnode.models.execution import ExecutionRequest, ExecutionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/execute",
    response_model=ExecutionResponse,
    summary="Execute Node",
    description=(
        "Apply one operation to every input item, in order. Returns one record per item. "
        "Unless `continue_on_failure` is set, the first failing item aborts the run and "
        "its error is returned instead."
    ),
)
async def execute(
    request: ExecutionRequest,
    settings: Settings = Depends(get_settings),
) -> ExecutionResponse:
    source = StaticParameterSource(request, default_credentials=settings.solr.credentials)
    output = await execute_node(source, timeout=settings.solr.timeout)
    return ExecutionResponse(output=output)
