"""
Pipeline API Routes

Lists the registered view pipelines and what they read.
"""

from fastapi import APIRouter

from core.logging import get_logger
from pipelines import list_pipelines
from schemas.common import ApiStatus
from schemas.pipeline import PipelineInfo, PipelineListResponse

router = APIRouter(prefix="/pipelines", tags=["pipelines"])
log = get_logger("pipeline_api")


@router.get("", response_model=PipelineListResponse)
async def get_available_pipelines() -> PipelineListResponse:
    """
    List all available pipelines.

    Returns pipeline names, descriptions, and the collections they read.
    """
    pipelines = [PipelineInfo(**info) for info in list_pipelines()]
    return PipelineListResponse(
        status=ApiStatus.SUCCESS,
        message=f"{len(pipelines)} pipelines available",
        data=pipelines,
    )
