"""
Shared Route Dependencies

The document store reader injected into every view route, and the
mapping from a pipeline result to the HTTP envelope.
"""

from functools import lru_cache
from typing import Type, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.settings import settings
from pipelines.extractors import BaseExtractor, FirestoreExtractor
from schemas.common import ApiStatus, error_response
from schemas.pipeline import PipelineResult

ResponseT = TypeVar("ResponseT", bound=BaseModel)


@lru_cache
def get_extractor() -> BaseExtractor:
    """Firestore reader built from settings; overridden in tests."""
    return FirestoreExtractor()


def view_response(result: PipelineResult, response_model: Type[ResponseT]):
    """
    Wrap a view pipeline result in the response envelope.

    Success returns the typed response; a missing player is a 404; any
    other failure is a 502 carrying the single user-facing load error.
    """
    if result.status == ApiStatus.SUCCESS.value:
        return response_model(
            status=ApiStatus.SUCCESS,
            message=result.message,
            data=result.data,
            diagnostics=result.diagnostics,
        )

    if result.status == ApiStatus.NOT_FOUND.value:
        return JSONResponse(
            status_code=404,
            content=error_response(
                message=result.message,
                status=ApiStatus.NOT_FOUND,
                error_code="NOT_FOUND",
            ),
        )

    return JSONResponse(
        status_code=502,
        content=error_response(
            message=settings.load_error_message,
            status=ApiStatus.ERROR,
            error_code="LOAD_FAILED",
            data={"diagnostics": jsonable_encoder(result.diagnostics)},
        ),
    )
