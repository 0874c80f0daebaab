"""
HTTP Middleware

Correlation IDs for request tracing, CORS for the dashboard frontends,
and the global validation error handler.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from core.logging import get_logger, set_correlation_id
from core.settings import settings
from schemas.common import ApiStatus, error_response

log = get_logger("http")


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Reads X-Correlation-ID from the request (or generates one), binds it
    for logging, and echoes it on the response.
    """

    HEADER_NAME = "X-Correlation-ID"

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        response = await call_next(request)
        response.headers[self.HEADER_NAME] = correlation_id
        return response


def setup_middleware(app: FastAPI):
    """Setup CORS and global exception handlers"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log.warning("request_validation_failed", url=str(request.url), errors=exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response(
                message="Request validation failed",
                status=ApiStatus.VALIDATION_ERROR,
                error_code="VALIDATION_ERROR",
                data={"errors": jsonable_encoder(exc.errors())},
            ),
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
