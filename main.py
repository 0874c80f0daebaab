"""
Matchday Records API

Read-only views over the club's player and match documents: the records
board and the player history pages.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8001

Environment Variables:
    FIRESTORE_PROJECT_ID - Firestore project holding the club documents
    FIRESTORE_API_KEY - Optional API key for the Firestore REST API
    LOG_LEVEL / LOG_FORMAT - Logging configuration
"""

from contextlib import asynccontextmanager
from datetime import datetime

import pytz
from fastapi import FastAPI

from api.v1 import pipelines, players, records
from core.logging import get_logger, setup_logging
from core.middleware import CorrelationMiddleware, setup_middleware
from core.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        log_level=settings.log_level,
        json_format=settings.log_format == "json",
        service_name=settings.service_name,
    )
    log = get_logger()
    log.info(
        "api_starting",
        service=settings.service_name,
        firestore_project=settings.firestore_project_id,
        history_years=settings.history_years,
    )

    yield

    log.info("api_stopped")


app = FastAPI(
    title="Matchday Records API",
    description="Season rankings, career records and player history",
    version="1.0.0",
    lifespan=lifespan,
)

# Middlewares (order matters: first added = outermost)
app.add_middleware(CorrelationMiddleware)
setup_middleware(app)

app.include_router(records.router, prefix="/v1")
app.include_router(players.router, prefix="/v1")
app.include_router(pipelines.router, prefix="/v1")


@app.get("/")
async def root():
    return {"message": "Matchday Records API"}


@app.get("/health")
async def health_check():
    """Health check endpoint (no auth required)."""
    now = datetime.now(pytz.timezone(settings.timezone))
    return {"status": "healthy", "timestamp": now.isoformat()}


@app.get("/ping")
async def ping():
    return {"message": "Pong!"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8001, reload=settings.development_mode)
