"""
Records Board Routes

Read-only leaderboards. No authentication (public club data).

Routes:
    GET  /v1/records                  : best seasons and careers per stat
    GET  /v1/records/players/{name}   : one player's standings on the board
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.v1.dependencies import get_extractor, view_response
from core.logging import get_logger
from pipelines import run_pipeline
from pipelines.extractors import BaseExtractor
from schemas.pipeline import PlayerRecordsResponse, RecordsBoardResponse

router = APIRouter(prefix="/records", tags=["records"])
log = get_logger("records_api")


@router.get("", response_model=RecordsBoardResponse)
async def get_records_board(
    as_of_year: Optional[int] = Query(
        None, ge=2000, le=2100, description="Season to compute the board as of. Omit for the current season."
    ),
    extractor: BaseExtractor = Depends(get_extractor),
):
    """
    Records board: for each record stat the top single seasons (every
    player-season ranked together) and the top careers.
    """
    log.debug("records_board_request", as_of_year=as_of_year)
    result = await run_pipeline("records_board", as_of_year=as_of_year, extractor=extractor)
    return view_response(result, RecordsBoardResponse)


@router.get("/players/{name}", response_model=PlayerRecordsResponse)
async def get_player_records(
    name: str = Path(..., min_length=1, description="Player name, matched case-insensitively"),
    as_of_year: Optional[int] = Query(None, ge=2000, le=2100),
    extractor: BaseExtractor = Depends(get_extractor),
):
    """
    Player search on the records board: the player's career and
    per-season rank for every record stat with a non-zero value.
    """
    log.debug("player_records_request", player=name, as_of_year=as_of_year)
    result = await run_pipeline(
        "records_board", as_of_year=as_of_year, player=name, extractor=extractor
    )
    return view_response(result, PlayerRecordsResponse)
