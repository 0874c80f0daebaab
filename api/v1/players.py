"""
Player History Routes

Routes:
    GET  /v1/players/{player_id}/history  : season table, totals, badges, partners
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.v1.dependencies import get_extractor, view_response
from core.logging import get_logger
from pipelines import run_pipeline
from pipelines.extractors import BaseExtractor
from schemas.pipeline import PlayerHistoryResponse

router = APIRouter(prefix="/players", tags=["players"])
log = get_logger("players_api")


@router.get("/{player_id}/history", response_model=PlayerHistoryResponse)
async def get_player_history(
    player_id: str = Path(..., min_length=1),
    as_of_year: Optional[int] = Query(None, ge=2000, le=2100),
    partner_season: Optional[int] = Query(
        None, ge=2000, le=2100, description="Season mined for best partners. Omit for the configured default."
    ),
    extractor: BaseExtractor = Depends(get_extractor),
):
    log.debug(
        "player_history_request",
        player_id=player_id,
        as_of_year=as_of_year,
        partner_season=partner_season,
    )
    result = await run_pipeline(
        "player_history",
        as_of_year=as_of_year,
        player_id=player_id,
        partner_season=partner_season,
        extractor=extractor,
    )
    return view_response(result, PlayerHistoryResponse)
