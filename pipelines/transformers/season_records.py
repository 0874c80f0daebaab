"""
Season Record Transformer

Builds PlayerSeasonRecord rows from live player documents and history
snapshots. Both share the same camelCase field shape.
"""

import math
from typing import Any, Optional

from schemas.stats import PlayerSeasonRecord

# PlayerSeasonRecord field -> document field
DOCUMENT_FIELDS: dict[str, str] = {
    "goals": "goals",
    "assists": "assists",
    "clean_sheets": "cleanSheets",
    "matches": "matches",
    "win": "win",
    "draw": "draw",
    "lose": "lose",
    "personal_points": "personalPoints",
    "mom_score": "momScore",
    "mom_top3_count": "momTop3Count",
    "mom_top8_count": "momTop8Count",
}

INTEGER_FIELDS = frozenset(
    {"goals", "assists", "clean_sheets", "matches", "win", "draw", "lose",
     "mom_top3_count", "mom_top8_count"}
)


def to_number(value: Any) -> float:
    """Numeric document value, or 0 for missing and non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    Win rates were always displayed this way; Python's round() would send
    62.5 to 62.

        >>> round_half_up(62.5)
        63
    """
    return math.floor(value + 0.5)


def position_of(document: Optional[dict[str, Any]]) -> str:
    position = (document or {}).get("position")
    return position if isinstance(position, str) and position else "N/A"


def season_record_from_document(
    player_id: str,
    year: int,
    document: Optional[dict[str, Any]],
    position: str = "N/A",
    is_current: bool = False,
) -> PlayerSeasonRecord:
    """
    Build one player's row for one year.

    A missing document (no snapshot for that year) gives an all-zero row.
    """
    document = document or {}
    values: dict[str, Any] = {}
    for field, source in DOCUMENT_FIELDS.items():
        number = to_number(document.get(source))
        values[field] = int(number) if field in INTEGER_FIELDS else number

    return PlayerSeasonRecord(
        player_id=player_id,
        year=year,
        position=position,
        is_current=is_current,
        win_rate=round_half_up(to_number(document.get("winRate"))),
        **values,
    )
