"""
Season and Career Stat Schemas

Per-year player records and the career totals folded from them.
Field names are snake_case; the document store's camelCase names live
in pipelines.transformers.season_records.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict

Number = Union[int, float]

# Counters summed into a career total (win_rate is a percentage, not summed)
SUMMED_FIELDS: tuple[str, ...] = (
    "goals",
    "assists",
    "clean_sheets",
    "matches",
    "win",
    "draw",
    "lose",
    "personal_points",
    "mom_score",
    "mom_top3_count",
    "mom_top8_count",
)

# Records board tabs
RECORD_STATS: tuple[str, ...] = (
    "goals",
    "assists",
    "clean_sheets",
    "matches",
    "mom_score",
    "personal_points",
)

# Player history "top 3" badges, per season
SEASON_BADGE_STATS: tuple[str, ...] = (
    "goals",
    "assists",
    "clean_sheets",
    "matches",
    "mom_top3_count",
    "mom_top8_count",
)

# Player history "top 3" badges, career
CAREER_BADGE_STATS: tuple[str, ...] = (
    "goals",
    "assists",
    "matches",
    "clean_sheets",
    "attack_points",
    "mom_top3_count",
    "mom_top8_count",
)


class PlayerSeasonRecord(BaseModel):
    """One player, one year. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    year: int
    position: str = "N/A"
    is_current: bool = False  # served from the live document, not a snapshot

    goals: int = 0
    assists: int = 0
    clean_sheets: int = 0
    matches: int = 0
    win: int = 0
    draw: int = 0
    lose: int = 0
    win_rate: int = 0
    personal_points: Number = 0
    mom_score: Number = 0
    mom_top3_count: int = 0
    mom_top8_count: int = 0


class CareerTotal(BaseModel):
    """One player summed over every year of the season window."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    position: str = "N/A"

    goals: int = 0
    assists: int = 0
    clean_sheets: int = 0
    matches: int = 0
    win: int = 0
    draw: int = 0
    lose: int = 0
    personal_points: Number = 0
    mom_score: Number = 0
    mom_top3_count: int = 0
    mom_top8_count: int = 0
    attack_points: int = 0
