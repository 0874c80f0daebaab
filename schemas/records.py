"""
Read-Model Schemas

Pydantic models for the derived tables served by the records board and
the player history views.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.stats import CareerTotal, Number, PlayerSeasonRecord


class RankedEntry(BaseModel):
    """One row of a standard competition ranking."""

    model_config = ConfigDict(frozen=True)

    entity_id: str
    value: Number
    rank: int
    season: Optional[int] = None  # set on per-season and pooled rankings
    position: Optional[str] = None


class RankingSummary(BaseModel):
    """Badge view of a ranking: the podium plus one player's standing."""

    top: list[RankedEntry] = []
    player_rank: Optional[int] = None
    player_value: Number = 0


class StatBoard(BaseModel):
    """Leaderboards for one stat."""

    season: list[RankedEntry] = []  # pooled across every season of the window
    career: list[RankedEntry] = []


class RecordsBoard(BaseModel):
    as_of_year: int
    years: list[int]
    boards: dict[str, StatBoard]


class PlayerStatRank(BaseModel):
    stat: str
    rank: int
    value: Number
    season: Optional[int] = None


class PlayerRecords(BaseModel):
    """Search result on the records board for a single player."""

    player: str
    primary_position: str = "N/A"
    career: list[PlayerStatRank] = []
    season: list[PlayerStatRank] = []


class PartnerCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    count: int = 0


class BestPartners(BaseModel):
    model_config = ConfigDict(frozen=True)

    given: PartnerCount = PartnerCount()
    received: PartnerCount = PartnerCount()
    teammate: PartnerCount = PartnerCount()
    clean_sheet: PartnerCount = PartnerCount()


class PlayerHistory(BaseModel):
    player_id: str
    as_of_year: int
    years: list[int]
    seasons: list[PlayerSeasonRecord]
    totals: CareerTotal
    has_data: bool = False
    season_badges: dict[int, dict[str, RankingSummary]] = {}
    career_badges: dict[str, RankingSummary] = {}
    partner_season: int
    best_partners: BestPartners = BestPartners()
    primary_position: str = "N/A"
