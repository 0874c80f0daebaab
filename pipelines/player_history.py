"""
Player History Pipeline

Builds one player's history view: a row per season of the window, career
totals, "top 3" badges per season and for the career, best partners for
one season of match events, and the primary position.
"""

from typing import Optional

from core.settings import settings
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors.base import BaseExtractor
from pipelines.snapshot import load_snapshot
from pipelines.transformers.partners import PartnerMiner
from pipelines.transformers.ranking import summarize_rank
from schemas.records import BestPartners, PlayerHistory, RankingSummary
from schemas.stats import CAREER_BADGE_STATS, SEASON_BADGE_STATS


class PlayerHistoryPipeline(BasePipeline):
    """
    History view for a single player.

    Args:
        player_id: Player document id; matched case-insensitively if no exact match
        partner_season: Season mined for best partners (defaults to settings,
                        then to the as-of season)
        extractor: Document store reader
    """

    config = PipelineConfig(
        name="player_history",
        display_name="Player History",
        description="Per-season table, career totals, badges and best partners for one player",
        collections=("players", "players/{id}/history", "matches"),
    )

    def __init__(
        self,
        player_id: str,
        partner_season: Optional[int] = None,
        extractor: Optional[BaseExtractor] = None,
    ):
        super().__init__(extractor)
        self.player_id = player_id
        self.partner_season = partner_season

    def before_execute(self, ctx: PipelineContext) -> None:
        if not self.player_id or not self.player_id.strip():
            raise ValueError("player_id is required")

    async def execute(self, ctx: PipelineContext) -> PlayerHistory:
        snapshot = await load_snapshot(self.extractor, ctx)
        player_id = snapshot.resolve_player(self.player_id)
        stats = snapshot.aggregator()
        cutoff = settings.badge_rank_cutoff

        seasons = stats.player_seasons(player_id)

        season_badges: dict[int, dict[str, RankingSummary]] = {}
        for year in stats.years:
            # past seasons only rank players who played in them
            played_only = year != ctx.as_of_year
            season_badges[year] = {
                stat: summarize_rank(stats.rank_season(year, stat, played_only=played_only), player_id, cutoff)
                for stat in SEASON_BADGE_STATS
            }

        career_badges = {
            stat: summarize_rank(stats.rank_career(stat), player_id, cutoff)
            for stat in CAREER_BADGE_STATS
        }

        partner_season = self.partner_season or settings.partner_season or ctx.as_of_year
        if snapshot.matches_failed:
            best_partners = BestPartners()
        else:
            best_partners = PartnerMiner(snapshot.matches, partner_season, ctx.malformed).mine(player_id)

        ctx.log.info(
            "player_history_built",
            player_id=player_id,
            seasons=len(seasons),
            partner_season=partner_season,
        )

        return PlayerHistory(
            player_id=player_id,
            as_of_year=stats.as_of_year,
            years=list(stats.years),
            seasons=seasons,
            totals=stats.career(player_id),
            has_data=any(row.matches > 0 for row in seasons),
            season_badges=season_badges,
            career_badges=career_badges,
            partner_season=partner_season,
            best_partners=best_partners,
            primary_position=snapshot.positions(ctx).primary_position(player_id),
        )
