"""
Records Board Pipeline

Builds the records view: for every record stat, the best single seasons
(every player-season ranked together) and the best careers. A player
search adds that player's career and per-season standings.

Reads:
- players collection and players/{id}/history/{year} snapshots
- matches collection (only for the player search's primary position)
"""

from typing import Optional

from core.settings import settings
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors.base import BaseExtractor
from pipelines.snapshot import DocumentSnapshot, load_snapshot
from pipelines.transformers.aggregation import StatsAggregator
from pipelines.transformers.ranking import find_entry
from schemas.records import PlayerRecords, PlayerStatRank, RecordsBoard, StatBoard
from schemas.stats import RECORD_STATS


class RecordsBoardPipeline(BasePipeline):
    """
    Season and career leaderboards, optionally with one player's standings.

    Args:
        player: Name searched on the board; None builds the board only
        extractor: Document store reader
    """

    config = PipelineConfig(
        name="records_board",
        display_name="Records Board",
        description="Best single seasons and best careers for each record stat",
        collections=("players", "players/{id}/history", "matches"),
    )

    def __init__(self, player: Optional[str] = None, extractor: Optional[BaseExtractor] = None):
        super().__init__(extractor)
        self.player = player

    async def execute(self, ctx: PipelineContext):
        snapshot = await load_snapshot(
            self.extractor, ctx, include_matches=self.player is not None
        )
        stats = snapshot.aggregator()

        if self.player is not None:
            return self.search_player(snapshot, stats, ctx)

        boards = {
            stat: StatBoard(
                season=stats.rank_pooled(stat, limit=settings.leaderboard_size),
                career=stats.rank_career(stat, limit=settings.leaderboard_size),
            )
            for stat in RECORD_STATS
        }
        ctx.log.info("records_board_built", stats=len(boards), years=list(stats.years))

        return RecordsBoard(as_of_year=stats.as_of_year, years=list(stats.years), boards=boards)

    def search_player(
        self, snapshot: DocumentSnapshot, stats: StatsAggregator, ctx: PipelineContext
    ) -> PlayerRecords:
        """Standings of one player on every record stat; zero values are omitted."""
        player_id = snapshot.resolve_player(self.player)

        career: list[PlayerStatRank] = []
        season: list[PlayerStatRank] = []
        for stat in RECORD_STATS:
            entry = find_entry(stats.rank_career(stat), player_id)
            if entry is not None:
                career.append(PlayerStatRank(stat=stat, rank=entry.rank, value=entry.value))

            for year in stats.years:
                entry = find_entry(stats.rank_season(year, stat), player_id)
                if entry is not None:
                    season.append(
                        PlayerStatRank(stat=stat, rank=entry.rank, value=entry.value, season=year)
                    )

        ctx.log.info(
            "player_records_built",
            player_id=player_id,
            career_ranks=len(career),
            season_ranks=len(season),
        )

        return PlayerRecords(
            player=player_id,
            primary_position=snapshot.positions(ctx).primary_position(player_id),
            career=career,
            season=season,
        )
