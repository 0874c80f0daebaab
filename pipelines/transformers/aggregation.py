"""
Season Aggregation Transformer

Folds live player documents and per-year history snapshots into per-year
stat tables and career totals, and ranks them.

The season window is a fixed list of history years plus the current
season. The current season is passed in explicitly; only the pipeline
entry point looks at the clock.
"""

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from pipelines.transformers.ranking import RankCandidate, rank_entries
from pipelines.transformers.season_records import position_of, season_record_from_document
from schemas.records import RankedEntry
from schemas.stats import SUMMED_FIELDS, CareerTotal, PlayerSeasonRecord


def season_window(as_of_year: int, history_years: Iterable[int]) -> list[int]:
    """
    Every season shown on the dashboards, oldest first.

        >>> season_window(2026, [2022, 2023, 2024, 2025])
        [2022, 2023, 2024, 2025, 2026]
    """
    return sorted(set(history_years) | {as_of_year})


def sum_career(player_id: str, rows: Iterable[PlayerSeasonRecord], position: str = "N/A") -> CareerTotal:
    totals: dict[str, Any] = {field: 0 for field in SUMMED_FIELDS}
    for row in rows:
        for field in SUMMED_FIELDS:
            totals[field] += getattr(row, field)

    return CareerTotal(
        player_id=player_id,
        position=position,
        attack_points=totals["goals"] + totals["assists"],
        **totals,
    )


class StatsAggregator:
    """
    Per-year tables, career totals and their rankings for one snapshot.

    Tables are built once in the constructor and exposed read-only.

    Args:
        players: live player documents keyed by player id
        history: snapshot documents keyed by (player id, year); a missing
            key or None value means the player has no snapshot that year
        as_of_year: the current season, served from the live documents
        years: the season window (must contain as_of_year)
        failed_years: years whose snapshots could not all be read; their
            rankings, and every ranking that sums across years, are empty
    """

    def __init__(
        self,
        players: Mapping[str, Mapping[str, Any]],
        history: Mapping[tuple[str, int], Optional[Mapping[str, Any]]],
        as_of_year: int,
        years: Iterable[int],
        failed_years: Iterable[int] = (),
    ):
        self.as_of_year = as_of_year
        self.years: tuple[int, ...] = tuple(sorted(set(years) | {as_of_year}))
        self.failed_years = frozenset(failed_years)

        positions = {pid: position_of(doc) for pid, doc in players.items()}

        by_year: dict[int, Mapping[str, PlayerSeasonRecord]] = {}
        for year in self.years:
            rows = {}
            for pid in players:
                source = players[pid] if year == as_of_year else history.get((pid, year))
                rows[pid] = season_record_from_document(
                    pid, year, source, positions[pid], is_current=year == as_of_year
                )
            by_year[year] = MappingProxyType(rows)
        self._by_year: Mapping[int, Mapping[str, PlayerSeasonRecord]] = MappingProxyType(by_year)

        self._careers: Mapping[str, CareerTotal] = MappingProxyType({
            pid: sum_career(pid, (by_year[year][pid] for year in self.years), positions[pid])
            for pid in players
        })

    @property
    def player_ids(self) -> list[str]:
        return list(self._careers)

    @property
    def careers_complete(self) -> bool:
        """False when a failed year makes every cross-year sum unreliable."""
        return not self.failed_years

    def season_table(self, year: int) -> Mapping[str, PlayerSeasonRecord]:
        return self._by_year.get(year, MappingProxyType({}))

    def player_seasons(self, player_id: str) -> list[PlayerSeasonRecord]:
        """One row per year of the window, oldest first."""
        return [self._by_year[year][player_id] for year in self.years if player_id in self._by_year[year]]

    def career(self, player_id: str) -> Optional[CareerTotal]:
        return self._careers.get(player_id)

    @property
    def careers(self) -> Mapping[str, CareerTotal]:
        return self._careers

    def rank_season(
        self,
        year: int,
        stat: str,
        limit: Optional[int] = None,
        played_only: bool = False,
    ) -> list[RankedEntry]:
        """
        Ranking of one year's table for ``stat``.

        With ``played_only`` rows with no matches that year are left out.
        """
        if year in self.failed_years or year not in self._by_year:
            return []
        return rank_entries(
            (
                RankCandidate(pid, getattr(row, stat), year, row.position)
                for pid, row in self._by_year[year].items()
                if not played_only or row.matches > 0
            ),
            limit=limit,
        )

    def rank_career(self, stat: str, limit: Optional[int] = None) -> list[RankedEntry]:
        """Ranking of career totals for ``stat``."""
        if not self.careers_complete:
            return []
        return rank_entries(
            (
                RankCandidate(pid, getattr(total, stat), None, total.position)
                for pid, total in self._careers.items()
            ),
            limit=limit,
        )

    def rank_pooled(self, stat: str, limit: Optional[int] = None) -> list[RankedEntry]:
        """
        Single-season bests: every (player, year) row ranked together.

        A player appears once per season that qualifies, unlike the career
        ranking where seasons are summed first.
        """
        if not self.careers_complete:
            return []
        return rank_entries(
            (
                RankCandidate(pid, getattr(row, stat), year, row.position)
                for year in self.years
                for pid, row in self._by_year[year].items()
            ),
            limit=limit,
        )
