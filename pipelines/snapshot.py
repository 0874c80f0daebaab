"""
Document Snapshot Loader

Reads everything one view needs from the document store: live player
documents, every history snapshot of the season window, and the match
events. The history lookups are independent, so they are fanned out over
a bounded number of worker threads.

Failure handling per section:
- players: the load fails (nothing can be shown without them)
- matches: partners and positions fall back to their defaults
- history for a year: that year's rankings, and every ranking summed
  across years, come back empty
"""

import asyncio
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from core.resilience import FETCH_ERRORS
from core.settings import settings
from pipelines.context import PipelineContext, PlayerNotFoundError
from pipelines.extractors.base import BaseExtractor
from pipelines.transformers.aggregation import StatsAggregator, season_window
from pipelines.transformers.matches import parse_matches
from pipelines.transformers.names import normalize_name
from pipelines.transformers.positions import PositionResolver
from schemas.matches import MatchEvent


@dataclass(frozen=True)
class DocumentSnapshot:
    """Immutable view of the document store as read for one view load."""

    as_of_year: int
    years: tuple[int, ...]
    players: Mapping[str, Mapping[str, Any]]
    history: Mapping[tuple[str, int], Optional[Mapping[str, Any]]]
    matches: tuple[MatchEvent, ...]
    failed_years: frozenset[int] = frozenset()
    matches_failed: bool = False

    def resolve_player(self, name: str) -> str:
        """
        Player id for ``name``: exact match first, then case-insensitive.

        Raises:
            PlayerNotFoundError: if no live player document matches
        """
        if name in self.players:
            return name
        key = normalize_name(name)
        for player_id in self.players:
            if key and normalize_name(player_id) == key:
                return player_id
        raise PlayerNotFoundError(name)

    def aggregator(self) -> StatsAggregator:
        return StatsAggregator(
            self.players,
            self.history,
            self.as_of_year,
            self.years,
            failed_years=self.failed_years,
        )

    def positions(self, ctx: Optional[PipelineContext] = None) -> PositionResolver:
        resolver = PositionResolver(self.matches)
        if ctx is not None and resolver.skipped:
            ctx.malformed["unnamed_player"] += resolver.skipped
        return resolver


async def _load_matches(
    extractor: BaseExtractor, ctx: PipelineContext
) -> tuple[tuple[MatchEvent, ...], bool]:
    try:
        documents = await asyncio.to_thread(extractor.list_matches)
    except FETCH_ERRORS as e:
        ctx.record_fetch_failure("matches", e)
        return (), True

    return tuple(parse_matches(documents, ctx.malformed)), False


async def _load_history(
    extractor: BaseExtractor,
    ctx: PipelineContext,
    player_ids: list[str],
    years: list[int],
    max_concurrent: int,
) -> tuple[dict[tuple[str, int], Optional[Mapping[str, Any]]], set[int]]:
    semaphore = asyncio.Semaphore(max_concurrent)

    async def lookup(player_id: str, year: int):
        async with semaphore:
            try:
                document = await asyncio.to_thread(extractor.get_history, player_id, year)
            except FETCH_ERRORS as e:
                ctx.log.warning(
                    "history_lookup_failed",
                    player_id=player_id,
                    year=year,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return player_id, year, None, e
            return player_id, year, document, None

    results = await asyncio.gather(
        *(lookup(player_id, year) for year in years for player_id in player_ids)
    )

    history: dict[tuple[str, int], Optional[Mapping[str, Any]]] = {}
    failures: dict[int, Exception] = {}
    for player_id, year, document, error in results:
        if error is not None:
            failures.setdefault(year, error)
            continue
        if document is None:
            ctx.record_missing_snapshot()
        else:
            history[(player_id, year)] = MappingProxyType(document)

    for year in sorted(failures):
        ctx.record_fetch_failure(f"history:{year}", failures[year])

    return history, set(failures)


async def load_snapshot(
    extractor: BaseExtractor,
    ctx: PipelineContext,
    history_years: Optional[list[int]] = None,
    include_matches: bool = True,
    max_concurrent: Optional[int] = None,
) -> DocumentSnapshot:
    """
    Read a consistent snapshot for ``ctx.as_of_year``.

    Args:
        extractor: Document store reader
        ctx: Pipeline context; receives diagnostics and records processed
        history_years: Past seasons to read snapshots for (defaults to settings)
        include_matches: Skip the matches collection when the view has no use for it
        max_concurrent: Bound on in-flight history lookups (defaults to settings)

    Raises:
        Whatever the players read raises; nothing else escapes
    """
    as_of_year = ctx.as_of_year
    years = season_window(as_of_year, history_years if history_years is not None else settings.history_years)
    past_years = [year for year in years if year != as_of_year]

    players = await asyncio.to_thread(extractor.list_players)
    ctx.increment_records(len(players))
    ctx.log.info("players_loaded", player_count=len(players), years=years)

    history_task = _load_history(
        extractor,
        ctx,
        list(players),
        past_years,
        max_concurrent or settings.max_concurrent_lookups,
    )
    if include_matches:
        (history, failed_years), (matches, matches_failed) = await asyncio.gather(
            history_task, _load_matches(extractor, ctx)
        )
    else:
        history, failed_years = await history_task
        matches, matches_failed = (), False

    ctx.increment_records(len(history) + len(matches))
    ctx.log.info(
        "snapshot_loaded",
        snapshots=len(history),
        matches=len(matches),
        failed_years=sorted(failed_years),
        matches_failed=matches_failed,
    )

    return DocumentSnapshot(
        as_of_year=as_of_year,
        years=tuple(years),
        players=MappingProxyType({pid: MappingProxyType(doc) for pid, doc in players.items()}),
        history=MappingProxyType(history),
        matches=matches,
        failed_years=frozenset(failed_years),
        matches_failed=matches_failed,
    )
