"""
Ranking Transformer

Standard competition ("1224") ranking shared by every leaderboard and
badge in the platform.
"""

from typing import Iterable, NamedTuple, Optional, Union

from schemas.records import RankedEntry, RankingSummary
from schemas.stats import Number


class RankCandidate(NamedTuple):
    """An (entity, value) pair to rank. Season is set for per-season rows."""

    entity_id: str
    value: Number
    season: Optional[int] = None
    position: Optional[str] = None


CandidateLike = Union[RankCandidate, RankedEntry, tuple]


def _as_candidate(item: CandidateLike) -> RankCandidate:
    if isinstance(item, RankCandidate):
        return item
    if isinstance(item, RankedEntry):
        return RankCandidate(item.entity_id, item.value, item.season, item.position)
    return RankCandidate(*item)


def rank_entries(
    candidates: Iterable[CandidateLike],
    limit: Optional[int] = None,
) -> list[RankedEntry]:
    """
    Rank candidates by value, highest first.

    - Entries with value <= 0 are dropped before ranking.
    - Equal values share a rank; the next distinct value resumes at
      previous rank + size of the tie group.
    - Ties are ordered by entity id, then season.
    - ``limit`` keeps every entry ranked within the top ``limit``, so a tie
      group straddling the cutoff is kept whole.

    Examples:
        >>> [(e.entity_id, e.rank) for e in rank_entries([("A", 10), ("B", 10), ("C", 5)])]
        [('A', 1), ('B', 1), ('C', 3)]
        >>> [e.entity_id for e in rank_entries([("A", 9), ("B", 7), ("C", 7), ("D", 1)], limit=2)]
        ['A', 'B', 'C']
    """
    rows = [c for c in map(_as_candidate, candidates) if c.value > 0]
    rows.sort(key=lambda c: (-c.value, c.entity_id, c.season if c.season is not None else -1))

    ranked: list[RankedEntry] = []
    current_rank = 1
    current_value: Optional[Number] = None
    at_current_value = 0

    for row in rows:
        if row.value != current_value:
            current_rank += at_current_value
            current_value = row.value
            at_current_value = 1
        else:
            at_current_value += 1

        if limit is not None and current_rank > limit:
            break

        ranked.append(
            RankedEntry(
                entity_id=row.entity_id,
                value=row.value,
                rank=current_rank,
                season=row.season,
                position=row.position,
            )
        )

    return ranked


def find_entry(entries: Iterable[RankedEntry], entity_id: str) -> Optional[RankedEntry]:
    """First entry for ``entity_id``. Ids are compared exactly."""
    return next((e for e in entries if e.entity_id == entity_id), None)


def summarize_rank(
    entries: list[RankedEntry],
    entity_id: str,
    cutoff: int = 3,
) -> RankingSummary:
    """
    Podium plus one entity's standing.

    ``entries`` must be the unbounded ranking so the entity's rank is known
    even when it is off the podium.
    """
    entry = find_entry(entries, entity_id)
    return RankingSummary(
        top=[e for e in entries if e.rank <= cutoff],
        player_rank=entry.rank if entry else None,
        player_value=entry.value if entry else 0,
    )
