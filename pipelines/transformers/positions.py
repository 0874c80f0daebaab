"""
Position Transformer

Counts the positions each player has been fielded at across every
recorded match and reports their primary position.
"""

from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pipelines.transformers.names import normalize_name
from schemas.matches import MatchEvent

# Lineups number duplicate slots (two centre-backs, two holding mids, ...)
NUMBERED_POSITIONS: dict[str, str] = {
    "CB1": "CB",
    "CB2": "CB",
    "CDM1": "CDM",
    "CDM2": "CDM",
    "CM1": "CM",
    "CM2": "CM",
}

UNKNOWN_POSITION = "N/A"


def unify_position(position: Optional[str]) -> str:
    """
    Collapse numbered lineup slots into one label.

        >>> unify_position("CB2")
        'CB'
        >>> unify_position("ST")
        'ST'
    """
    if not position:
        return UNKNOWN_POSITION
    return NUMBERED_POSITIONS.get(position, position)


def primary_position(histogram: Mapping[str, int]) -> str:
    """
    Every label tied for the highest count, joined in first-seen order.

        >>> primary_position({"CB": 2, "LB": 1})
        'CB'
        >>> primary_position({"ST": 3, "LW": 3})
        'ST, LW'
    """
    if not histogram:
        return UNKNOWN_POSITION
    top = max(histogram.values())
    return ", ".join(label for label, count in histogram.items() if count == top)


class PositionResolver:
    """
    Position histograms for every player seen in ``matches``.

    Players are keyed by normalized name, so lookups are case-insensitive.
    Lineup entries without a player name are counted in ``skipped``.
    """

    def __init__(self, matches: Iterable[MatchEvent]):
        histograms: dict[str, Counter] = {}
        self.skipped = 0

        for match in matches:
            for quarter in match.quarters:
                for team in quarter.teams:
                    for player in team.players:
                        key = normalize_name(player.name)
                        if not key:
                            self.skipped += 1
                            continue
                        histograms.setdefault(key, Counter())[unify_position(player.position)] += 1

        self._histograms: Mapping[str, Mapping[str, int]] = MappingProxyType(
            {key: MappingProxyType(dict(counts)) for key, counts in histograms.items()}
        )

    def histogram(self, player_name: str) -> Mapping[str, int]:
        return self._histograms.get(normalize_name(player_name), MappingProxyType({}))

    def primary_position(self, player_name: str) -> str:
        return primary_position(self.histogram(player_name))
