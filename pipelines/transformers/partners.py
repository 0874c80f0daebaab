"""
Partner Transformer

Mines one season of match events for a player's best partners:

- given: the teammate the player assisted most often
- received: the teammate who assisted the player most often
- teammate: the player shared the most quarters with
- clean_sheet: the teammate on the pitch for the most clean-sheet
  quarters (only for players who played in defence that season)

Counts are per quarter, not per match.
"""

from collections import Counter
from typing import Iterable, Optional

from pipelines.transformers.matches import match_year
from pipelines.transformers.names import normalize_name, same_name
from schemas.matches import MatchEvent, Quarter, TeamLineup
from schemas.records import BestPartners, PartnerCount

DEFENSIVE_POSITIONS = frozenset({"CB", "CB1", "CB2", "LB", "RB", "LWB", "RWB"})


def best_partner(counts: dict[str, int]) -> PartnerCount:
    """Highest count; on a tie the partner counted first wins."""
    best = PartnerCount()
    for name, count in counts.items():
        if count > best.count:
            best = PartnerCount(name=name, count=count)
    return best


def _bump(counts: dict[str, int], name: str) -> None:
    counts[name] = counts.get(name, 0) + 1


def find_team(quarter: Quarter, player_name: str) -> Optional[TeamLineup]:
    """The first team in the quarter that fielded ``player_name``."""
    for team in quarter.teams:
        if any(same_name(p.name, player_name) for p in team.players):
            return team
    return None


def is_defender(matches: Iterable[MatchEvent], player_name: str) -> bool:
    """True if the player was fielded at a defensive position in any quarter."""
    return any(
        same_name(p.name, player_name) and p.position in DEFENSIVE_POSITIONS
        for match in matches
        for quarter in match.quarters
        for team in quarter.teams
        for p in team.players
    )


class PartnerMiner:
    """
    Best-partner counts for one player over one season.

    Args:
        matches: match events, newest first (tie-breaks follow this order)
        season: calendar year to mine; other matches are ignored
        malformed: optional counter that receives skipped-record tallies
    """

    def __init__(
        self,
        matches: Iterable[MatchEvent],
        season: int,
        malformed: Optional[Counter] = None,
    ):
        self.season = season
        self.matches = [m for m in matches if match_year(m) == season]
        self.malformed = malformed if malformed is not None else Counter()

    def mine(self, player_name: str) -> BestPartners:
        defender = is_defender(self.matches, player_name)

        given: dict[str, int] = {}
        received: dict[str, int] = {}
        teammates: dict[str, int] = {}
        clean_sheets: dict[str, int] = {}

        for match in self.matches:
            for quarter in match.quarters:
                team = find_team(quarter, player_name)

                if team is not None:
                    others = [
                        p.name for p in team.players
                        if p.name and not same_name(p.name, player_name)
                    ]
                    for name in others:
                        _bump(teammates, name)

                    if defender and self._kept_clean_sheet(quarter, team):
                        for name in others:
                            _bump(clean_sheets, name)

                self._count_assists(quarter, player_name, given, received)

        return BestPartners(
            given=best_partner(given),
            received=best_partner(received),
            teammate=best_partner(teammates),
            clean_sheet=best_partner(clean_sheets),
        )

    def _kept_clean_sheet(self, quarter: Quarter, team: TeamLineup) -> bool:
        opponents = {
            normalize_name(t.name) for t in quarter.teams if t.name != team.name
        }
        known = {normalize_name(t.name) for t in quarter.teams}

        conceded = 0
        for pair in quarter.goal_assist_pairs:
            scoring_team = normalize_name(pair.scoring_team)
            if not scoring_team:
                continue
            if scoring_team in opponents:
                conceded += 1
            elif scoring_team not in known:
                self.malformed["unknown_goal_team"] += 1
        return conceded == 0

    def _count_assists(
        self,
        quarter: Quarter,
        player_name: str,
        given: dict[str, int],
        received: dict[str, int],
    ) -> None:
        for pair in quarter.goal_assist_pairs:
            scorer, assister = pair.scorer, pair.assister
            if not scorer or not assister:
                self.malformed["incomplete_goal_pair"] += 1
                continue
            if same_name(assister, player_name):
                _bump(given, scorer)
            if same_name(scorer, player_name):
                _bump(received, assister)


def mine_best_partners(
    matches: Iterable[MatchEvent],
    player_name: str,
    season: int,
    malformed: Optional[Counter] = None,
) -> BestPartners:
    """Convenience wrapper around PartnerMiner for a single query."""
    return PartnerMiner(matches, season, malformed).mine(player_name)
