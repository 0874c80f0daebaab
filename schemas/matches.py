"""
Match Event Schemas

Match documents as recorded by the club's match-entry tool: quarters,
team lineups with positions, and goal/assist pairs. The shape is owned by
the document store; every field is optional so that partially recorded
matches still load.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _EventModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class LineupPlayer(_EventModel):
    name: Optional[str] = None
    position: Optional[str] = None


class TeamLineup(_EventModel):
    name: Optional[str] = None
    players: list[LineupPlayer] = []

    @field_validator("players", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


class GoalSide(_EventModel):
    player: Optional[str] = None
    team: Optional[str] = None


class AssistSide(_EventModel):
    player: Optional[str] = None


class GoalAssistPair(_EventModel):
    goal: Optional[GoalSide] = None
    assist: Optional[AssistSide] = None

    @property
    def scorer(self) -> Optional[str]:
        return self.goal.player if self.goal and self.goal.player else None

    @property
    def assister(self) -> Optional[str]:
        return self.assist.player if self.assist and self.assist.player else None

    @property
    def scoring_team(self) -> Optional[str]:
        return self.goal.team if self.goal else None


class Quarter(_EventModel):
    teams: list[TeamLineup] = []
    goal_assist_pairs: list[GoalAssistPair] = Field(default=[], alias="goalAssistPairs")

    @field_validator("teams", "goal_assist_pairs", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


class MatchEvent(_EventModel):
    match_id: Optional[str] = None
    date: Optional[str] = None
    quarters: list[Quarter] = []

    @field_validator("quarters", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    @field_validator("date", mode="before")
    @classmethod
    def date_as_text(cls, v):
        if v is None:
            return None
        return str(v)
