from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_HOLES = 18
DEFAULT_HOLE_PAR = 4


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Player(_CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    team_id: Optional[str] = None


class Team(_CamelModel):
    id: str
    name: str
    color: str = "#9e9e9e"
    logo: Optional[str] = None
    captain: Optional[str] = None


class HoleScore(_CamelModel):
    hole: int = Field(ge=1)
    score: Optional[int] = None
    par: Optional[int] = None
    notes: Optional[str] = None


class CourseDetails(_CamelModel):
    name: Optional[str] = None
    holes: int = DEFAULT_HOLES
    par: Optional[int] = None


class MatchResult(_CamelModel):
    opponent_id: str
    result: Optional[Literal["win", "loss", "halved"]] = None
    points: Optional[float] = None


class PlayerGroup(_CamelModel):
    id: str
    name: str
    player_ids: list[str] = Field(default_factory=list)
    tee_time: Optional[str] = None
    starting_hole: Optional[int] = None


class Round(_CamelModel):
    id: str
    name: str = ""
    date: Optional[str] = None
    course_details: Optional[CourseDetails] = None
    format: str = "Stroke Play"
    scores: dict[str, list[Optional[HoleScore]]] = Field(default_factory=dict)
    # One authoritative par per hole. Per-score pars remain a fallback for
    # rounds ingested from older clients.
    hole_pars: Optional[list[int]] = None
    match_results: dict[str, MatchResult] = Field(default_factory=dict)
    player_groups: list[PlayerGroup] = Field(default_factory=list)

    @property
    def hole_count(self) -> int:
        if self.course_details is None or self.course_details.holes <= 0:
            return DEFAULT_HOLES
        return self.course_details.holes

    @property
    def course_par(self) -> Optional[int]:
        if self.course_details is None:
            return None
        return self.course_details.par

    def player_scores(self, player_id: str) -> list[Optional[HoleScore]]:
        return self.scores.get(player_id) or []

    def group(self, group_id: str) -> Optional[PlayerGroup]:
        for group in self.player_groups:
            if group.id == group_id:
                return group
        return None


class _TimestampedModel(_CamelModel):
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ShoutOut(_TimestampedModel):
    id: str
    type: Literal["birdie", "eagle", "hole-in-one", "other"] = "other"
    player_id: str
    tournament_id: Optional[str] = None
    round_id: Optional[str] = None
    hole_number: int
    message: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _legacy_custom_type(cls, value):
        # Older clients tagged free-form call-outs as "custom".
        return "other" if value == "custom" else value


class Highlight(_TimestampedModel):
    id: str
    player_id: str
    tournament_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    media_type: Literal["image", "video"]
    media_url: Optional[str] = None
    round_id: Optional[str] = None


class ShoutOutItem(_TimestampedModel):
    id: str
    type: Literal["shoutOut"] = "shoutOut"
    data: ShoutOut


class HighlightItem(_TimestampedModel):
    id: str
    type: Literal["highlight"] = "highlight"
    data: Highlight


FeedItem = Annotated[Union[ShoutOutItem, HighlightItem], Field(discriminator="type")]


class Tournament(_CamelModel):
    id: str
    name: str = ""
    players: list[Player] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    rounds: list[Round] = Field(default_factory=list)
    shout_outs: list[ShoutOut] = Field(default_factory=list)
    highlights: list[Highlight] = Field(default_factory=list)

    def round(self, round_id: str) -> Optional[Round]:
        for round_ in self.rounds:
            if round_.id == round_id:
                return round_
        return None


class PointsSystem(_CamelModel):
    win: int = 100
    top_finish: dict[int, int] = Field(default_factory=dict)
    participation: int = 10


class Tour(_CamelModel):
    id: str
    name: str = ""
    description: Optional[str] = None
    status: Literal["upcoming", "active", "completed"] = "upcoming"
    tournaments: list[Tournament] = Field(default_factory=list)
    players: list[Player] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    points_system: Optional[PointsSystem] = None


class Section(BaseModel):
    label: str
    holes: list[int]


class SectionTotal(BaseModel):
    label: str
    holes: list[int]
    total: int


class ScorecardCell(BaseModel):
    hole: int
    par: int
    score: Optional[int] = None
    score_class: Optional[str] = None
    label: str = ""


class ScorecardRow(BaseModel):
    player_id: str
    player_name: str
    team_id: Optional[str] = None
    total: int = 0
    score_to_par: Optional[int] = None
    score_to_par_display: str = "E"
    band: str = "neutral"
    thru: int = 0
    sections: list[SectionTotal] = Field(default_factory=list)
    cells: list[ScorecardCell] = Field(default_factory=list)


class ScorecardResponse(BaseModel):
    round_id: str
    round_name: str
    group_id: Optional[str] = None
    hole_count: int
    course_par: Optional[int] = None
    hole_pars: list[int] = Field(default_factory=list)
    next_hole: int = 1
    sections: list[Section] = Field(default_factory=list)
    rows: list[ScorecardRow] = Field(default_factory=list)


class LeaderboardEntry(BaseModel):
    position: str
    player_id: str
    player_name: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    total: int = 0
    round_totals: dict[str, int] = Field(default_factory=dict)


class TeamLeaderboardEntry(BaseModel):
    position: str
    team_id: str
    team_name: str
    team_color: str
    player_count: int = 0
    total: float = 0.0
    round_totals: dict[str, float] = Field(default_factory=dict)


class LeaderboardResponse(BaseModel):
    tournament_id: str
    players: list[LeaderboardEntry] = Field(default_factory=list)
    teams: list[TeamLeaderboardEntry] = Field(default_factory=list)


class TourResult(BaseModel):
    position: int
    points: int


class TourLeaderboardEntry(BaseModel):
    position: str
    player_id: str
    player_name: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    tournament_results: dict[str, TourResult] = Field(default_factory=dict)
    total_points: int = 0


class TourLeaderboardResponse(BaseModel):
    tour_id: str
    players: list[TourLeaderboardEntry] = Field(default_factory=list)


class ScorecardRequest(_CamelModel):
    round: Round
    players: list[Player] = Field(default_factory=list)
    group_id: Optional[str] = None
    granularity: Literal["full", "compact"] = "full"


class FeedRequest(_CamelModel):
    shout_outs: list[ShoutOut] = Field(default_factory=list)
    highlights: list[Highlight] = Field(default_factory=list)


def apply_score(
    entries: list[Optional[HoleScore]],
    hole_number: int,
    score: int,
    par: Optional[int] = None,
) -> list[Optional[HoleScore]]:
    """Return a copy of ``entries`` with ``hole_number`` set to ``score``.

    Missing holes before the target are padded with unscored placeholders so
    the list stays indexed by ``hole - 1``. An existing per-hole par is kept
    when ``par`` is not given.
    """
    updated = list(entries)
    while len(updated) < hole_number:
        updated.append(HoleScore(hole=len(updated) + 1, par=par))
    previous = updated[hole_number - 1]
    if par is None and previous is not None:
        par = previous.par
    notes = previous.notes if previous is not None else None
    updated[hole_number - 1] = HoleScore(hole=hole_number, score=score, par=par, notes=notes)
    return updated

