from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from .completion import first_incomplete_hole, holes_completed
from .config import Settings, get_settings
from .feed import merge_feed, tournament_feed
from .leaderboard import team_leaderboard, tour_leaderboard, tournament_leaderboard
from .models import (
    FeedItem,
    Highlight,
    LeaderboardResponse,
    Player,
    Round,
    ScorecardCell,
    ScorecardResponse,
    ScorecardRow,
    SectionTotal,
    ShoutOut,
    Tour,
    TourLeaderboardResponse,
    Tournament,
)
from .scoring import (
    Granularity,
    color_for,
    format_relative_to_par,
    highlight_class,
    hole_par,
    score_label,
    score_to_par,
    section_total,
    sections_for,
    total_score,
)


class ScorecardService:
    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    def _group_players(
        self,
        round_: Round,
        players: Sequence[Player],
        group_id: Optional[str],
    ) -> list[Player]:
        if group_id is None:
            return list(players)
        group = round_.group(group_id)
        if group is None:
            raise ValueError(f"Group {group_id} is not part of round {round_.id}.")
        by_id = {player.id: player for player in players}
        # Members missing from the roster still get a row, named by id.
        return [
            by_id.get(player_id) or Player(id=player_id, name=player_id)
            for player_id in group.player_ids
        ]

    def build_scorecard(
        self,
        round_: Round,
        players: Sequence[Player],
        group_id: Optional[str] = None,
        granularity: Granularity | str = Granularity.FULL,
    ) -> ScorecardResponse:
        members = self._group_players(round_, players, group_id)
        hole_count = round_.hole_count
        sections = sections_for(hole_count, granularity)
        pars = [
            hole_par(round_, hole, default=self._settings.default_hole_par)
            for hole in range(1, hole_count + 1)
        ]

        rows: list[ScorecardRow] = []
        for player in members:
            entries = round_.player_scores(player.id)
            relative = score_to_par(player.id, round_, round_.course_par, hole_count)
            cells = []
            for hole in range(1, hole_count + 1):
                entry = entries[hole - 1] if hole - 1 < len(entries) else None
                score = entry.score if entry is not None else None
                par = pars[hole - 1]
                score_class = highlight_class(score, par)
                cells.append(
                    ScorecardCell(
                        hole=hole,
                        par=par,
                        score=score,
                        score_class=score_class.value if score_class is not None else None,
                        label=score_label(score, par) if score is not None else "",
                    )
                )
            rows.append(
                ScorecardRow(
                    player_id=player.id,
                    player_name=player.name,
                    team_id=player.team_id,
                    total=total_score(player.id, round_),
                    score_to_par=relative,
                    score_to_par_display=format_relative_to_par(relative),
                    band=color_for(relative).value,
                    thru=holes_completed([player.id], round_.scores, hole_count),
                    sections=[
                        SectionTotal(
                            label=section.label,
                            holes=section.holes,
                            total=section_total(player.id, round_, section.holes),
                        )
                        for section in sections
                    ],
                    cells=cells,
                )
            )

        return ScorecardResponse(
            round_id=round_.id,
            round_name=round_.name,
            group_id=group_id,
            hole_count=hole_count,
            course_par=round_.course_par,
            hole_pars=pars,
            next_hole=first_incomplete_hole(members, round_.scores, hole_count),
            sections=sections,
            rows=rows,
        )

    def build_tournament_scorecard(
        self,
        tournament: Tournament,
        round_id: str,
        group_id: Optional[str] = None,
        granularity: Granularity | str = Granularity.FULL,
    ) -> ScorecardResponse:
        round_ = tournament.round(round_id)
        if round_ is None:
            raise ValueError(f"Round {round_id} is not part of tournament {tournament.id}.")
        return self.build_scorecard(round_, tournament.players, group_id, granularity)

    def leaderboard(self, tournament: Tournament) -> LeaderboardResponse:
        return LeaderboardResponse(
            tournament_id=tournament.id,
            players=tournament_leaderboard(tournament),
            teams=team_leaderboard(tournament),
        )

    def feed(
        self,
        shout_outs: Sequence[ShoutOut],
        highlights: Sequence[Highlight],
        limit: Optional[int] = None,
    ) -> list[FeedItem]:
        items = merge_feed(shout_outs, highlights)
        return items if limit is None else items[:limit]

    def tournament_feed_items(
        self,
        tournament: Tournament,
        limit: Optional[int] = None,
    ) -> list[FeedItem]:
        items = tournament_feed(tournament)
        return items if limit is None else items[:limit]

    def tour_leaderboard(self, tour: Tour) -> TourLeaderboardResponse:
        return TourLeaderboardResponse(tour_id=tour.id, players=tour_leaderboard(tour))
