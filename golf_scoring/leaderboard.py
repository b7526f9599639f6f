from __future__ import annotations

from collections.abc import Sequence

from .models import (
    LeaderboardEntry,
    Player,
    PointsSystem,
    Round,
    TeamLeaderboardEntry,
    Tour,
    TourLeaderboardEntry,
    TourResult,
    Tournament,
)
from .scoring import total_score


def round_total(round_: Round, player_id: str) -> int:
    return total_score(player_id, round_)


def tournament_total(tournament: Tournament, player_id: str) -> int:
    return sum(round_total(round_, player_id) for round_ in tournament.rounds)


def _is_match_play(round_: Round) -> bool:
    return "Match Play" in round_.format and bool(round_.match_results)


def team_round_total(round_: Round, team_id: str, players: Sequence[Player]) -> float:
    """Team total for one round: match points for match play, strokes otherwise."""
    members = [player for player in players if player.team_id == team_id]
    if _is_match_play(round_):
        total = 0.0
        for player in members:
            result = round_.match_results.get(player.id)
            if result is not None and result.points:
                total += result.points
        return total
    return float(sum(round_total(round_, player.id) for player in members))


def positions(totals: Sequence[float]) -> list[str]:
    """Leaderboard positions for totals already sorted best-first, "T" marking ties."""
    labels: list[str] = []
    for index, total in enumerate(totals):
        rank = index + 1
        if index > 0 and total == totals[index - 1]:
            rank = int(labels[-1].lstrip("T"))
        tied = (index > 0 and total == totals[index - 1]) or (
            index + 1 < len(totals) and total == totals[index + 1]
        )
        labels.append(f"T{rank}" if tied else str(rank))
    return labels


def tournament_leaderboard(tournament: Tournament) -> list[LeaderboardEntry]:
    teams = {team.id: team for team in tournament.teams}
    rows = []
    for player in tournament.players:
        team = teams.get(player.team_id) if player.team_id else None
        rows.append(
            {
                "player_id": player.id,
                "player_name": player.name,
                "team_id": player.team_id,
                "team_name": team.name if team is not None else None,
                "total": tournament_total(tournament, player.id),
                "round_totals": {
                    round_.id: round_total(round_, player.id) for round_ in tournament.rounds
                },
            }
        )
    rows.sort(key=lambda row: row["total"])
    labels = positions([row["total"] for row in rows])
    return [LeaderboardEntry(position=label, **row) for label, row in zip(labels, rows)]


def team_leaderboard(tournament: Tournament) -> list[TeamLeaderboardEntry]:
    rows = []
    for team in tournament.teams:
        round_totals = {
            round_.id: team_round_total(round_, team.id, tournament.players)
            for round_ in tournament.rounds
        }
        rows.append(
            {
                "team_id": team.id,
                "team_name": team.name,
                "team_color": team.color,
                "player_count": sum(1 for player in tournament.players if player.team_id == team.id),
                "total": sum(round_totals.values()),
                "round_totals": round_totals,
            }
        )
    # Match points count up, strokes count down.
    match_play = any(_is_match_play(round_) for round_ in tournament.rounds)
    rows.sort(key=lambda row: row["total"], reverse=match_play)
    labels = positions([row["total"] for row in rows])
    return [TeamLeaderboardEntry(position=label, **row) for label, row in zip(labels, rows)]


def finish_points(points_system: PointsSystem | None, finish: int) -> int:
    """Tour points for finishing ``finish``th in one tournament.

    Zero-valued ``win`` and ``participation`` fall back to 100 and 10.
    """
    points_system = points_system or PointsSystem()
    if finish == 1:
        return points_system.win or 100
    if points_system.top_finish.get(finish):
        return points_system.top_finish[finish]
    return points_system.participation or 10


def tour_leaderboard(tour: Tour) -> list[TourLeaderboardEntry]:
    """Season standings: points per tournament finish, most points first.

    Finishes are leaderboard order within each tournament, so tied strokes
    still earn consecutive finishes.
    """
    rows: dict[str, dict] = {}
    for tournament in tour.tournaments:
        for finish, entry in enumerate(tournament_leaderboard(tournament), start=1):
            points = finish_points(tour.points_system, finish)
            row = rows.setdefault(
                entry.player_id,
                {
                    "player_id": entry.player_id,
                    "player_name": entry.player_name,
                    "team_id": entry.team_id,
                    "team_name": entry.team_name,
                    "tournament_results": {},
                    "total_points": 0,
                },
            )
            row["tournament_results"][tournament.id] = TourResult(position=finish, points=points)
            row["total_points"] += points

    ordered = sorted(rows.values(), key=lambda row: row["total_points"], reverse=True)
    labels = positions([row["total_points"] for row in ordered])
    return [TourLeaderboardEntry(position=label, **row) for label, row in zip(labels, ordered)]
