from golf_scoring.leaderboard import (
    finish_points,
    positions,
    round_total,
    team_leaderboard,
    team_round_total,
    tournament_leaderboard,
    tour_leaderboard,
    tournament_total,
)
from golf_scoring.models import (
    HoleScore,
    MatchResult,
    Player,
    PointsSystem,
    Round,
    Team,
    Tour,
    Tournament,
)


def _card(*scores: int) -> list[HoleScore]:
    return [HoleScore(hole=idx, score=score) for idx, score in enumerate(scores, start=1)]


def _tournament() -> Tournament:
    return Tournament(
        id="t1",
        name="Club Champs",
        players=[
            Player(id="p1", name="Ann", team_id="red"),
            Player(id="p2", name="Bo", team_id="blue"),
            Player(id="p3", name="Cy", team_id="red"),
            Player(id="p4", name="Di"),
        ],
        teams=[
            Team(id="red", name="Red", color="#d32f2f"),
            Team(id="blue", name="Blue", color="#0288d1"),
        ],
        rounds=[
            Round(id="r1", scores={"p1": _card(4, 4), "p2": _card(5, 5), "p3": _card(5, 7)}),
            Round(id="r2", scores={"p1": _card(4), "p2": _card(3), "p4": _card(6)}),
        ],
    )


def test_round_and_tournament_totals() -> None:
    tournament = _tournament()
    assert round_total(tournament.rounds[0], "p1") == 8
    assert round_total(tournament.rounds[1], "p3") == 0
    assert tournament_total(tournament, "p1") == 12
    assert tournament_total(tournament, "p2") == 13


def test_tournament_leaderboard_sorted_with_tied_positions() -> None:
    board = tournament_leaderboard(_tournament())
    assert [entry.player_id for entry in board] == ["p4", "p1", "p3", "p2"]
    assert [entry.position for entry in board] == ["1", "T2", "T2", "4"]
    assert board[1].team_name == "Red"
    assert board[1].round_totals == {"r1": 8, "r2": 4}
    assert board[2].round_totals == {"r1": 12, "r2": 0}
    assert board[0].team_name is None


def test_team_round_total_stroke_play_sums_members() -> None:
    tournament = _tournament()
    assert team_round_total(tournament.rounds[0], "red", tournament.players) == 20.0


def test_team_round_total_match_play_sums_points() -> None:
    tournament = _tournament()
    match_round = Round(
        id="m1",
        format="Singles Match Play",
        scores={"p1": _card(4, 4)},
        match_results={
            "p1": MatchResult(opponent_id="p2", result="win", points=1.0),
            "p3": MatchResult(opponent_id="p4", result="halved", points=0.5),
            "p2": MatchResult(opponent_id="p1", result="loss", points=0.0),
        },
    )
    assert team_round_total(match_round, "red", tournament.players) == 1.5
    assert team_round_total(match_round, "blue", tournament.players) == 0.0


def test_team_leaderboard_orders_strokes_ascending() -> None:
    board = team_leaderboard(_tournament())
    assert [entry.team_id for entry in board] == ["blue", "red"]
    assert board[0].total == 13.0
    assert board[1].player_count == 2
    assert board[1].round_totals == {"r1": 20.0, "r2": 4.0}


def test_team_leaderboard_orders_match_points_descending() -> None:
    tournament = _tournament()
    tournament.rounds = [
        Round(
            id="m1",
            format="Match Play",
            match_results={
                "p2": MatchResult(opponent_id="p1", result="win", points=1.0),
                "p1": MatchResult(opponent_id="p2", result="loss", points=0.0),
            },
        )
    ]
    board = team_leaderboard(tournament)
    assert [entry.team_id for entry in board] == ["blue", "red"]
    assert board[0].total == 1.0


def test_positions_marks_ties() -> None:
    assert positions([]) == []
    assert positions([70]) == ["1"]
    assert positions([70, 70, 70]) == ["T1", "T1", "T1"]
    assert positions([68, 70, 72, 72]) == ["1", "2", "T3", "T3"]


def test_match_play_round_without_results_ranks_by_strokes() -> None:
    tournament = Tournament(
        id="t1",
        players=[
            Player(id="p1", name="Ann", team_id="low"),
            Player(id="p2", name="Bo", team_id="high"),
        ],
        teams=[Team(id="low", name="Low"), Team(id="high", name="High")],
        rounds=[
            Round(id="m1", format="Singles Match Play", scores={"p1": _card(3), "p2": _card(7)}),
        ],
    )
    board = team_leaderboard(tournament)
    assert [(entry.position, entry.team_name, entry.total) for entry in board] == [
        ("1", "Low", 3.0),
        ("2", "High", 7.0),
    ]


def _event(event_id: str, cards: dict[str, int]) -> Tournament:
    return Tournament(
        id=event_id,
        players=[Player(id=player_id, name=player_id.upper()) for player_id in cards],
        rounds=[Round(id=f"{event_id}-r1", scores={pid: _card(s) for pid, s in cards.items()})],
    )


def test_finish_points_defaults_and_zero_fallbacks() -> None:
    assert finish_points(None, 1) == 100
    assert finish_points(None, 2) == 10
    custom = PointsSystem(win=0, top_finish={2: 30}, participation=0)
    assert finish_points(custom, 1) == 100
    assert finish_points(custom, 2) == 30
    assert finish_points(custom, 3) == 10


def test_tour_leaderboard_sums_points_per_finish() -> None:
    tour = Tour(
        id="tour1",
        tournaments=[
            _event("e1", {"a": 70, "b": 72, "c": 75}),
            _event("e2", {"a": 74, "b": 71}),
        ],
        points_system=PointsSystem(win=50, top_finish={2: 30}, participation=5),
    )
    standings = tour_leaderboard(tour)
    assert [(row.position, row.player_id, row.total_points) for row in standings] == [
        ("T1", "a", 80),
        ("T1", "b", 80),
        ("3", "c", 5),
    ]
    assert standings[0].player_name == "A"
    assert standings[0].tournament_results["e1"].position == 1
    assert standings[0].tournament_results["e2"].points == 30
    assert list(standings[2].tournament_results) == ["e1"]


def test_tour_points_system_accepts_client_payload() -> None:
    tour = Tour.model_validate(
        {"id": "tour1", "pointsSystem": {"win": 25, "topFinish": {"2": 15}}, "tournaments": []}
    )
    assert tour.points_system.top_finish == {2: 15}
    assert tour.points_system.participation == 10
    assert tour_leaderboard(tour) == []
