from golf_scoring.models import CourseDetails, HoleScore, Player, Round
from golf_scoring.session import GroupScoringSession


def _players() -> list[Player]:
    return [Player(id="p1", name="Ann"), Player(id="p2", name="Bo")]


def _round(scored_holes: int = 0, holes: int = 9, round_id: str = "r1") -> Round:
    scores = {
        player.id: [HoleScore(hole=hole, score=4) for hole in range(1, scored_holes + 1)]
        for player in _players()
    }
    return Round(id=round_id, course_details=CourseDetails(holes=holes, par=36), scores=scores)


def test_session_starts_at_first_incomplete_hole() -> None:
    session = GroupScoringSession(_round(scored_holes=1, holes=3), _players())
    assert session.current_hole == 2
    assert session.dialog_hole == 2
    assert session.is_dialog_open is False
    assert session.is_hole_picker_open is False
    assert session.expanded_player_ids == set()


def test_toggle_expanded_is_symmetric() -> None:
    session = GroupScoringSession(_round(), _players())
    session.toggle_expanded("p1")
    session.toggle_expanded("p2")
    assert session.expanded_player_ids == {"p1", "p2"}
    session.toggle_expanded("p1")
    assert session.expanded_player_ids == {"p2"}


def test_open_dialog_with_hole_moves_both_positions() -> None:
    session = GroupScoringSession(_round(), _players())
    session.set_picker_open(True)
    session.open_dialog(5)
    assert session.current_hole == 5
    assert session.dialog_hole == 5
    assert session.is_dialog_open is True
    assert session.is_hole_picker_open is False


def test_open_dialog_without_hole_uses_current_hole() -> None:
    session = GroupScoringSession(_round(scored_holes=2), _players())
    session.dialog_hole = 7
    session.open_dialog()
    assert session.dialog_hole == 3


def test_close_dialog_syncs_current_hole_and_collapses_players() -> None:
    session = GroupScoringSession(_round(), _players())
    session.current_hole = 2
    session.open_dialog(5)
    session.current_hole = 8
    session.toggle_expanded("p1")
    session.close_dialog()
    assert session.is_dialog_open is False
    assert session.current_hole == 5
    assert session.expanded_player_ids == set()


def test_picker_is_independent_of_dialog() -> None:
    session = GroupScoringSession(_round(), _players())
    session.toggle_picker()
    assert session.is_hole_picker_open is True
    assert session.is_dialog_open is False
    session.toggle_picker()
    assert session.is_hole_picker_open is False
    session.set_picker_open(True)
    session.close_dialog()
    assert session.is_hole_picker_open is True


def test_sync_with_new_scores_keeps_position() -> None:
    session = GroupScoringSession(_round(scored_holes=0), _players())
    session.open_dialog(4)
    # Same round saved more scores: the user must not be yanked back.
    reset = session.sync(_round(scored_holes=2))
    assert reset is False
    assert session.dialog_hole == 4
    assert session.is_dialog_open is True
    assert session.round.scores["p1"][1].score == 4


def test_sync_with_new_round_rederives_position() -> None:
    session = GroupScoringSession(_round(scored_holes=0), _players())
    session.open_dialog(6)
    reset = session.sync(_round(scored_holes=3, round_id="r2"))
    assert reset is True
    assert session.current_hole == 4
    assert session.dialog_hole == 4
    assert session.is_dialog_open is False


def test_sync_with_new_roster_rederives_position() -> None:
    round_ = _round(scored_holes=2)
    session = GroupScoringSession(round_, ["p1"])
    session.open_dialog(7)
    assert session.sync(round_, ["p1", "p3"]) is True
    # p3 has no scores, so hole 1 is the first gap.
    assert session.current_hole == 1
    assert session.player_ids == ["p1", "p3"]


def test_state_snapshot_is_immutable_copy() -> None:
    session = GroupScoringSession(_round(), _players())
    session.toggle_expanded("p2")
    state = session.state
    session.toggle_expanded("p2")
    assert state.expanded_player_ids == frozenset({"p2"})
    assert session.state.expanded_player_ids == frozenset()
