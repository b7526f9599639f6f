from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Union

from .models import HoleScore, Player

PlayerRef = Union[str, Player]
ScoreTable = Mapping[str, Sequence[Optional[HoleScore]]]


def player_ids(players: Iterable[PlayerRef]) -> list[str]:
    return [player.id if isinstance(player, Player) else str(player) for player in players]


def _has_score(scores: ScoreTable, player_id: str, index: int) -> bool:
    entries = scores.get(player_id) or []
    if index >= len(entries):
        return False
    entry = entries[index]
    return entry is not None and entry.score is not None


def is_hole_scored(hole_number: int, players: Iterable[PlayerRef], scores: ScoreTable) -> bool:
    ids = player_ids(players)
    if not ids or hole_number < 1:
        return False
    return all(_has_score(scores, player_id, hole_number - 1) for player_id in ids)


def first_incomplete_hole(
    players: Iterable[PlayerRef],
    scores: ScoreTable,
    hole_count: int,
) -> int:
    ids = player_ids(players)
    if not ids:
        return 1
    for hole in range(1, hole_count + 1):
        if not is_hole_scored(hole, ids, scores):
            return hole
    # Everything is in: start over from the first hole.
    return 1


def holes_completed(
    players: Iterable[PlayerRef],
    scores: ScoreTable,
    hole_count: int,
) -> int:
    """Number of consecutive holes, from the first, scored by every player."""
    ids = player_ids(players)
    if not ids:
        return 0
    completed = 0
    for hole in range(1, hole_count + 1):
        if not is_hole_scored(hole, ids, scores):
            break
        completed = hole
    return completed
