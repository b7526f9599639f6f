from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
import logging
from typing import Optional

from .completion import PlayerRef, first_incomplete_hole, player_ids
from .models import Round

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    current_hole: int
    dialog_hole: int
    expanded_player_ids: frozenset[str] = field(default_factory=frozenset)
    is_dialog_open: bool = False
    is_hole_picker_open: bool = False


class GroupScoringSession:
    """Live scoring position for one player group on one round.

    The session only tracks where the user is; scores themselves stay in the
    externally owned ``Round`` and reach the store through the scoring dialog.
    """

    def __init__(self, round_: Round, players: Iterable[PlayerRef]):
        self._round = round_
        self._player_ids = player_ids(players)
        self._identity = self._identity_key(round_, self._player_ids)
        self._reset_position()

    @staticmethod
    def _identity_key(round_: Round, ids: list[str]) -> tuple[str, int, frozenset[str]]:
        return (round_.id, round_.hole_count, frozenset(ids))

    def _reset_position(self) -> None:
        start = first_incomplete_hole(self._player_ids, self._round.scores, self.hole_count)
        self.current_hole = start
        self.dialog_hole = start
        self.expanded_player_ids: set[str] = set()
        self.is_dialog_open = False
        self.is_hole_picker_open = False

    @property
    def round(self) -> Round:
        return self._round

    @property
    def player_ids(self) -> list[str]:
        return list(self._player_ids)

    @property
    def hole_count(self) -> int:
        return self._round.hole_count

    @property
    def state(self) -> SessionState:
        return SessionState(
            current_hole=self.current_hole,
            dialog_hole=self.dialog_hole,
            expanded_player_ids=frozenset(self.expanded_player_ids),
            is_dialog_open=self.is_dialog_open,
            is_hole_picker_open=self.is_hole_picker_open,
        )

    def sync(self, round_: Round, players: Optional[Iterable[PlayerRef]] = None) -> bool:
        """Take a fresh round snapshot, returning True when position was reset.

        A new round, a changed hole count or a changed roster starts the
        session over at the first incomplete hole. New scores on the same
        round only replace the snapshot.
        """
        ids = player_ids(players) if players is not None else self._player_ids
        identity = self._identity_key(round_, ids)
        self._round = round_
        self._player_ids = ids
        if identity == self._identity:
            return False
        self._identity = identity
        self._reset_position()
        logger.debug(
            "Scoring session reset for round %s at hole %d", round_.id, self.current_hole
        )
        return True

    def toggle_expanded(self, player_id: str) -> None:
        self.expanded_player_ids ^= {player_id}

    def open_dialog(self, hole_number: Optional[int] = None) -> None:
        if hole_number is not None and hole_number >= 1:
            hole = min(hole_number, self.hole_count)
            self.current_hole = hole
            self.dialog_hole = hole
        else:
            self.dialog_hole = self.current_hole
        self.is_dialog_open = True
        self.is_hole_picker_open = False

    def close_dialog(self) -> None:
        self.is_dialog_open = False
        self.current_hole = self.dialog_hole
        self.expanded_player_ids.clear()

    def move_dialog_to(self, hole_number: int) -> None:
        hole = max(1, min(hole_number, self.hole_count))
        self.dialog_hole = hole
        self.current_hole = hole

    def toggle_picker(self) -> None:
        self.is_hole_picker_open = not self.is_hole_picker_open

    def set_picker_open(self, is_open: bool) -> None:
        self.is_hole_picker_open = bool(is_open)
