from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any, Optional, Protocol

from .config import Settings, get_settings
from .scoring import hole_par, player_relative_to_par, score_label
from .session import GroupScoringSession

logger = logging.getLogger(__name__)


class ScoreCommitter(Protocol):
    async def save_score(
        self,
        round_id: str,
        player_id: str,
        hole_number: int,
        score: int,
    ) -> Any: ...


@dataclass(frozen=True)
class CommitResult:
    player_id: str
    hole_number: int
    score: int
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CommitBatch:
    """Commits issued by one save-and-advance, one task per player."""

    def __init__(self, round_id: str, hole_number: int, tasks: list[asyncio.Task]):
        self.round_id = round_id
        self.hole_number = hole_number
        self._tasks = tasks

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def done(self) -> bool:
        return all(task.done() for task in self._tasks)

    async def wait(self) -> list[CommitResult]:
        if not self._tasks:
            return []
        return list(await asyncio.gather(*self._tasks))

    async def failures(self) -> list[CommitResult]:
        return [result for result in await self.wait() if not result.ok]


class ScoringDialog:
    """Hole-by-hole score entry for every player in a scoring session."""

    def __init__(
        self,
        session: GroupScoringSession,
        committer: ScoreCommitter,
        settings: Settings | None = None,
    ):
        self._session = session
        self._committer = committer
        self._settings = settings or get_settings()
        self._proposed: dict[str, int] = {}
        self._pending: set[asyncio.Task] = set()

    @property
    def session(self) -> GroupScoringSession:
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session.is_dialog_open

    @property
    def hole(self) -> int:
        return self._session.dialog_hole

    @property
    def hole_par(self) -> int:
        return hole_par(
            self._session.round,
            self._session.dialog_hole,
            default=self._settings.default_hole_par,
        )

    @property
    def proposed_scores(self) -> dict[str, int]:
        return dict(self._proposed)

    def score_label(self, player_id: str) -> str:
        score = self._proposed.get(player_id)
        return "" if score is None else score_label(score, self.hole_par)

    def relative_to_par(self, player_id: str) -> str:
        return player_relative_to_par(player_id, self._session.round, fallback_par=self.hole_par)

    def open(self, hole_number: Optional[int] = None) -> None:
        self._session.open_dialog(hole_number)
        self._seed()

    def close(self) -> None:
        self._session.close_dialog()
        self._proposed.clear()

    def _seed(self) -> None:
        index = self._session.dialog_hole - 1
        par = self.hole_par
        round_ = self._session.round
        proposed: dict[str, int] = {}
        for player_id in self._session.player_ids:
            entries = round_.player_scores(player_id)
            entry = entries[index] if index < len(entries) else None
            if entry is not None and entry.score is not None:
                proposed[player_id] = entry.score
            else:
                proposed[player_id] = par
        self._proposed = proposed

    def increment(self, player_id: str) -> None:
        if player_id not in self._proposed:
            logger.debug("Ignoring increment for player %s outside the group", player_id)
            return
        self._proposed[player_id] = min(
            self._settings.max_hole_score, self._proposed[player_id] + 1
        )

    def decrement(self, player_id: str) -> None:
        if player_id not in self._proposed:
            logger.debug("Ignoring decrement for player %s outside the group", player_id)
            return
        self._proposed[player_id] = max(
            self._settings.min_hole_score, self._proposed[player_id] - 1
        )

    async def _commit(
        self,
        round_id: str,
        player_id: str,
        hole_number: int,
        score: int,
    ) -> CommitResult:
        try:
            await self._committer.save_score(round_id, player_id, hole_number, score)
        except Exception as exc:
            logger.warning(
                "Saving hole %d for player %s on round %s failed: %s",
                hole_number,
                player_id,
                round_id,
                exc,
            )
            return CommitResult(player_id, hole_number, score, error=exc)
        return CommitResult(player_id, hole_number, score)

    def save_and_advance(self, total_holes: Optional[int] = None) -> CommitBatch:
        """Commit every proposed score for the dialog hole, then move on.

        Commits are scheduled on the running event loop and are not awaited
        here; navigation never waits for them and is never rolled back. The
        returned batch lets the host collect failures for display. On the
        last hole the dialog closes instead of advancing.
        """
        round_id = self._session.round.id
        hole_number = self._session.dialog_hole
        if not self._session.is_dialog_open:
            return CommitBatch(round_id, hole_number, [])

        loop = asyncio.get_running_loop()
        tasks = []
        for player_id, score in self._proposed.items():
            task = loop.create_task(self._commit(round_id, player_id, hole_number, score))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            tasks.append(task)

        last_hole = self._session.hole_count
        if total_holes is not None:
            last_hole = min(total_holes, last_hole)
        if hole_number < last_hole:
            self._session.move_dialog_to(hole_number + 1)
            self._seed()
        else:
            self.close()
        return CommitBatch(round_id, hole_number, tasks)
