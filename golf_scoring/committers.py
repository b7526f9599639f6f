"""Score commit collaborators for the scoring dialog.

Each context that edits scores (a standalone round, a tournament round on the
events API) supplies one of these when building a ``ScoringDialog``.
"""
from __future__ import annotations

from collections.abc import Iterable

from .events_client import EventsAPIClient
from .models import Round, Tournament, apply_score


class InMemoryScoreStore:
    def __init__(self, rounds: Iterable[Round] = ()):
        self._rounds = {round_.id: round_ for round_ in rounds}

    def add_round(self, round_: Round) -> None:
        self._rounds[round_.id] = round_

    def get_round(self, round_id: str) -> Round:
        try:
            return self._rounds[round_id]
        except KeyError:
            raise ValueError(f"Unknown round: {round_id}") from None

    async def save_score(
        self,
        round_id: str,
        player_id: str,
        hole_number: int,
        score: int,
    ) -> Round:
        round_ = self.get_round(round_id)
        round_.scores[player_id] = apply_score(
            round_.player_scores(player_id), hole_number, score
        )
        return round_


class TournamentScoreCommitter:
    """Writes a player's full score list back to the events API.

    The local tournament copy is updated before the request goes out so the
    next hole sees the new score even while the request is in flight.
    """

    def __init__(self, client: EventsAPIClient, tournament: Tournament):
        self._client = client
        self._tournament = tournament

    @property
    def tournament(self) -> Tournament:
        return self._tournament

    async def save_score(
        self,
        round_id: str,
        player_id: str,
        hole_number: int,
        score: int,
    ) -> Tournament:
        round_ = self._tournament.round(round_id)
        if round_ is None:
            raise ValueError(f"Round {round_id} is not part of tournament {self._tournament.id}")
        updated = apply_score(round_.player_scores(player_id), hole_number, score)
        round_.scores[player_id] = updated
        return await self._client.put_player_scores(
            self._tournament.id, round_id, player_id, updated
        )
