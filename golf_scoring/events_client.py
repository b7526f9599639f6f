from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional

import httpx

from .config import Settings
from .models import HoleScore, Tour, Tournament


class EventsAPIError(RuntimeError):
    pass


class EventsAPIClient:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.events_api_base_url.rstrip("/"),
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "EventsAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = await self._client.request(method, f"/{path.lstrip('/')}", json=json)
        except httpx.HTTPError as exc:
            raise EventsAPIError(f"Events API request failed for {path}: {exc}") from exc
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise EventsAPIError(
                f"Events API request failed ({exc.response.status_code}) for {path}"
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise EventsAPIError(f"Events API returned non-JSON payload for {path}") from exc

    async def get_tournament(self, tournament_id: str) -> Tournament:
        payload = await self._request_json("GET", f"tournaments/{tournament_id}")
        return Tournament.model_validate(payload)

    async def get_tour(self, tour_id: str) -> Tour:
        payload = await self._request_json("GET", f"tours/{tour_id}")
        return Tour.model_validate(payload)

    async def put_player_scores(
        self,
        tournament_id: str,
        round_id: str,
        player_id: str,
        scores: Sequence[Optional[HoleScore]],
    ) -> Tournament:
        body = {
            "scores": [
                entry.model_dump(by_alias=True, exclude_none=True) if entry is not None else None
                for entry in scores
            ]
        }
        payload = await self._request_json(
            "PUT",
            f"tournaments/{tournament_id}/rounds/{round_id}/scores/{player_id}",
            json=body,
        )
        return Tournament.model_validate(payload)
