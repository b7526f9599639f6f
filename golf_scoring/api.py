from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException, Query
import uvicorn

from .config import configure_logging, get_settings
from .models import (
    FeedItem,
    FeedRequest,
    LeaderboardResponse,
    ScorecardRequest,
    ScorecardResponse,
    Tour,
    TourLeaderboardResponse,
    Tournament,
)
from .service import ScorecardService

_settings = get_settings()
_service = ScorecardService(_settings)

app = FastAPI(
    title="Golf Scoring Engine",
    version="0.1.0",
    description="Scorecards, leaderboards and highlight feeds computed from round snapshots.",
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/scorecard", response_model=ScorecardResponse)
async def scorecard(request: ScorecardRequest) -> ScorecardResponse:
    try:
        return _service.build_scorecard(
            request.round,
            request.players,
            group_id=request.group_id,
            granularity=request.granularity,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(tournament: Tournament) -> LeaderboardResponse:
    return _service.leaderboard(tournament)


@app.post("/tour-leaderboard", response_model=TourLeaderboardResponse)
async def tour_leaderboard(tour: Tour) -> TourLeaderboardResponse:
    return _service.tour_leaderboard(tour)


@app.post("/feed", response_model=list[FeedItem])
async def feed(
    request: FeedRequest,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
) -> list[FeedItem]:
    return _service.feed(request.shout_outs, request.highlights, limit=limit)


def run() -> None:
    configure_logging(_settings)
    uvicorn.run("golf_scoring.api:app", host="127.0.0.1", port=8000, reload=False)


if __name__ == "__main__":
    run()
