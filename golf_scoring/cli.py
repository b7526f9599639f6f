from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from .config import configure_logging, get_settings
from .events_client import EventsAPIClient, EventsAPIError
from .models import ShoutOutItem, Tour, Tournament
from .scoring import Granularity
from .service import ScorecardService


async def _fetch_tournament(tournament_id: str) -> Tournament:
    async with EventsAPIClient(get_settings()) as client:
        return await client.get_tournament(tournament_id)


def _load_tournament(args: argparse.Namespace) -> Tournament:
    if args.remote:
        return asyncio.run(_fetch_tournament(args.source))
    return Tournament.model_validate_json(Path(args.source).read_text(encoding="utf-8"))


async def _fetch_tour(tour_id: str) -> Tour:
    async with EventsAPIClient(get_settings()) as client:
        return await client.get_tour(tour_id)


def _load_tour(args: argparse.Namespace) -> Tour:
    if args.remote:
        return asyncio.run(_fetch_tour(args.source))
    return Tour.model_validate_json(Path(args.source).read_text(encoding="utf-8"))


def _run_scorecard_command(args: argparse.Namespace, service: ScorecardService) -> None:
    tournament = _load_tournament(args)
    granularity = Granularity.COMPACT if args.compact else Granularity.FULL
    card = service.build_tournament_scorecard(
        tournament,
        round_id=args.round,
        group_id=args.group,
        granularity=granularity,
    )

    print(
        f"\nRound: {card.round_name or card.round_id} "
        f"| holes={card.hole_count} | next hole={card.next_hole}"
    )
    for section in card.sections:
        print(f"{section.label:<12} " + " ".join(f"{hole:>3}" for hole in section.holes))
    print("-" * 84)
    for row in card.rows:
        print(
            f"{row.player_name[:24]:<24} "
            + " ".join(f"{s.label}={s.total}" for s in row.sections)
            + f" | total={row.total} {row.score_to_par_display:>4} thru {row.thru}"
        )


def _run_leaderboard_command(args: argparse.Namespace, service: ScorecardService) -> None:
    board = service.leaderboard(_load_tournament(args))
    if not board.players:
        print("No players in tournament.")
        return

    print(f"{'Pos':<5} {'Player':<26} {'Team':<16} {'Total':>6}")
    print("-" * 56)
    for entry in board.players:
        print(
            f"{entry.position:<5} "
            f"{entry.player_name[:26]:<26} "
            f"{(entry.team_name or '-')[:16]:<16} "
            f"{entry.total:>6}"
        )
    if board.teams:
        print(f"\n{'Pos':<5} {'Team':<26} {'Players':>7} {'Total':>8}")
        print("-" * 50)
        for team in board.teams:
            print(
                f"{team.position:<5} "
                f"{team.team_name[:26]:<26} "
                f"{team.player_count:>7} "
                f"{team.total:>8g}"
            )


def _run_tour_command(args: argparse.Namespace, service: ScorecardService) -> None:
    tour = _load_tour(args)
    standings = service.tour_leaderboard(tour)
    if not standings.players:
        print("No tournament results in tour.")
        return

    print(f"\nTour: {tour.name or tour.id} | events={len(tour.tournaments)}")
    print(f"{'Pos':<5} {'Player':<26} {'Events':>6} {'Points':>7}")
    print("-" * 48)
    for entry in standings.players:
        print(
            f"{entry.position:<5} "
            f"{entry.player_name[:26]:<26} "
            f"{len(entry.tournament_results):>6} "
            f"{entry.total_points:>7}"
        )


def _run_feed_command(args: argparse.Namespace, service: ScorecardService) -> None:
    items = service.tournament_feed_items(_load_tournament(args), limit=args.limit)
    if not items:
        print("No shout-outs or highlights yet.")
        return

    for item in items:
        stamp = item.timestamp.strftime("%Y-%m-%d %H:%M")
        if isinstance(item, ShoutOutItem):
            detail = f"{item.data.type} on hole {item.data.hole_number}"
            if item.data.message:
                detail += f" - {item.data.message}"
        else:
            detail = f"{item.data.media_type}: {item.data.title}"
        print(f"{stamp}  {item.data.player_id:<12} {detail}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Golf round scoring and highlight feed CLI.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_source(command_parser: argparse.ArgumentParser) -> None:
        command_parser.add_argument("source", help="Tournament or tour JSON file, or id with --remote")
        command_parser.add_argument("--remote", action="store_true")

    card_parser = sub.add_parser("scorecard", help="Print a round scorecard")
    add_source(card_parser)
    card_parser.add_argument("--round", required=True)
    card_parser.add_argument("--group", default=None)
    card_parser.add_argument("--compact", action="store_true")

    board_parser = sub.add_parser("leaderboard", help="Print player and team leaderboards")
    add_source(board_parser)

    tour_parser = sub.add_parser("tour", help="Print tour standings by points")
    add_source(tour_parser)

    feed_parser = sub.add_parser("feed", help="Print the shout-out and highlight feed")
    add_source(feed_parser)
    feed_parser.add_argument("--limit", type=int, default=None)

    sub.add_parser("serve", help="Run the HTTP API")

    args = parser.parse_args()
    settings = get_settings()
    configure_logging(settings)
    service = ScorecardService(settings)
    try:
        if args.command == "scorecard":
            _run_scorecard_command(args, service)
            return
        if args.command == "leaderboard":
            _run_leaderboard_command(args, service)
            return
        if args.command == "tour":
            _run_tour_command(args, service)
            return
        if args.command == "feed":
            _run_feed_command(args, service)
            return
        if args.command == "serve":
            from .api import run

            run()
            return
        parser.error(f"Unsupported command: {args.command}")
    except EventsAPIError as exc:
        print(f"Events API error: {exc}")
    except ValueError as exc:
        print(f"Error: {exc}")


if __name__ == "__main__":
    main()
