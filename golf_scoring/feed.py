from __future__ import annotations

from collections.abc import Iterable

from .models import FeedItem, Highlight, HighlightItem, ShoutOut, ShoutOutItem, Tournament


def merge_feed(
    shout_outs: Iterable[ShoutOut],
    highlights: Iterable[Highlight],
) -> list[FeedItem]:
    """Newest-first feed of shout-outs and highlights.

    The sort is stable, so items sharing a timestamp keep their input order
    with shout-outs ahead of highlights.
    """
    items: list[FeedItem] = [
        ShoutOutItem(id=item.id, timestamp=item.timestamp, data=item) for item in shout_outs
    ]
    items.extend(
        HighlightItem(id=item.id, timestamp=item.timestamp, data=item) for item in highlights
    )
    return sorted(items, key=lambda item: item.timestamp, reverse=True)


def tournament_feed(tournament: Tournament) -> list[FeedItem]:
    return merge_feed(tournament.shout_outs, tournament.highlights)
