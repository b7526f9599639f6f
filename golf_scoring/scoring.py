from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
import logging
from typing import Optional

from .models import DEFAULT_HOLE_PAR, DEFAULT_HOLES, HoleScore, Round, Section

logger = logging.getLogger(__name__)

_ORDINALS = (
    "First",
    "Second",
    "Third",
    "Fourth",
    "Fifth",
    "Sixth",
    "Seventh",
    "Eighth",
)


class ScoreClass(str, Enum):
    EAGLE = "eagle"
    BIRDIE = "birdie"
    PAR = "par"
    BOGEY = "bogey"
    DOUBLE_BOGEY = "double-bogey"


class ParBand(str, Enum):
    UNDER = "good"
    EVEN = "neutral"
    OVER = "caution"


class Granularity(str, Enum):
    FULL = "full"
    COMPACT = "compact"


_CHUNK_SIZES = {Granularity.FULL: 9, Granularity.COMPACT: 6}


def _entry_at(entries: Sequence[Optional[HoleScore]], index: int) -> Optional[HoleScore]:
    if index < 0 or index >= len(entries):
        return None
    return entries[index]


def _score_at(entries: Sequence[Optional[HoleScore]], index: int) -> Optional[int]:
    entry = _entry_at(entries, index)
    return entry.score if entry is not None else None


def total_score(player_id: str, round_: Round) -> int:
    return sum(
        entry.score
        for entry in round_.player_scores(player_id)
        if entry is not None and entry.score is not None
    )


def section_total(player_id: str, round_: Round, holes: Iterable[int]) -> int:
    if player_id not in round_.scores:
        return 0
    entries = round_.player_scores(player_id)
    total = 0
    for hole in holes:
        score = _score_at(entries, hole - 1)
        if score is not None:
            total += score
    return total


def _fallback_par(course_par: int, course_holes: Optional[int]) -> int:
    holes = course_holes if course_holes and course_holes > 0 else DEFAULT_HOLES
    return course_par // holes


def score_to_par(
    player_id: str,
    round_: Round,
    course_par: Optional[int] = None,
    course_holes: Optional[int] = None,
) -> Optional[int]:
    """Strokes relative to par over the holes the player has scored.

    ``None`` means there is nothing to compare yet (no course par or no
    scores), which keeps it distinct from an even-par ``0``.
    """
    if not course_par:
        return None
    entries = round_.player_scores(player_id)
    hole_pars = round_.hole_pars or []
    fallback = _fallback_par(course_par, course_holes)

    strokes = 0
    par_total = 0
    scored = 0
    for index, entry in enumerate(entries):
        if entry is None or entry.score is None:
            continue
        if index < len(hole_pars):
            par = hole_pars[index]
        elif entry.par is not None:
            par = entry.par
        else:
            par = fallback
        strokes += entry.score
        par_total += par
        scored += 1

    if scored == 0:
        return None
    return strokes - par_total


def format_relative_to_par(value: Optional[int]) -> str:
    if not value:
        return "E"
    return f"+{value}" if value > 0 else str(value)


def classify(score: Optional[int], par: Optional[int]) -> Optional[ScoreClass]:
    if score is None or par is None:
        return None
    diff = score - par
    if diff <= -2:
        return ScoreClass.EAGLE
    if diff == -1:
        return ScoreClass.BIRDIE
    if diff == 0:
        return ScoreClass.PAR
    if diff == 1:
        return ScoreClass.BOGEY
    return ScoreClass.DOUBLE_BOGEY


def highlight_class(score: Optional[int], par: Optional[int]) -> Optional[ScoreClass]:
    score_class = classify(score, par)
    return None if score_class is ScoreClass.PAR else score_class


def score_label(score: int, par: Optional[int]) -> str:
    if not par:
        return ""
    diff = score - par
    if diff < -1:
        return "Eagle"
    if diff == -1:
        return "Birdie"
    if diff == 0:
        return "Par"
    if diff == 1:
        return "Bogey"
    if diff == 2:
        return "Double Bogey"
    return f"+{diff}"


def color_for(value: Optional[int]) -> ParBand:
    if not value:
        return ParBand.EVEN
    return ParBand.UNDER if value < 0 else ParBand.OVER


def holes_list(hole_count: int = DEFAULT_HOLES) -> list[int]:
    return list(range(1, max(hole_count, 0) + 1))


def _section_label(
    index: int,
    start: int,
    end: int,
    hole_count: int,
    granularity: Granularity,
) -> str:
    if granularity is Granularity.FULL and end - start + 1 == 9:
        if hole_count == 18:
            return "Front 9" if index == 0 else "Back 9"
        if index < len(_ORDINALS):
            return f"{_ORDINALS[index]} 9"
    return f"Holes {start}-{end}"


def sections_for(
    hole_count: int,
    granularity: Granularity | str = Granularity.FULL,
) -> list[Section]:
    """Split holes ``1..hole_count`` into labelled scorecard sections.

    Chunks are ``9`` holes wide (``6`` when compact). Any remainder joins the
    last chunk, and a course shorter than two chunks is one ``Holes`` section.
    """
    if hole_count <= 0:
        return []
    try:
        granularity = Granularity(granularity)
    except ValueError:
        logger.debug("Unknown granularity %r, using full sections", granularity)
        granularity = Granularity.FULL
    size = _CHUNK_SIZES[granularity]
    chunks = hole_count // size
    if chunks <= 1:
        return [Section(label="Holes", holes=holes_list(hole_count))]

    sections: list[Section] = []
    for index in range(chunks):
        start = index * size + 1
        end = hole_count if index == chunks - 1 else start + size - 1
        sections.append(
            Section(
                label=_section_label(index, start, end, hole_count, granularity),
                holes=list(range(start, end + 1)),
            )
        )
    return sections


def hole_par(round_: Round, hole_number: int, default: int = DEFAULT_HOLE_PAR) -> int:
    """Par to show while entering scores for ``hole_number``."""
    index = hole_number - 1
    hole_pars = round_.hole_pars or []
    if 0 <= index < len(hole_pars):
        return hole_pars[index]

    for entries in round_.scores.values():
        entry = _entry_at(entries or [], index)
        if entry is not None and entry.par:
            return entry.par

    course_par = round_.course_par
    if course_par:
        per_hole = course_par // round_.hole_count
        if per_hole > 0:
            return per_hole
    return default


def player_relative_to_par(
    player_id: str,
    round_: Round,
    fallback_par: Optional[int] = None,
) -> str:
    hole_pars = round_.hole_pars or []
    strokes = 0
    par_total = 0
    scored = 0
    for index, entry in enumerate(round_.player_scores(player_id)):
        if entry is None or entry.score is None:
            continue
        if index < len(hole_pars):
            par = hole_pars[index]
        else:
            par = entry.par or fallback_par or hole_par(round_, index + 1)
        strokes += entry.score
        par_total += par
        scored += 1
    if scored == 0:
        return "E"
    return format_relative_to_par(strokes - par_total)
