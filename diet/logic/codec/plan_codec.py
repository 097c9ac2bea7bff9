"""Diet plan text codec.

A diet list is stored as one free-text blob that is also reused verbatim for
WhatsApp messages and printed sheets. ``encode`` turns a PlanDocument into
that blob; ``decode`` reads any blob (hand-typed or produced by ``encode``)
back into a PlanDocument.

Decoding is a tagged-line tokenizer followed by a fold over the tokens:

    NOTES_HEADER(inline)       "NOTLAR: ..."
    DAY_HEADER(day)            "PAZARTESİ", "1. Gün - Salı"
    MEAL_HEADER(meal, inline)  "KAHVALTI: 2 yumurta"
    CONTINUATION(text)         anything else

with two pieces of state, the current day and the current meal. Neither
function raises: garbage in gives an empty document out.
"""
from __future__ import annotations
import logging
from typing import Iterator, List, NamedTuple, Optional, Tuple

from diet.domain.DietPlan import DayPlan, PlanDocument, WeekPlan
from diet.logic.codec.keywords import (
    detect_weekly, match_day_anywhere, match_day_prefix, match_meal, match_notes,
)
from diet.utilities.constants import (
    DAY_KEYS, DAY_LABELS, MEAL_LABELS, MODE_DAILY, MODE_WEEKLY, NOTES_LABEL,
)

logger = logging.getLogger(__name__)

NOTES_HEADER = "notes_header"
DAY_HEADER = "day_header"
MEAL_HEADER = "meal_header"
CONTINUATION = "continuation"


class Token(NamedTuple):
    kind: str
    text: str = ""
    day: Optional[str] = None
    meal: Optional[str] = None


def classify(line: str) -> Token:
    """Classify one stripped, non-empty line.

    Prefix matches win over the day "contains" match so that
    "AKŞAM: balık (cuma hariç)" stays a dinner line.
    """
    day = match_day_prefix(line)
    if day:
        return Token(DAY_HEADER, text=line, day=day)
    inline = match_notes(line)
    if inline is not None:
        return Token(NOTES_HEADER, text=inline)
    meal = match_meal(line)
    if meal:
        return Token(MEAL_HEADER, text=meal[1], meal=meal[0])
    day = match_day_anywhere(line)
    if day:
        return Token(DAY_HEADER, text=line, day=day)
    return Token(CONTINUATION, text=line)


def tokenize(text: Optional[str]) -> Iterator[Token]:
    for raw in (text or "").splitlines():
        line = raw.strip()
        if line:
            yield classify(line)


def is_weekly_content(text: Optional[str]) -> bool:
    """Layout decision for stored text: weekly when any day name appears."""
    return detect_weekly(text or "")


# --- Encode ---------------------------------------------------------------

def _meal_lines(day: DayPlan) -> List[str]:
    return [f"{MEAL_LABELS[meal]}: {text.strip()}" for meal, text in day.filled_meals()]


def encode(doc: Optional[PlanDocument]) -> str:
    """Serialize a PlanDocument into the shared text format."""
    if doc is None:
        return ""
    lines: List[str] = []
    if doc.notes.strip():
        lines.append(f"{NOTES_LABEL}:")
        lines.append(doc.notes.strip())
        lines.append("")
    if doc.is_weekly:
        for key, day in doc.week.filled_days():
            lines.append(DAY_LABELS[key])
            lines.extend(_meal_lines(day))
            lines.append("")
    else:
        lines.extend(_meal_lines(doc.day))
    return "\n".join(line.rstrip() for line in lines).strip()


# --- Decode ---------------------------------------------------------------

def decode(text: Optional[str], mode: Optional[str] = None) -> PlanDocument:
    """Parse the shared text format.

    ``mode`` is the explicit tag stored on newer records; when absent the
    mode is inferred from the presence of day names, which is how legacy
    rows are read.
    """
    if not isinstance(text, str):
        text = ""
    if mode not in (MODE_DAILY, MODE_WEEKLY):
        if mode is not None:
            logger.warning("Unknown plan mode %r, inferring from content", mode)
        mode = MODE_WEEKLY if is_weekly_content(text) else MODE_DAILY
    weekly = mode == MODE_WEEKLY

    notes: List[str] = []
    week = WeekPlan()
    daily = DayPlan()
    current_day: Optional[str] = None
    current_meal: Optional[str] = None
    in_notes = False
    started = False  # first day header (weekly) / meal header (daily) seen

    for token in tokenize(text):
        kind = token.kind
        if kind == DAY_HEADER and not weekly:
            # a daily plan has no day sections; the line is ordinary text
            kind = CONTINUATION
        if kind == DAY_HEADER:
            current_day, current_meal, in_notes, started = token.day, None, False, True
        elif kind == NOTES_HEADER:
            current_meal, in_notes = None, True
            if token.text:
                notes.append(token.text)
        elif kind == MEAL_HEADER:
            in_notes = False
            if weekly and current_day is None:
                # meal before any day: nowhere to put it
                current_meal = None
                continue
            started = True
            current_meal = token.meal
            target = week[current_day] if weekly else daily
            target.set(current_meal, token.text)
        else:
            if in_notes or not started:
                notes.append(token.text)
            elif current_meal is not None:
                target = week[current_day] if weekly else daily
                target.append(current_meal, token.text)
            elif not weekly:
                notes.append(token.text)
            # weekly, day started but no meal yet: dropped

    note_text = "\n".join(notes)
    if weekly:
        return PlanDocument(note_text, week=week)
    return PlanDocument(note_text, day=daily)


def split_days(text: Optional[str]) -> List[Tuple[str, str]]:
    """Ordered (day key, raw block) pairs for the days present in weekly text.

    Used by layouts that show each day's lines as-is instead of per meal.
    Days missing from the text are left out.
    """
    blocks = {}
    current = None
    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue
        token = classify(line)
        if token.kind == DAY_HEADER:
            current = token.day
            blocks.setdefault(current, [])
        elif current is not None:
            blocks[current].append(line)
    return [(key, "\n".join(blocks[key])) for key in DAY_KEYS if key in blocks]


__all__ = [
    'Token', 'classify', 'tokenize', 'encode', 'decode', 'is_weekly_content', 'split_days',
    'NOTES_HEADER', 'DAY_HEADER', 'MEAL_HEADER', 'CONTINUATION',
]
