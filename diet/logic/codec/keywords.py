"""Turkish day / meal / notes keyword tables and line matchers.

Every comparison runs on ``normalize(text)``: upper-cased and folded to ASCII
(Ç→C, Ş→S, Ğ→G, Ü→U, Ö→O, İ→I, ı→I), so "pazartesi", "PAZARTESİ" and
"PAZARTESI" are the same token. Folding is one character for one character,
which lets us cut a matched prefix out of the original (unfolded) line by
length.
"""
from __future__ import annotations
import re
from typing import Optional, Tuple

_FOLD = str.maketrans("ÇŞĞÜÖİÂÎÛ", "CSGUOIAIU")

DAY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "pazartesi": ("PAZARTESİ", "PAZARTESI"),
    "sali": ("SALI",),
    "carsamba": ("ÇARŞAMBA", "CARSAMBA"),
    "persembe": ("PERŞEMBE", "PERSEMBE"),
    "cuma": ("CUMA",),
    "cumartesi": ("CUMARTESİ", "CUMARTESI"),
    "pazar": ("PAZAR",),
}

MEAL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "breakfast": ("KAHVALTI", "SABAH"),
    "lunch": ("ÖĞLE YEMEĞİ", "ÖĞLEN", "ÖĞLE"),
    "snack": ("ARA ÖĞÜN", "ARA ÖGÜN", "ATIŞTIRMALIK"),
    "dinner": ("AKŞAM YEMEĞİ", "AKŞAM", "AKSAM"),
}

NOTES_KEYWORDS: tuple[str, ...] = ("GENEL NOTLAR", "NOTLAR")

_SEPARATOR = re.compile(r"^\s*:?\s*")


def normalize(text: str) -> str:
    """Upper-case and fold Turkish diacritics to ASCII."""
    # str.upper() maps both i and ı to I, which is what we want after folding
    return (text or "").upper().translate(_FOLD)


def _longest_first(table: dict[str, tuple[str, ...]]) -> list[Tuple[str, str]]:
    """Flatten {key: variants} into (normalized keyword, key), longest keyword first.

    PAZARTESI must win over PAZAR and CUMARTESI over CUMA.
    """
    pairs = {(normalize(variant), key) for key, variants in table.items() for variant in variants}
    return sorted(pairs, key=lambda p: (-len(p[0]), p[0]))


_DAY_TABLE = _longest_first(DAY_KEYWORDS)
_MEAL_TABLE = _longest_first(MEAL_KEYWORDS)
_NOTES_TABLE = _longest_first({"notes": NOTES_KEYWORDS})


def _ends_on_boundary(normalized_line: str, length: int) -> bool:
    return length >= len(normalized_line) or not normalized_line[length].isalpha()


def _inline_text(line: str, length: int) -> str:
    return _SEPARATOR.sub("", line[length:], count=1).strip()


def _match_prefix(line: str, table) -> Optional[Tuple[str, str]]:
    stripped = (line or "").strip()
    normalized = normalize(stripped)
    for keyword, key in table:
        if normalized.startswith(keyword) and _ends_on_boundary(normalized, len(keyword)):
            return key, _inline_text(stripped, len(keyword))
    return None


def match_day_prefix(line: str) -> Optional[str]:
    """Return the day key when the line starts with a day keyword."""
    normalized = normalize((line or "").strip())
    for keyword, key in _DAY_TABLE:
        if normalized.startswith(keyword):
            return key
    return None


def match_day_anywhere(line: str) -> Optional[str]:
    """Return the day key when the line contains a day keyword anywhere."""
    normalized = normalize(line)
    for keyword, key in _DAY_TABLE:
        if keyword in normalized:
            return key
    return None


def match_day(line: str) -> Optional[str]:
    """Prefix match first, then substring match."""
    return match_day_prefix(line) or match_day_anywhere(line)


def match_meal(line: str) -> Optional[Tuple[str, str]]:
    """Return (meal key, inline text) when the line starts with a meal keyword."""
    return _match_prefix(line, _MEAL_TABLE)


def match_notes(line: str) -> Optional[str]:
    """Return the inline text when the line starts with a notes keyword."""
    hit = _match_prefix(line, _NOTES_TABLE)
    return hit[1] if hit else None


def detect_weekly(text: str) -> bool:
    """Weekly iff any day keyword occurs anywhere in the text."""
    normalized = normalize(text)
    return any(keyword in normalized for keyword, _ in _DAY_TABLE)


__all__ = [
    'DAY_KEYWORDS', 'MEAL_KEYWORDS', 'NOTES_KEYWORDS', 'normalize',
    'match_day', 'match_day_prefix', 'match_day_anywhere', 'match_meal', 'match_notes', 'detect_weekly',
]
