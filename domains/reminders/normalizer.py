"""Canonicalise free text before temporal parsing.

Rewrites the many ways people write a time of day in Portuguese
("nove e meia", "3 horas da tarde", "14h30", "meio-dia") into a single
zero-padded HH:MM token so the resolver only has to understand one form.

Rules run in a fixed order; later rules rely on the forms produced by
earlier ones. Output of normalize() is a fixed point of normalize().
"""

import re
import unicodedata

from .config import UNITS, TEENS, TENS


def strip_accents(text: str) -> str:
    """Lower-case and drop diacritics ("Três" -> "tres", "março" -> "marco")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


def _alternation(words) -> str:
    # Longest first so "dezesseis" wins over "dez", "uma" over "um"
    return "|".join(sorted(words, key=len, reverse=True))


NUMBER_WORD = (
    rf"(?:(?:{_alternation(TENS)})(?:\s+e\s+(?:{_alternation(UNITS)}))?"
    rf"|{_alternation(TEENS)}|{_alternation(UNITS)})"
)

_RELATIVE_BEFORE = re.compile(r"\b(?:em|daqui a|dentro de)\s+$")

_PUNCTUATION = re.compile(r"[,.;!?]+")
_SPACES = re.compile(r"\s+")

_IDIOMS = [
    (re.compile(r"\bao meio[\s-]?dia\b"), "as 12:00"),
    (re.compile(r"\ba meia[\s-]?noite\b"), "as 00:00"),
    (re.compile(r"\bmeio[\s-]?dia\b"), "12:00"),
    (re.compile(r"\bmeia[\s-]?noite\b"), "00:00"),
]

_DIGIT_PAIR = re.compile(r"(?<![:/\d-])\b(\d{1,2})\s*e\s*(\d{1,2})\b(?![:/])")

_WORD_PAIR = re.compile(rf"\b({NUMBER_WORD})\s+e\s+({NUMBER_WORD}|meia)\b")
_WORD_BEFORE_UNIT = re.compile(rf"\b({NUMBER_WORD})(?=\s*(?:minutos?|min|horas?|h|dias?)\b)")
_WORD_AFTER_AS = re.compile(rf"(?<=\bas )({NUMBER_WORD})\b")

_PERIOD = re.compile(
    r"(?<![:/\d])\b(\d{1,2})(?::(\d{2}))?\s*(?:h|horas?)?\s+da\s+(manha|tarde|noite)\b"
)
_CLOCK_WITH_HORAS = re.compile(r"\b(\d{2}:\d{2})\s+horas?\b")
_H_MINUTES = re.compile(r"(?<![:/\d])\b(\d{1,2})h(\d{1,2})\b")
_H_ONLY = re.compile(r"(?<![:/\d])\b(\d{1,2})\s*h\b")
_HORAS = re.compile(r"(?<![:/\d])\b(\d{1,2})\s+horas?\b")
_E_MEIA = re.compile(r"(?<![:/\d])\b(\d{1,2})\s+e\s+meia\b")
_SHORT_CLOCK = re.compile(r"(?<![:/\d])\b(\d):(\d{2})\b")


def words_to_number(words: str) -> int:
    """Convert a spelled-out number ("quarenta e oito") to an int."""
    total = 0
    for part in re.split(r"\s+e\s+", words.strip()):
        if part == "meia":
            total += 30
        else:
            total += UNITS.get(part, TEENS.get(part, TENS.get(part, 0)))
    return total


def _clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _is_relative(text: str, start: int) -> bool:
    """True if the number at `start` is a duration ("em 2 horas")."""
    return _RELATIVE_BEFORE.search(text[:start]) is not None


def _replace_word_pair(match: re.Match) -> str:
    hour_words, minute_words = match.group(1), match.group(2)
    # "vinte e tres" on its own is the number 23, not 20:03
    if hour_words in TENS and minute_words in UNITS:
        return match.group(0)
    hour = words_to_number(hour_words)
    minute = words_to_number(minute_words)
    if hour > 23 or minute > 59:
        return match.group(0)
    return _clock(hour, minute)


def _replace_digit_pair(match: re.Match) -> str:
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return match.group(0)
    return _clock(hour, minute)


def _shift_period(hour: int, period: str) -> int:
    if period in ("tarde", "noite") and hour < 12:
        return hour + 12
    if period == "manha" and hour == 12:
        return 0
    return hour


def _sub_clock(pattern: re.Pattern, text: str, build) -> str:
    """Apply a clock rewrite, leaving durations and impossible times alone."""
    def replace(match: re.Match) -> str:
        if _is_relative(text, match.start()):
            return match.group(0)
        result = build(match)
        return match.group(0) if result is None else result

    return pattern.sub(replace, text)


def _period_clock(match: re.Match) -> str | None:
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if hour > 23 or minute > 59:
        return None
    return _clock(_shift_period(hour, match.group(3)), minute)


def _hour_minute_clock(match: re.Match) -> str | None:
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return _clock(hour, minute)


def _hour_clock(minute: int):
    def build(match: re.Match) -> str | None:
        hour = int(match.group(1))
        if hour > 23:
            return None
        return _clock(hour, minute)
    return build


def normalize(text: str | None) -> str:
    """Canonicalise reminder text for the temporal resolver.

    Args:
        text: Raw user text, any casing and accents

    Returns:
        Lower-case, accent-free text with times rewritten as HH:MM
    """
    if not text:
        return ""

    # 1-2. Fold accents/case, collapse punctuation and whitespace
    updated = strip_accents(text)
    updated = _PUNCTUATION.sub(" ", updated)
    updated = _SPACES.sub(" ", updated).strip()

    # 3. Noon / midnight
    for pattern, replacement in _IDIOMS:
        updated = pattern.sub(replacement, updated)

    # 4. "9 e 22" -> "09:22"
    updated = _DIGIT_PAIR.sub(_replace_digit_pair, updated)

    # 5. Spelled-out numbers
    updated = _WORD_PAIR.sub(_replace_word_pair, updated)
    updated = _WORD_BEFORE_UNIT.sub(lambda m: str(words_to_number(m.group(1))), updated)
    updated = _WORD_AFTER_AS.sub(lambda m: str(words_to_number(m.group(1))), updated)

    # 6. Clock shapes, periods first so "3 horas da tarde" becomes 15:00
    updated = _sub_clock(_PERIOD, updated, _period_clock)
    updated = _CLOCK_WITH_HORAS.sub(r"\1", updated)
    updated = _sub_clock(_H_MINUTES, updated, _hour_minute_clock)
    updated = _sub_clock(_H_ONLY, updated, _hour_clock(0))
    updated = _sub_clock(_HORAS, updated, _hour_clock(0))
    updated = _sub_clock(_E_MEIA, updated, _hour_clock(30))
    updated = _SHORT_CLOCK.sub(lambda m: f"0{m.group(1)}:{m.group(2)}", updated)

    return updated
