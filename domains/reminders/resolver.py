"""Resolve reminder text into a concrete due time.

Strategies are plain functions (normalized_text, now) -> datetime | None,
tried in STRATEGIES order; the first hit wins. Specific patterns come
before the general-purpose parser because dateparser is easily fooled by
Portuguese idioms that normalize() has already rewritten.

Examples:
- "me lembre em 10 minutos de ligar pra mãe"   -> now + 10 min
- "daqui a 2 horas e 30 minutos"               -> now + 2h30
- "dia 5 de setembro às 10h"                   -> 05/09 10:00
- "05/09/2025 às 11h32"                         -> 05/09/2025 11:32
- "amanhã às três da tarde"                     -> tomorrow 15:00
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from dateparser.search import search_dates

from config import TIMEZONE
from logger import logger
from . import messages
from .config import MONTHS, PERIOD_HOURS, TEMPORAL_HINTS, DATEPARSER_LANGUAGES
from .errors import ParseError
from .normalizer import normalize

DEFAULT_TZ = ZoneInfo(TIMEZONE)

Strategy = Callable[[str, datetime], Optional[datetime]]

_RELATIVE = r"\b(?:em|daqui a|dentro de)\s+"
_RELATIVE_MINUTES = re.compile(_RELATIVE + r"(\d+)\s*min")
_RELATIVE_HOURS = re.compile(
    _RELATIVE + r"(\d+)\s*h(?:oras?)?(?:(\d{1,2})\b|\b(?:\s+e\s+(?:(\d+)\s*min|(meia)\b))?)"
)
_CALENDAR_DATE = re.compile(r"(?<![:/\d])\b(?:dia\s+)?(\d{1,2})\s+de\s+([a-z]+)(?:\s+de\s+(\d{2,4}))?\b")
_NUMERIC_DATE = re.compile(
    r"(?<![\d:/-])(\d{1,2})[/-](\d{1,2})(?:[/-](\d{2,4}))?(?:\s+as\s+(\d{1,2})(?::(\d{2}))?)?\b"
)
# "as 3" only reads as a clock with minutes, at the end, or before a connective;
# "levar as 3 criancas" is a quantity
_AT_CLOCK = re.compile(
    r"\b(?:as|ao)\s+(\d{1,2})(?::(\d{2})\b|(?=\s+(?:de|do|da|que|pra|para)\b|\s*$))"
)
_PERIOD_OF_DAY = re.compile(r"\b(?:(?:de|a|na|pela|da|esta|nesta)\s+)?(manha|tarde|noite)\b")
_TODAY = re.compile(r"\bhoje\b")
_BARE_CLOCK = re.compile(r"(?<![:/\d])\b(\d{2}):(\d{2})\b")
_DAY_AFTER_TOMORROW = re.compile(r"\bdepois de amanha\b")
_TOMORROW = re.compile(r"\bamanha\b")
_HINTS = re.compile(r"\b(?:" + "|".join(TEMPORAL_HINTS + list(MONTHS)) + r")\b")


@dataclass(frozen=True)
class Resolution:
    """A successfully resolved due time."""
    due_at: datetime
    strategy: str


class InvalidDate(ValueError):
    """A date pattern matched but names a day or time that does not exist."""


def _year(raw: Optional[str], now: datetime) -> int:
    if not raw:
        return now.year
    year = int(raw)
    return 2000 + year if len(raw) == 2 else year


def _build(now: datetime, year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    try:
        return datetime(year, month, day, hour, minute, tzinfo=now.tzinfo)
    except ValueError as e:
        raise InvalidDate(f"{day:02d}/{month:02d}/{year} {hour:02d}:{minute:02d}") from e


def relative_minutes(text: str, now: datetime) -> Optional[datetime]:
    """'em 10 minutos', 'daqui a 5 min'."""
    match = _RELATIVE_MINUTES.search(text)
    if not match:
        return None
    return now + timedelta(minutes=int(match.group(1)))


def relative_hours(text: str, now: datetime) -> Optional[datetime]:
    """'em 2 horas', 'daqui a 1h30', 'em 1 hora e 30 minutos'."""
    match = _RELATIVE_HOURS.search(text)
    if not match:
        return None
    if match.group(4):
        minutes = 30
    else:
        minutes = int(match.group(2) or match.group(3) or 0)
    return now + timedelta(hours=int(match.group(1)), minutes=minutes)


def calendar_date(text: str, now: datetime) -> Optional[datetime]:
    """'[dia] 5 de setembro [de 2026]', time from any 'as HH[:MM]' in the text."""
    match = next(
        (m for m in _CALENDAR_DATE.finditer(text) if m.group(2) in MONTHS),
        None,
    )
    if not match:
        return None
    month = MONTHS[match.group(2)]

    hour, minute = 0, 0
    clock = _AT_CLOCK.search(text)
    if clock:
        hour = int(clock.group(1))
        minute = int(clock.group(2) or 0)

    return _build(now, _year(match.group(3), now), month, int(match.group(1)), hour, minute)


def numeric_date(text: str, now: datetime) -> Optional[datetime]:
    """'05/09', '05/09/25', '05-09-2025 as 11:32'."""
    match = _NUMERIC_DATE.search(text)
    if not match:
        return None
    day, month = int(match.group(1)), int(match.group(2))
    hour = int(match.group(4) or 0)
    minute = int(match.group(5) or 0)
    return _build(now, _year(match.group(3), now), month, day, hour, minute)


def _clock_time(text: str, now: datetime) -> Optional[datetime]:
    """Bare time of day, nearest future occurrence."""
    match = _AT_CLOCK.search(text) or _BARE_CLOCK.search(text)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2) or 0)
    if hour > 23 or minute > 59:
        return None

    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def _search_dates(text: str, now: datetime) -> Optional[datetime]:
    """General-purpose parser for everything else ('sexta', 'em 3 dias')."""
    # The day override handles "amanha" itself
    text = _TOMORROW.sub(" ", _DAY_AFTER_TOMORROW.sub(" ", text))
    if not _HINTS.search(text):
        return None

    try:
        found = search_dates(
            text,
            languages=DATEPARSER_LANGUAGES,
            settings={
                "PREFER_DATES_FROM": "future",
                "RELATIVE_BASE": now.replace(tzinfo=None),
            },
        )
    except Exception as e:
        logger.warning(f"dateparser failed on '{text}': {e}")
        return None

    if not found:
        return None

    parsed = found[0][1]
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=now.tzinfo)
    return parsed.astimezone(now.tzinfo)


def _period_time(text: str, now: datetime) -> Optional[datetime]:
    """'hoje a noite', 'sexta de manha': default hour of the period.

    The day comes from dateparser when the rest of the text names one,
    else the next occurrence of that hour.
    """
    match = _PERIOD_OF_DAY.search(text)
    if not match:
        return None
    hour = PERIOD_HOURS[match.group(1)]

    day = _search_dates(_TODAY.sub(" ", _PERIOD_OF_DAY.sub(" ", text)), now)
    if day is not None:
        return day.replace(hour=hour, minute=0, second=0, microsecond=0)

    candidate = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def fallback(text: str, now: datetime) -> Optional[datetime]:
    """Clock time with forward bias, then a bare period of day, else dateparser."""
    return _clock_time(text, now) or _period_time(text, now) or _search_dates(text, now)


STRATEGIES: tuple[Strategy, ...] = (
    relative_minutes,
    relative_hours,
    calendar_date,
    numeric_date,
    fallback,
)


def _day_offset(text: str) -> Optional[int]:
    if _DAY_AFTER_TOMORROW.search(text):
        return 2
    if _TOMORROW.search(text):
        return 1
    return None


def _apply_day_override(text: str, now: datetime, resolved: Optional[datetime]) -> Optional[datetime]:
    """Force 'amanha' / 'depois de amanha' onto the date, keeping any resolved time."""
    offset = _day_offset(text)
    if offset is None:
        return resolved

    day = (now + timedelta(days=offset)).date()
    hour, minute = (resolved.hour, resolved.minute) if resolved else (0, 0)
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=now.tzinfo)


def resolve(
    text: str,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Resolution | ParseError:
    """Resolve the due time of a reminder request.

    Args:
        text: Original user text (normalized internally)
        now: Current time (defaults to now in the configured timezone)
        tz: Timezone for naive `now` and results (defaults to config.TIMEZONE)

    Returns:
        Resolution on success, ParseError with a user-facing hint otherwise
    """
    tz = tz or DEFAULT_TZ
    now = now or datetime.now(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)

    normalized = normalize(text)
    resolved: Optional[datetime] = None
    strategy_name = "none"

    try:
        for strategy in STRATEGIES:
            resolved = strategy(normalized, now)
            if resolved is not None:
                strategy_name = strategy.__name__
                break
    except InvalidDate as e:
        logger.info(f"Invalid date in reminder request: {e}")
        return ParseError(reason="invalid_date", message=messages.INVALID_DATE)

    overridden = _apply_day_override(normalized, now, resolved)
    if overridden is not resolved:
        strategy_name = f"{strategy_name}+day_override"
    resolved = overridden

    if resolved is None:
        return ParseError(reason="no_date", message=messages.NO_DATE)

    logger.debug(f"Resolved '{normalized}' via {strategy_name}: {resolved.isoformat()}")
    return Resolution(due_at=resolved, strategy=strategy_name)
