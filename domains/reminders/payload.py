"""Extract what the user wants to be reminded about.

Works on the ORIGINAL text so the payload keeps the user's casing and
accents: every pattern here tolerates accents instead of folding them.
"""

import re

from . import messages
from .config import REMINDER_TRIGGERS, MONTHS
from .errors import ParseError
from .normalizer import NUMBER_WORD

_ACCENTS = {
    "a": "[aáàâã]",
    "e": "[eéê]",
    "i": "[ií]",
    "o": "[oóôõ]",
    "u": "[uú]",
    "c": "[cç]",
}


def accent_pattern(phrase: str) -> str:
    """Regex matching an unaccented phrase with or without accents.

    "nao esqueca de" matches "não esqueça de", "nao esqueca de", ...
    """
    parts = []
    for char in phrase:
        if char in _ACCENTS:
            parts.append(_ACCENTS[char])
        elif char == " ":
            parts.append(r"\s+")
        elif char == "-":
            parts.append(r"[\s-]?")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


_TRIGGER = _compile(
    r"\b(?:" + "|".join(accent_pattern(t) for t in sorted(REMINDER_TRIGGERS, key=len, reverse=True)) + r")\w*"
)

_PERIOD_WORD = r"(?:manh[ãa]|tarde|noite)"
_DAY_WORDS = _compile(
    r"\b(?:depois\s+de\s+amanh[ãa]|amanh[ãa]|hoje)\b"
    rf"(?:\s+(?:de|[àa]|pela)\s+{_PERIOD_WORD}\b)?[,.]?"
)

_NUMBER = NUMBER_WORD.replace("tres", "tr[eê]s")
_QUANTITY = rf"(?:\d+|{_NUMBER})"
_DURATION = _compile(
    rf"\b(?:em|daqui\s+a|dentro\s+de)\s+{_QUANTITY}\s*(?:minutos?|min|horas?|h\d{1,2}|h|dias?|semanas?)\b"
    rf"(?:\s+e\s+(?:{_QUANTITY}\s*(?:minutos?|min)\b|meia\b))?"
)

_MONTH = "|".join(accent_pattern(m) for m in MONTHS)
_CALENDAR_DATE = _compile(
    rf"(?<![:/\d])\b(?:(?:em|(?:n?o\s+)?dia)\s+)?\d{{1,2}}\s+de\s+(?:{_MONTH})(?:\s+de\s+\d{{2,4}})?\b"
)
_NUMERIC_DATE = _compile(
    r"\b(?:(?:em|n?o\s+dia|dia)\s+)?\d{1,2}[/-]\d{1,2}(?:[/-]\d{2,4})?\b"
)

_WEEKDAY = r"(?:segunda|ter[cç]a|quarta|quinta|sexta|s[aá]bado|domingo)(?:[\s-]feira)?"
_NEXT = r"pr[oó]xim[ao]"
_WEEK_WORDS = [
    # "na próxima semana", "mês que vem"
    _compile(rf"\b(?:(?:n[ao]|d[ao])\s+)?{_NEXT}\s+(?:semana|m[eê]s|ano)\b"),
    _compile(r"\b(?:(?:n[ao])\s+)?(?:semana|m[eê]s|ano)\s+que\s+vem\b"),
    # "na sexta", "na próxima quarta-feira", "sexta-feira"
    _compile(rf"\b(?:(?:n[ao]|nest[ae]|ness[ae])\s+)(?:{_NEXT}\s+)?{_WEEKDAY}\b"),
    _compile(rf"\b(?:{_NEXT}\s+)?(?:segunda|ter[cç]a|quarta|quinta|sexta)[\s-]feira\b"),
    _compile(rf"\b{_NEXT}\s+{_WEEKDAY}\b"),
]
# A bare weekday only counts at either end; "a segunda via" stays
_EDGE_WEEKDAY = [
    _compile(rf"^{_WEEKDAY}\b"),
    _compile(rf"\s{_WEEKDAY}$"),
]

_PERIOD = rf"(?:\s+(?:da|de)\s+{_PERIOD_WORD}\b)?"
# A digit clock that cannot be mistaken for a quantity: 14:30, 9h15, 14h, 3 horas
_MARKED_CLOCK = r"\d{1,2}(?::\d{2}|h\d{1,2}\b|\s*h\b|\s+horas?\b)(?:\s+e\s+(?:meia|\d{1,2}))?"
_ANY_CLOCK = rf"(?:{_MARKED_CLOCK}|\d{{1,2}}(?:\s+e\s+(?:meia|\d{{1,2}}))?\b)"
_WORD_CLOCK = rf"(?:{_NUMBER})(?:\s+e\s+(?:meia|{_NUMBER}))?(?:\s+horas?)?\b"
_IDIOM = r"(?:meio[\s-]?dia|meia[\s-]?noite)\b"

_TIME_OF_DAY = [
    # "às 14h", "às 3", "por volta das nove e meia da noite"
    _compile(rf",?\s*(?:\bàs|\bpor\s+volta\s+das)\s+(?:{_ANY_CLOCK}|{_WORD_CLOCK}){_PERIOD}"),
    # "as 14h" without the accent needs a clock marker or a period
    _compile(rf",?\s*\bas\s+(?:{_MARKED_CLOCK}{_PERIOD}|(?:\d{{1,2}}|{_WORD_CLOCK})\s+(?:da|de)\s+{_PERIOD_WORD}\b)"),
    # "ao meio-dia", "à meia-noite"
    _compile(rf",?\s*(?:\b(?:ao|à|a)\s+)?\b{_IDIOM}"),
    # bare "14:30", "9h15", "8h da manhã"; "2 horas" alone stays, it may be a quantity
    _compile(rf",?\s*\b\d{{1,2}}(?::\d{{2}}|h\d{{1,2}}\b|h\b){_PERIOD}"),
]

_LEADING_JUNK = _compile(r"^(?:[\s,.;:!?\-–—]+|(?:de|que|para|pra)\b\s*)+")
_TRAILING_JUNK = _compile(r"[\s,;:\-–—]+$")
_SPACES = re.compile(r"\s+")


def extract_payload(text: str | None) -> str | ParseError:
    """Strip trigger, day words, durations, dates and times from a request.

    Examples:
    - "Me lembre em 10 minutos de ligar para a mãe" -> "ligar para a mãe"
    - "me avise amanhã às 10h de pagar a conta"     -> "pagar a conta"

    Args:
        text: Original user text

    Returns:
        The reminder subject, or ParseError("empty_payload") if nothing is left
    """
    payload = text or ""

    payload = _TRIGGER.sub(" ", payload, count=1)
    payload = _DAY_WORDS.sub(" ", payload)
    payload = _DURATION.sub(" ", payload)
    payload = _CALENDAR_DATE.sub(" ", payload)
    payload = _NUMERIC_DATE.sub(" ", payload)
    for pattern in _WEEK_WORDS:
        payload = pattern.sub(" ", payload)
    for pattern in _TIME_OF_DAY:
        payload = pattern.sub(" ", payload)

    payload = _SPACES.sub(" ", payload).strip()
    for pattern in _EDGE_WEEKDAY:
        payload = pattern.sub("", payload).strip()
    payload = _LEADING_JUNK.sub("", payload)
    payload = _TRAILING_JUNK.sub("", payload).strip()

    if not payload:
        return ParseError(reason="empty_payload", message=messages.EMPTY_PAYLOAD)
    return payload
