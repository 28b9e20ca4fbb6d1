"""Parse natural language reminder requests into structured data."""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from .errors import ParseError
from .payload import extract_payload
from .resolver import resolve


@dataclass
class ParsedReminder:
    """Parsed reminder data."""
    due_at: datetime
    payload: str
    strategy: str  # Which resolver strategy produced due_at, for logs


def parse_reminder_request(
    text: str,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> ParsedReminder | ParseError:
    """Parse a reminder request.

    Examples:
    - "me lembre em 10 minutos de ligar pra mãe"
    - "me avise amanhã às 14h de enviar o relatório"
    - "não me deixe esquecer dia 5 de setembro às 9h da consulta"

    Args:
        text: Original user text
        now: Current time (defaults to now in the configured timezone)
        tz: Timezone override

    Returns:
        ParsedReminder if both time and subject were found, ParseError otherwise
    """
    resolution = resolve(text, now=now, tz=tz)
    if isinstance(resolution, ParseError):
        return resolution

    payload = extract_payload(text)
    if isinstance(payload, ParseError):
        return payload

    return ParsedReminder(
        due_at=resolution.due_at,
        payload=payload,
        strategy=resolution.strategy,
    )
