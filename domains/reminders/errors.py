"""Error types for the reminders domain."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParseError:
    """The text could not be turned into a reminder.

    Returned (not raised) by the resolver and payload extractor; the
    message is shown to the user as-is so they can rephrase.
    """
    reason: str  # "no_date", "invalid_date" or "empty_payload"
    message: str


class StoreError(Exception):
    """Reminder collection could not be read or written."""
