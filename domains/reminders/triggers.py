"""Decide whether a message is a reminder request or a reminder command."""

import itertools
import re
import unicodedata
from enum import Enum

from .config import REMINDER_TRIGGERS, CLEAR_COMMANDS, CANCEL_COMMANDS, LIST_COMMANDS
from .normalizer import strip_accents


class Command(Enum):
    """User commands handled before the parsing pipeline."""
    CLEAR = "clear"
    CANCEL = "cancel"
    LIST = "list"


# Checked in this order: "apagar todos os lembretes" must not fall into LIST
_COMMAND_PHRASES = [
    (Command.CLEAR, CLEAR_COMMANDS),
    (Command.CANCEL, CANCEL_COMMANDS),
    (Command.LIST, LIST_COMMANDS),
]

_LEADING_CONNECTIVES = re.compile(r"^(?:[:\-–,]\s*|(?:de|do|da|o|a)\s+)+", re.IGNORECASE)


def _fold_with_offsets(text: str) -> tuple[str, list[int]]:
    """Fold text char by char, mapping each folded index to its source index.

    Combining marks fold to nothing, so the folded copy can be shorter.
    """
    folded = []
    offsets = []
    for i, char in enumerate(text):
        piece = strip_accents(char)
        folded.append(piece)
        offsets.extend([i] * len(piece))
    offsets.append(len(text))
    return "".join(folded), offsets


def is_reminder_request(text: str | None) -> bool:
    """Quick check if text asks for a reminder.

    Args:
        text: Message text to check

    Returns:
        True if any trigger phrase appears (accent and case insensitive)
    """
    if not text:
        return False
    folded = strip_accents(text)
    return any(trigger in folded for trigger in REMINDER_TRIGGERS)


def detect_command(text: str | None) -> Command | None:
    """Return the reminder command contained in text, if any."""
    if not text:
        return None
    folded = strip_accents(text)
    for command, phrases in _COMMAND_PHRASES:
        if any(phrase in folded for phrase in phrases):
            return command
    return None


def command_argument(text: str, command: Command) -> str:
    """Return what follows the command phrase, in the user's original casing.

    "Cancelar lembrete de pagar a Conta" -> "pagar a Conta"
    """
    text = unicodedata.normalize("NFC", text)
    folded, offsets = _fold_with_offsets(text)
    phrases = dict(_COMMAND_PHRASES)[command]
    for phrase in phrases:
        index = folded.find(phrase)
        if index == -1:
            continue
        remainder = text[offsets[index + len(phrase)]:]
        remainder = "".join(itertools.dropwhile(unicodedata.combining, remainder))
        # "cancelar lembretes" leaves a dangling plural "s"
        remainder = re.sub(r"^s\b", "", remainder)
        return _LEADING_CONNECTIVES.sub("", remainder.strip()).strip()
    return ""
