"""Route one incoming chat message through commands and the reminder pipeline."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from logger import logger
from utils import sanitize_for_log
from . import messages
from .errors import ParseError, StoreError
from .parser import parse_reminder_request
from .scheduler import ReminderScheduler
from .text import TextGenerator
from .triggers import Command, command_argument, detect_command, is_reminder_request


@dataclass(frozen=True)
class NoAction:
    """The message is not for the reminders domain."""


@dataclass(frozen=True)
class SendToOwner:
    """Reply to the sender with text."""
    text: str


Action = Union[NoAction, SendToOwner]


async def handle_incoming_text(
    owner: str,
    text: str | None,
    reminders: ReminderScheduler,
    text_generator: TextGenerator,
    now: Optional[datetime] = None,
) -> Action:
    """Handle one inbound message.

    Commands are checked before reminder triggers, so "cancelar lembrete"
    never gets parsed as a new reminder.

    Args:
        owner: Sender handle
        text: Message body
        reminders: Scheduler that owns the reminders
        text_generator: Wording for the confirmation
        now: Reference time for relative expressions (defaults to now)

    Returns:
        SendToOwner with the reply, or NoAction if the message is not ours
    """
    if not text or not text.strip():
        return NoAction()

    try:
        command = detect_command(text)
        if command is Command.CLEAR:
            removed = await reminders.clear_owner(owner)
            return SendToOwner(messages.format_cleared(len(removed)))

        if command is Command.CANCEL:
            return await _cancel(owner, command_argument(text, command), reminders)

        if command is Command.LIST:
            return SendToOwner(messages.format_reminder_list(await reminders.list_for_owner(owner)))

        if not is_reminder_request(text):
            return NoAction()

        parsed = parse_reminder_request(text, now=now)
        if isinstance(parsed, ParseError):
            logger.info(f"Could not parse reminder from {sanitize_for_log(owner)}: {parsed.reason}")
            return SendToOwner(parsed.message)

        reminder = await reminders.create(owner, parsed.due_at, parsed.payload)
        logger.info(f"Reminder {reminder.id} created via {parsed.strategy}")
        return SendToOwner(await _confirmation(reminder, text_generator))

    except StoreError as e:
        logger.error(f"Reminder store failure for {sanitize_for_log(owner)}: {e}")
        return SendToOwner(messages.INTERNAL_ERROR)


async def _cancel(owner: str, query: str, reminders: ReminderScheduler) -> Action:
    if not query:
        # Nothing to match against: show what could be cancelled
        current = await reminders.list_for_owner(owner)
        if not current:
            return SendToOwner(messages.NO_REMINDERS)
        return SendToOwner(f"{messages.format_reminder_list(current)}\n\n{messages.CANCEL_WHICH}")

    cancelled = await reminders.cancel_matching(owner, query)
    if cancelled is None:
        return SendToOwner(messages.CANCEL_NOT_FOUND)
    return SendToOwner(messages.format_cancelled(cancelled))


async def _confirmation(reminder, text_generator: TextGenerator) -> str:
    try:
        return await text_generator.confirmation(reminder)
    except Exception as e:
        logger.warning(f"Confirmation text failed, using template: {e}")
        return messages.format_confirmation(reminder)
