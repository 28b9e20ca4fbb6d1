"""Reminders domain - natural language reminders delivered over WhatsApp."""

from .errors import ParseError, StoreError
from .handler import Action, NoAction, SendToOwner, handle_incoming_text
from .parser import ParsedReminder, parse_reminder_request
from .scheduler import Deliver, ReconcileReport, ReminderScheduler
from .store import Reminder, ReminderStore
from .text import ClaudeTextGenerator, TemplateTextGenerator, TextGenerator
from .triggers import Command, detect_command, is_reminder_request

__all__ = [
    "Action",
    "ClaudeTextGenerator",
    "Command",
    "Deliver",
    "NoAction",
    "ParseError",
    "ParsedReminder",
    "ReconcileReport",
    "Reminder",
    "ReminderScheduler",
    "ReminderStore",
    "SendToOwner",
    "StoreError",
    "TemplateTextGenerator",
    "TextGenerator",
    "detect_command",
    "handle_incoming_text",
    "is_reminder_request",
    "parse_reminder_request",
]
