"""Conversational fallback for messages that are not reminders."""

from .chat import ChatAssistant

__all__ = ["ChatAssistant"]
