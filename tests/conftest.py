"""Pytest configuration and fixtures."""

from datetime import datetime
from unittest.mock import AsyncMock, Mock
from zoneinfo import ZoneInfo

import pytest

from domains.reminders import ReminderStore, TemplateTextGenerator

SP_TZ = ZoneInfo("America/Sao_Paulo")
OWNER = "whatsapp:+5511987654321"


@pytest.fixture
def owner():
    """A WhatsApp sender handle as Twilio reports it."""
    return OWNER


@pytest.fixture
def now():
    """A fixed Wednesday afternoon in São Paulo."""
    return datetime(2025, 9, 3, 15, 0, tzinfo=SP_TZ)


@pytest.fixture
def store(tmp_path):
    """Reminder store backed by a temp file."""
    return ReminderStore(tmp_path / "reminders.json")


@pytest.fixture
def deliver():
    """Mock delivery effect."""
    return AsyncMock(return_value="SM123")


@pytest.fixture
def text_generator():
    return TemplateTextGenerator()


@pytest.fixture
def mock_scheduler():
    """Mock APScheduler instance."""
    scheduler = Mock()
    scheduler.add_job = Mock()
    scheduler.remove_job = Mock()
    return scheduler


@pytest.fixture
def mock_claude_client():
    """Mock ClaudeClient."""
    client = Mock()
    client.chat = AsyncMock(return_value="Oi! Tudo certo por aqui.")
    client.chat_with_history = AsyncMock(return_value="Oi! Tudo certo por aqui.")
    return client
