"""Tests for confirmation and notification wording."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from domains.reminders.store import Reminder
from domains.reminders.text import ClaudeTextGenerator, TemplateTextGenerator

REMINDER = Reminder(
    id="1",
    owner="whatsapp:+5511987654321",
    due_at=datetime(2025, 9, 5, 11, 32, tzinfo=ZoneInfo("America/Sao_Paulo")),
    payload="pagar a conta",
)


class TestTemplateTextGenerator:
    @pytest.mark.asyncio
    async def test_confirmation(self):
        text = await TemplateTextGenerator().confirmation(REMINDER)
        assert text == "✅ Combinado! Vou te lembrar de *pagar a conta* em 05/09/2025 às 11:32."

    @pytest.mark.asyncio
    async def test_notification(self):
        assert await TemplateTextGenerator().notification(REMINDER) == "⏰ Lembrete: *pagar a conta*"


class TestClaudeTextGenerator:
    @pytest.mark.asyncio
    async def test_uses_claude_reply(self, mock_claude_client):
        text = await ClaudeTextGenerator(mock_claude_client).confirmation(REMINDER)

        assert text == "Oi! Tudo certo por aqui."
        prompt = mock_claude_client.chat.await_args.args[0]
        assert "pagar a conta" in prompt
        assert "05/09/2025 às 11:32" in prompt

    @pytest.mark.asyncio
    async def test_api_error_falls_back(self, mock_claude_client):
        mock_claude_client.chat.side_effect = RuntimeError("overloaded")
        text = await ClaudeTextGenerator(mock_claude_client).notification(REMINDER)
        assert text == "⏰ Lembrete: *pagar a conta*"

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back(self, mock_claude_client):
        mock_claude_client.chat.return_value = ""
        text = await ClaudeTextGenerator(mock_claude_client).confirmation(REMINDER)
        assert text.startswith("✅ Combinado!")
