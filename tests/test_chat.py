"""Tests for the conversational fallback."""

import pytest

from domains.assistant.chat import FALLBACK_REPLY, ChatAssistant


class TestChatAssistant:
    @pytest.mark.asyncio
    async def test_reply_records_history(self, mock_claude_client, owner):
        assistant = ChatAssistant(mock_claude_client, window=15)

        answer = await assistant.reply(owner, "bom dia")

        assert answer == "Oi! Tudo certo por aqui."
        assert assistant.history(owner) == [
            {"role": "user", "content": "bom dia"},
            {"role": "assistant", "content": "Oi! Tudo certo por aqui."},
        ]

    @pytest.mark.asyncio
    async def test_window_keeps_latest_messages(self, mock_claude_client, owner):
        assistant = ChatAssistant(mock_claude_client, window=4)

        for i in range(5):
            await assistant.reply(owner, f"mensagem {i}")

        history = assistant.history(owner)
        assert len(history) == 4
        assert history[0] == {"role": "user", "content": "mensagem 3"}

    @pytest.mark.asyncio
    async def test_histories_are_per_owner(self, mock_claude_client, owner):
        assistant = ChatAssistant(mock_claude_client)
        await assistant.reply(owner, "oi")
        await assistant.reply("whatsapp:+5521900000000", "olá")

        sent = mock_claude_client.chat_with_history.await_args.args[0]
        assert sent == [{"role": "user", "content": "olá"}]

    @pytest.mark.asyncio
    async def test_api_failure_apologises(self, mock_claude_client, owner):
        mock_claude_client.chat_with_history.side_effect = RuntimeError("overloaded")
        assistant = ChatAssistant(mock_claude_client)

        assert await assistant.reply(owner, "oi") == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_reset(self, mock_claude_client, owner):
        assistant = ChatAssistant(mock_claude_client)
        await assistant.reply(owner, "oi")
        assistant.reset(owner)
        assert assistant.history(owner) == []
