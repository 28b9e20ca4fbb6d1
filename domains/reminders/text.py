"""Wording for confirmations and notifications.

The scheduler and handler only need "some text for this reminder"; how it
is phrased is up to the generator. TemplateTextGenerator is deterministic,
ClaudeTextGenerator asks Claude for a warmer message and falls back to the
template when the API is unavailable.
"""

from typing import Protocol

from claude_client import ClaudeClient
from logger import logger
from . import messages
from .store import Reminder

SYSTEM_PROMPT = (
    "Você é um assistente de WhatsApp simpático e amigável. "
    "Sempre responda de forma natural, breve e acolhedora, em português do Brasil."
)


class TextGenerator(Protocol):
    async def confirmation(self, reminder: Reminder) -> str: ...

    async def notification(self, reminder: Reminder) -> str: ...


class TemplateTextGenerator:
    """Fixed Portuguese templates."""

    async def confirmation(self, reminder: Reminder) -> str:
        return messages.format_confirmation(reminder)

    async def notification(self, reminder: Reminder) -> str:
        return messages.format_notification(reminder)


class ClaudeTextGenerator:
    """Humanized wording via Claude, template on failure."""

    def __init__(self, client: ClaudeClient, fallback: TextGenerator | None = None):
        self.client = client
        self.fallback = fallback or TemplateTextGenerator()

    async def confirmation(self, reminder: Reminder) -> str:
        prompt = (
            "Crie uma mensagem curta e acolhedora confirmando que o lembrete foi salvo. "
            f'O lembrete é: "{reminder.payload}" em {messages.format_due_at(reminder.due_at)}. '
            "Mencione a data e o horário exatamente como informados."
        )
        return await self._ask(prompt) or await self.fallback.confirmation(reminder)

    async def notification(self, reminder: Reminder) -> str:
        prompt = (
            f'Agora é hora de lembrar o usuário sobre: "{reminder.payload}". '
            "Crie uma mensagem curta, amigável e humanizada para enviar."
        )
        return await self._ask(prompt) or await self.fallback.notification(reminder)

    async def _ask(self, prompt: str) -> str:
        try:
            return await self.client.chat(prompt, system=SYSTEM_PROMPT)
        except Exception as e:
            logger.warning(f"Text generation failed, using template: {e}")
            return ""
