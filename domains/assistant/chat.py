"""Small talk with per-owner conversation memory."""

from collections import defaultdict, deque

from claude_client import ClaudeClient
from config import CONTEXT_WINDOW_MESSAGES
from logger import logger
from utils import sanitize_for_log

SYSTEM_PROMPT = (
    "Você é um assistente de WhatsApp simpático e amigável. "
    "Responda em português do Brasil, de forma breve e natural. "
    "Se o usuário quiser um lembrete, explique que basta escrever algo como "
    "'me lembre amanhã às 10h de pagar a conta'."
)

FALLBACK_REPLY = "😅 Desculpe, não consegui responder agora. Tente novamente em instantes."


class ChatAssistant:
    """Claude chat keeping the last `window` turns per owner."""

    def __init__(self, client: ClaudeClient, window: int = CONTEXT_WINDOW_MESSAGES):
        self.client = client
        self.window = window
        self._history: dict[str, deque] = defaultdict(lambda: deque(maxlen=self.window))

    def history(self, owner: str) -> list[dict]:
        return list(self._history[owner])

    def reset(self, owner: str) -> None:
        self._history.pop(owner, None)

    async def reply(self, owner: str, text: str) -> str:
        """Answer a message using the owner's recent history.

        Args:
            owner: Sender handle
            text: Message body

        Returns:
            Assistant reply, or a fixed apology if Claude fails
        """
        history = self._history[owner]
        history.append({"role": "user", "content": text})

        try:
            answer = await self.client.chat_with_history(list(history), system=SYSTEM_PROMPT)
        except Exception as e:
            logger.error(f"Chat failed for {sanitize_for_log(owner)}: {e}")
            return FALLBACK_REPLY

        if not answer:
            return FALLBACK_REPLY

        history.append({"role": "assistant", "content": answer})
        return answer
