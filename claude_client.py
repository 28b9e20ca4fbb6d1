"""Thin Claude API client used for friendly wording and small talk."""

import anthropic

from logger import logger


class ClaudeClient:
    """Text-only Claude API client."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514", max_tokens: int = 512):
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def chat(self, message: str, system: str) -> str:
        """
        Send a single message, return the text response.

        Args:
            message: User message
            system: System prompt

        Returns:
            Text response from Claude
        """
        return await self._create([{"role": "user", "content": message}], system)

    async def chat_with_history(self, conversation: list[dict], system: str) -> str:
        """
        Send conversation with history, return the text response.

        Args:
            conversation: List of {"role": "user"|"assistant", "content": str}
            system: System prompt

        Returns:
            Text response from Claude
        """
        messages = [
            {"role": msg["role"], "content": msg["content"]}
            for msg in conversation
            if msg.get("content")
        ]

        # Ensure conversation starts with user message
        while messages and messages[0]["role"] != "user":
            messages = messages[1:]

        # Ensure conversation ends with user message
        while messages and messages[-1]["role"] != "user":
            messages = messages[:-1]

        if not messages:
            return ""

        logger.info(f"Processing conversation with {len(messages)} messages")
        return await self._create(messages, system)

    async def _create(self, messages: list[dict], system: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system,
                messages=messages
            )
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise

        text_blocks = [b.text for b in response.content if b.type == "text"]
        return "\n".join(text_blocks).strip()
