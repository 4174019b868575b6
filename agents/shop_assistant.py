# =============================================================================
# agents/shop_assistant.py - Storefront Chat Assistant
# =============================================================================
# Answers customer questions through OpenAI chat completions.
#
# The client is stateless: the browser sends the previous turns with every
# message, and only the most recent `max_history` turns are forwarded.
# =============================================================================

import logging

from openai import AsyncOpenAI, OpenAIError

from agents.prompts.assistant_system import build_assistant_prompt
from app.exceptions import UpstreamServiceError
from core.models.gateway import ChatTurn

logger = logging.getLogger(__name__)

PROVIDER = "OpenAI"


class ShopAssistant:
    """
    Betta Expert chat assistant.

    Args:
        client: AsyncOpenAI client (owned by the app lifespan)
        model: Chat model name
        temperature: Sampling temperature
        max_history: Max previous turns forwarded to the model
        max_tokens: Reply length limit
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0.7,
        max_history: int = 10,
        max_tokens: int = 500,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_history = max_history
        self.max_tokens = max_tokens
        self.system_prompt = build_assistant_prompt()

    def build_messages(self, message: str, history: list[ChatTurn] | None = None) -> list[dict]:
        """
        Assemble the chat completion messages.

        Returns:
            [system, *last max_history turns, user message]
        """
        messages = [{"role": "system", "content": self.system_prompt}]

        if history and self.max_history > 0:
            for turn in history[-self.max_history:]:
                messages.append({"role": turn.role.value, "content": turn.content})

        messages.append({"role": "user", "content": message})
        return messages

    async def reply(self, message: str, history: list[ChatTurn] | None = None) -> str:
        """
        Get the assistant's answer to `message`.

        Raises:
            UpstreamServiceError: If OpenAI fails or returns nothing
        """
        messages = self.build_messages(message, history)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise UpstreamServiceError(PROVIDER, str(e))

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning("OpenAI returned an empty reply")
            raise UpstreamServiceError(PROVIDER, "empty reply")

        logger.debug(f"AI reply ({len(messages) - 2} history turns): {len(content)} chars")
        return content.strip()
