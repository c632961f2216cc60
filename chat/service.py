"""
Business logic for the chat function.
"""

import logging
from typing import Optional

from shared.ai_client import ChatModelClient

logger = logging.getLogger(__name__)


class ChatService:
    """Forwards a prompt to the chat model and returns the reply."""

    def __init__(self, model_client: Optional[ChatModelClient] = None):
        self.model_client = model_client or ChatModelClient()

    async def ask(self, prompt: str) -> str:
        """
        Answer a prompt.

        Raises:
            ValueError: If the prompt is blank
            UpstreamError: If the model call fails
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt is required")

        reply = await self.model_client.complete(prompt)
        logger.info(f"Chat reply: {len(reply)} chars")
        return reply
