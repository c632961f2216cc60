"""
Chat model client used by the chat function.

Talks to an OpenAI-compatible `/chat/completions` endpoint. The API key is
a function app setting; the client app never sees it.
"""

import logging
import aiohttp
from typing import Dict, Optional

from .config import get_chat_api_key, get_chat_model_url, get_chat_model
from .errors import UpstreamError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 60


class ChatModelClient:
    """
    HTTP client for the chat model provider.

    Args:
        api_key: Provider API key (default: CHAT_API_KEY)
        base_url: Provider base URL (default: CHAT_MODEL_URL)
        model: Model name (default: CHAT_MODEL)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None
    ):
        self.api_key = api_key or get_chat_api_key()
        self.base_url = (base_url or get_chat_model_url()).rstrip('/')
        self.model = model or get_chat_model()

    async def complete(self, prompt: str) -> str:
        """
        Send a single user prompt and return the model's reply text.

        Raises:
            UpstreamError: If the provider call fails or the reply is malformed
        """
        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}]
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        logger.info(f"Sending prompt to {self.model}: {prompt[:50]}...")

        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)

                async with session.post(url, json=payload, headers=headers, timeout=timeout) as response:
                    try:
                        result = await response.json(content_type=None)
                    except ValueError:
                        result = {}

                    if response.status != 200:
                        error_msg = self._error_message(result)
                        logger.error(f"Chat completion failed ({response.status}): {error_msg}")
                        raise UpstreamError(f"Chat completion failed: {error_msg}")
        except aiohttp.ClientError as e:
            logger.error(f"Chat model unreachable: {str(e)}")
            raise UpstreamError(f"Chat model unreachable: {str(e)}") from e

        try:
            return result["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamError("Chat completion returned no message") from e

    @staticmethod
    def _error_message(result: Dict) -> str:
        error = result.get("error") if isinstance(result, dict) else None
        if isinstance(error, dict):
            return error.get("message", "Unknown error")
        return error or "Unknown error"
