"""
Client for the chat function as called from the client app.
"""

import logging
import aiohttp
from typing import Optional

from shared.config import get_chat_endpoint_url
from shared.errors import ChatRequestError

logger = logging.getLogger(__name__)


class ChatApiClient:
    """
    Posts `{"prompt": ...}` to the chat function and returns its `response`.

    Args:
        endpoint_url: Full URL of POST /api/chat (default: CHAT_ENDPOINT_URL)
        access_token: Supabase access token sent as a bearer token, if any
    """

    def __init__(self, endpoint_url: Optional[str] = None, access_token: Optional[str] = None):
        self.endpoint_url = endpoint_url or get_chat_endpoint_url()
        self.access_token = access_token

    async def ask(self, prompt: str) -> str:
        """
        Send a prompt to the chat function.

        Raises:
            ChatRequestError: On transport errors, any non-2xx status, or a
                body without a string `response`
        """
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.endpoint_url, json={"prompt": prompt}, headers=headers) as response:
                    if not 200 <= response.status < 300:
                        raise ChatRequestError(
                            f"Chat endpoint returned {response.status}",
                            status=response.status
                        )
                    data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise ChatRequestError(f"Chat endpoint unreachable: {str(e)}") from e
        except ValueError as e:
            raise ChatRequestError("Chat endpoint returned invalid JSON") from e

        reply = data.get("response") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ChatRequestError("Chat endpoint response has no text")
        return reply
