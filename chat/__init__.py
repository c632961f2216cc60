# Chat with AI: the client for POST /api/chat and the function behind it
from .client import ChatApiClient
from .service import ChatService

__all__ = ["ChatApiClient", "ChatService"]
