# Client side of the todo app: page state and the services it drives
from .context import ClientContext, build_context, create_client_context
from .previews import PreviewRegistry
from .view import TodoAppView, SelectedFile, CHAT_ERROR_MESSAGE

__all__ = [
    "ClientContext",
    "build_context",
    "create_client_context",
    "PreviewRegistry",
    "TodoAppView",
    "SelectedFile",
    "CHAT_ERROR_MESSAGE",
]
