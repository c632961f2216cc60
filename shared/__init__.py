# Shared utilities for the todo app and chat function
from .auth import get_user_from_token, UnauthorizedError, AuthenticatedUser
from .errors import (
    NotFoundError, UploadError, ChatRequestError, UpstreamError,
    ErrorKind, AppError, ErrorChannel
)
from .live_query import LiveQuery, Subscription

__all__ = [
    "get_user_from_token",
    "UnauthorizedError",
    "AuthenticatedUser",
    "NotFoundError",
    "UploadError",
    "ChatRequestError",
    "UpstreamError",
    "ErrorKind",
    "AppError",
    "ErrorChannel",
    "LiveQuery",
    "Subscription",
]
