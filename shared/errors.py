"""
Exceptions and the structured error channel shared by the app.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Raised when a resource is not found."""
    pass


class UploadError(Exception):
    """Raised when an object could not be written to storage."""
    pass


class ChatRequestError(Exception):
    """Raised when the chat endpoint call fails (transport, status or body)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class UpstreamError(Exception):
    """Raised when the chat model provider returns an unusable answer."""
    pass


class ErrorKind(str, Enum):
    PROFILE_PICTURE_NOT_FOUND = "profile_picture_not_found"
    UPLOAD_FAILED = "upload_failed"
    CHAT_FAILED = "chat_failed"


@dataclass
class AppError:
    """A failure the view absorbed instead of raising."""

    kind: ErrorKind
    message: str
    exception: Optional[BaseException] = None


ErrorListener = Callable[[AppError], None]


class ErrorChannel:
    """
    Collects absorbed failures so the surrounding application can see them.

    Every report is logged, kept in `errors` and handed to each listener.
    A listener that raises is logged and skipped; it never breaks the
    operation that reported the error.
    """

    def __init__(self):
        self.errors: List[AppError] = []
        self._listeners: List[ErrorListener] = []

    def add_listener(self, listener: ErrorListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def report(
        self,
        kind: ErrorKind,
        message: str,
        exception: Optional[BaseException] = None
    ) -> AppError:
        error = AppError(kind=kind, message=message, exception=exception)

        if kind == ErrorKind.PROFILE_PICTURE_NOT_FOUND:
            logger.info(f"{message}: {exception}")
        else:
            logger.error(f"{message}: {exception}")

        self.errors.append(error)
        for listener in list(self._listeners):
            try:
                listener(error)
            except Exception as e:
                logger.warning(f"Error listener failed: {str(e)}")
        return error

    @property
    def last(self) -> Optional[AppError]:
        return self.errors[-1] if self.errors else None

    def clear(self) -> None:
        self.errors.clear()
