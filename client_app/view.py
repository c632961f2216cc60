"""
View model of the todo app page.

Holds the page state (todo list, profile picture, chat panel) and turns user
actions into calls on the services in `ClientContext`. Failures in the
profile picture and chat flows are absorbed: they land on the context's
error channel and never propagate to the caller.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from shared.auth import sign_out
from shared.errors import ErrorKind, NotFoundError
from todos.models import Todo
from .context import ClientContext

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "Sorry, there was an error processing your request."


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user for upload."""

    name: str
    data: bytes
    content_type: str


class TodoAppView:
    """
    Page state plus the actions a user can take on it.

    Use as an async context manager, or call `mount()` / `unmount()`
    yourself; the todo subscription and any preview handle are released on
    unmount.
    """

    def __init__(self, context: ClientContext):
        self.context = context
        self.todos: List[Todo] = []
        self.profile_picture: Optional[str] = None
        self.preview_url: Optional[str] = None
        self.prompt = ""
        self.response = ""
        self.is_loading = False
        self._subscription = None

    async def __aenter__(self) -> "TodoAppView":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.unmount()

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    async def mount(self) -> None:
        """Subscribe to the todo list and load the profile picture."""
        if self._subscription is None:
            self._subscription = await self.context.todos.observe(self._on_todos)
        await self.load_profile_picture()

    async def unmount(self) -> None:
        if self._subscription is not None:
            subscription, self._subscription = self._subscription, None
            await subscription.unsubscribe()
        self._set_preview(None)

    def _on_todos(self, snapshot: List[Todo]) -> None:
        self.todos = list(snapshot)

    # Todos

    async def create_todo(self, content: Optional[str] = None) -> None:
        await self.context.todos.create_todo(content)

    async def delete_todo(self, todo_id: str) -> None:
        await self.context.todos.delete_todo(todo_id)

    # Profile picture

    async def load_profile_picture(self) -> bool:
        """
        Resolve the signed URL of the current user's picture.

        When there is none, `profile_picture` keeps its value and the miss
        is reported on the error channel.

        Returns:
            True if a URL was resolved
        """
        user = self.context.user
        if user is None:
            return False

        try:
            self.profile_picture = await self.context.profiles.get_signed_url(user.id)
        except NotFoundError as e:
            self.context.errors.report(
                ErrorKind.PROFILE_PICTURE_NOT_FOUND, "No profile picture found", e
            )
            return False
        return True

    async def upload_profile_picture(self, file: Optional[SelectedFile]) -> None:
        """
        Show a local preview, upload the file, then switch to the stored copy.

        On upload failure the preview stays up and nothing else changes.
        """
        user = self.context.user
        if file is None or user is None:
            return

        self._set_preview(self.context.previews.create(file.data, file.content_type))

        try:
            await self.context.profiles.upload(user.id, file.data, file.content_type)
        except Exception as e:
            self.context.errors.report(ErrorKind.UPLOAD_FAILED, "Error uploading file", e)
            return

        if await self.load_profile_picture():
            self._set_preview(None)

    def _set_preview(self, url: Optional[str]) -> None:
        if self.preview_url and self.preview_url != url:
            self.context.previews.revoke(self.preview_url)
        self.preview_url = url

    @property
    def displayed_image(self) -> Optional[str]:
        return self.preview_url or self.profile_picture

    # Chat

    @property
    def can_submit(self) -> bool:
        return not self.is_loading

    @property
    def ask_button_label(self) -> str:
        return "Thinking..." if self.is_loading else "Ask"

    async def ask_ai(self, prompt: Optional[str] = None) -> None:
        """
        Send the prompt (or the current input) to the chat endpoint.

        Blank prompts are ignored. Loading flag and input are reset however
        the call ends.
        """
        if prompt is not None:
            self.prompt = prompt
        if not self.prompt.strip():
            return

        self.is_loading = True
        try:
            self.response = await self.context.chat.ask(self.prompt)
        except Exception as e:
            self.context.errors.report(ErrorKind.CHAT_FAILED, "Error asking AI", e)
            self.response = CHAT_ERROR_MESSAGE
        finally:
            self.is_loading = False
            self.prompt = ""

    # Session

    @property
    def heading(self) -> str:
        login_id = self.context.user.login_id if self.context.user else None
        return f"{login_id or ''}'s todos"

    async def sign_out(self) -> None:
        await self.unmount()
        await sign_out(self.context.supabase)
