"""
Explicit dependencies of the client app view.
"""

from dataclasses import dataclass, field
from typing import Optional

from chat.client import ChatApiClient
from profiles.service import ProfilePictureService
from shared.auth import AuthenticatedUser, get_current_user
from shared.config import get_storage_bucket, get_chat_endpoint_url
from shared.errors import ErrorChannel
from shared.supabase_client import create_supabase_client
from todos.service import TodoService
from .previews import PreviewRegistry


@dataclass
class ClientContext:
    """Everything the view talks to, constructed once and passed in."""

    supabase: object
    user: Optional[AuthenticatedUser]
    todos: TodoService
    profiles: ProfilePictureService
    chat: ChatApiClient
    previews: PreviewRegistry = field(default_factory=PreviewRegistry)
    errors: ErrorChannel = field(default_factory=ErrorChannel)


def build_context(
    supabase,
    user: Optional[AuthenticatedUser],
    storage_bucket: Optional[str] = None,
    chat_endpoint_url: Optional[str] = None,
    realtime: bool = True
) -> ClientContext:
    """Wire the services around an existing Supabase client."""
    return ClientContext(
        supabase=supabase,
        user=user,
        todos=TodoService(supabase, realtime=realtime),
        profiles=ProfilePictureService(supabase, storage_bucket or get_storage_bucket()),
        chat=ChatApiClient(
            chat_endpoint_url or get_chat_endpoint_url(),
            access_token=user.access_token if user else None
        ),
    )


async def create_client_context(email: str, password: str) -> ClientContext:
    """
    Sign in with email/password and build a context from environment settings.
    """
    supabase = await create_supabase_client()
    await supabase.auth.sign_in_with_password({"email": email, "password": password})
    user = await get_current_user(supabase)
    return build_context(supabase, user)
