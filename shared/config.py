"""
Environment-backed settings for the client app and the chat function.
"""

import os

DEFAULT_STORAGE_BUCKET = "profile-pictures"
DEFAULT_CHAT_ENDPOINT_URL = "http://localhost:7071/api/chat"
DEFAULT_CHAT_MODEL_URL = "https://api.openai.com/v1"
DEFAULT_CHAT_MODEL = "gpt-4o-mini"


def get_supabase_url() -> str:
    """Get the Supabase URL from environment variables."""
    url = os.environ.get("SUPABASE_URL")
    if not url:
        raise ValueError("SUPABASE_URL environment variable not set")
    return url.rstrip('/')


def get_supabase_anon_key() -> str:
    """Get the Supabase public (anon) key used by the client app."""
    key = os.environ.get("SUPABASE_ANON_KEY")
    if not key:
        raise ValueError("SUPABASE_ANON_KEY environment variable not set")
    return key


def get_storage_bucket() -> str:
    """Get the Supabase storage bucket holding profile pictures."""
    return os.environ.get("SUPABASE_STORAGE_BUCKET", DEFAULT_STORAGE_BUCKET)


def get_chat_endpoint_url() -> str:
    """Get the URL of the chat function as seen by the client app."""
    return os.environ.get("CHAT_ENDPOINT_URL", DEFAULT_CHAT_ENDPOINT_URL)


def get_chat_api_key() -> str:
    """
    Get the chat model API key.

    Held as an app setting (or Key Vault reference) on the function app only.
    """
    key = os.environ.get("CHAT_API_KEY")
    if not key:
        raise ValueError("CHAT_API_KEY environment variable not set")
    return key


def get_chat_model_url() -> str:
    return os.environ.get("CHAT_MODEL_URL", DEFAULT_CHAT_MODEL_URL).rstrip('/')


def get_chat_model() -> str:
    return os.environ.get("CHAT_MODEL", DEFAULT_CHAT_MODEL)


def chat_requires_auth() -> bool:
    """Whether POST /api/chat demands a Supabase bearer token."""
    value = os.environ.get("CHAT_REQUIRE_AUTH", "true")
    return value.strip().lower() not in ("0", "false", "no", "off")
