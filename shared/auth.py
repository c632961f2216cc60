"""
Supabase Auth helpers.

Server side: JWT validation for the chat function, supporting both HS256
(legacy secret) and ES256 (JWKS) tokens.
Client side: resolving the signed-in user from a Supabase session.
"""

import base64
import logging
import os
from dataclasses import dataclass
from typing import Optional

import azure.functions as func
import jwt
from jwt import PyJWKClient

from .config import get_supabase_url

logger = logging.getLogger(__name__)

# Cache the JWKS client to avoid repeated fetches
_jwks_client: Optional[PyJWKClient] = None


class UnauthorizedError(Exception):
    """Raised when authentication fails."""
    pass


@dataclass(frozen=True)
class AuthenticatedUser:
    """The signed-in user as seen by the client app."""

    id: str
    login_id: Optional[str] = None
    access_token: Optional[str] = None


def get_jwks_client() -> PyJWKClient:
    """Get or create the JWKS client for ES256 token verification."""
    global _jwks_client
    if _jwks_client is None:
        jwks_url = f"{get_supabase_url()}/auth/v1/.well-known/jwks.json"
        logger.info(f"Initializing JWKS client with URL: {jwks_url}")
        _jwks_client = PyJWKClient(jwks_url, cache_keys=True)
    return _jwks_client


def get_user_from_token(req: func.HttpRequest) -> dict:
    """
    Validate the bearer token of a chat request.

    Returns:
        dict with user info: {"id": str, "email": str}

    Raises:
        UnauthorizedError: If the token is missing, expired, or invalid
    """
    auth_header = req.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise UnauthorizedError("Missing or invalid Authorization header")

    try:
        payload = _decode_token(auth_header[7:])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except jwt.InvalidAudienceError:
        raise UnauthorizedError("Invalid token audience")
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected chat token: {str(e)}")
        raise UnauthorizedError("Invalid token")

    return {"id": payload["sub"], "email": payload.get("email")}


def _decode_token(token: str) -> dict:
    """Verify a Supabase access token with the key matching its algorithm."""
    try:
        token_alg = jwt.get_unverified_header(token).get("alg")
    except jwt.DecodeError:
        raise UnauthorizedError("Invalid token format")

    if token_alg == "ES256":
        key = get_jwks_client().get_signing_key_from_jwt(token).key
    elif token_alg == "HS256":
        key = _hs256_secret()
    else:
        raise UnauthorizedError(f"Unsupported token algorithm: {token_alg}")

    return jwt.decode(
        token,
        key,
        algorithms=[token_alg],
        audience="authenticated",
        options={"require": ["sub", "exp", "aud"]}
    )


def _hs256_secret() -> bytes:
    secret = os.environ.get("SUPABASE_JWT_SECRET")
    if not secret:
        raise UnauthorizedError("HS256 tokens are not accepted: SUPABASE_JWT_SECRET not set")

    # Supabase dashboards hand out the secret either raw or base64 encoded
    if secret.endswith('='):
        try:
            return base64.b64decode(secret)
        except ValueError:
            pass
    return secret.encode('utf-8')


async def get_current_user(client) -> AuthenticatedUser:
    """
    Resolve the signed-in user from the client's Supabase session.

    Args:
        client: Supabase AsyncClient with an active session

    Raises:
        UnauthorizedError: If nobody is signed in
    """
    session = await client.auth.get_session()
    if session is None or session.user is None:
        raise UnauthorizedError("No active session")

    user = session.user
    login_id = user.email or (user.user_metadata or {}).get("username")
    return AuthenticatedUser(
        id=user.id,
        login_id=login_id,
        access_token=session.access_token
    )


async def sign_out(client) -> None:
    """End the Supabase session."""
    await client.auth.sign_out()
    logger.info("Signed out")
