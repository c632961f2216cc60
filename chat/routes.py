"""
HTTP route handlers for the chat endpoint.
"""

import logging
from typing import Callable, Optional
import azure.functions as func

from shared.auth import get_user_from_token, UnauthorizedError
from shared.config import chat_requires_auth
from shared.errors import UpstreamError
from shared.responses import (
    success_response, error_response, unauthorized_response,
    validation_error_response, bad_gateway_response, internal_error_response
)
from .service import ChatService

logger = logging.getLogger(__name__)


async def handle_chat_request(
    req: func.HttpRequest,
    service_factory: Callable[[], ChatService] = ChatService,
    require_auth: Optional[bool] = None
) -> func.HttpResponse:
    """
    POST /api/chat
    Body {"prompt": str} -> {"response": str}.
    """
    try:
        if require_auth is None:
            require_auth = chat_requires_auth()
        if require_auth:
            get_user_from_token(req)

        try:
            body = req.get_json()
        except ValueError:
            return error_response("Invalid JSON body", 400)

        prompt = body.get("prompt") if isinstance(body, dict) else None
        if not isinstance(prompt, str) or not prompt.strip():
            return validation_error_response(
                [{"field": "prompt", "message": "Prompt is required"}]
            )

        service = service_factory()
        reply = await service.ask(prompt)

        return success_response({"response": reply})

    except UnauthorizedError as e:
        return unauthorized_response(str(e))
    except UpstreamError as e:
        logger.error(f"Chat model error: {str(e)}")
        return bad_gateway_response("Failed to get a reply from the chat model")
    except Exception as e:
        logger.error(f"Error handling chat request: {str(e)}")
        return internal_error_response("Failed to process chat request")


def register_chat_routes(app: func.FunctionApp):
    """Register the chat route with the function app."""

    @app.route(route="chat", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
    async def chat(req: func.HttpRequest) -> func.HttpResponse:
        return await handle_chat_request(req)
