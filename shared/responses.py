"""
JSON response helpers for the function app.
"""

import json
from typing import Any, Optional, Dict, List
import azure.functions as func

JSON_HEADERS = {"Content-Type": "application/json"}


def success_response(data: Any, status_code: int = 200) -> func.HttpResponse:
    """
    Create a successful JSON response.

    Args:
        data: Response data to serialize
        status_code: HTTP status code (default: 200)
    """
    return func.HttpResponse(
        json.dumps(data),
        status_code=status_code,
        mimetype="application/json",
        headers=JSON_HEADERS
    )


def error_response(
    message: str,
    status_code: int = 400,
    errors: Optional[List[Dict]] = None
) -> func.HttpResponse:
    """
    Create an error JSON response of the form {"error": true, "message": ...}.

    Args:
        message: Error message
        status_code: HTTP status code (default: 400)
        errors: Optional list of detailed errors
    """
    error_body = {
        "error": True,
        "message": message,
    }

    if errors:
        error_body["errors"] = errors

    return func.HttpResponse(
        json.dumps(error_body),
        status_code=status_code,
        mimetype="application/json",
        headers=JSON_HEADERS
    )


def unauthorized_response(message: str = "Authentication required") -> func.HttpResponse:
    return error_response(message, status_code=401)


def validation_error_response(
    errors: List[Dict[str, Any]],
    message: str = "Validation failed"
) -> func.HttpResponse:
    """Create a 422 response listing field errors."""
    return error_response(message, status_code=422, errors=errors)


def bad_gateway_response(message: str = "Upstream service failed") -> func.HttpResponse:
    return error_response(message, status_code=502)


def internal_error_response(message: str = "Internal server error") -> func.HttpResponse:
    return error_response(message, status_code=500)
