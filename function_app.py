"""
Todo Companion - Azure Functions Application

Hosts the chat endpoint used by the todo app's "Ask AI" panel. The chat
model credential lives in the function app settings and never reaches the
client.
"""

import azure.functions as func
import datetime
import json
import logging
import os

from chat.routes import register_chat_routes

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


@app.route(route="health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint to verify the Azure Function is running."""
    logger.info("Health check endpoint called.")

    health_status = {
        "status": "healthy",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "service": "Todo Companion Chat",
        "version": "1.0.0",
        "environment": os.environ.get("AZURE_FUNCTIONS_ENVIRONMENT", "Development")
    }

    return func.HttpResponse(
        json.dumps(health_status),
        status_code=200,
        mimetype="application/json"
    )


register_chat_routes(app)
