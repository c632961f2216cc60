import json
import os
import time
import unittest
from unittest.mock import patch

import azure.functions as func
import jwt
from aiohttp import web
from aiohttp import test_utils

from chat.routes import handle_chat_request
from chat.service import ChatService
from shared.ai_client import ChatModelClient
from shared.errors import UpstreamError

JWT_SECRET = "test-secret-for-hs256-tokens-0123456789"


def make_request(body, token=None):
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return func.HttpRequest(method="POST", url="/api/chat", headers=headers, body=raw)


def make_token(**overrides):
    claims = {"sub": "user-1", "aud": "authenticated", "exp": int(time.time()) + 300}
    claims.update(overrides)
    return jwt.encode(claims, JWT_SECRET, algorithm="HS256")


class FakeModel:
    def __init__(self, reply="model says hi", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class ChatRouteTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.model = FakeModel()
        self.factory = lambda: ChatService(self.model)

    async def test_returns_model_reply(self):
        resp = await handle_chat_request(make_request({"prompt": "hello"}), self.factory, require_auth=False)

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp.get_body()), {"response": "model says hi"})
        self.assertEqual(self.model.prompts, ["hello"])

    async def test_blank_prompt_is_rejected(self):
        resp = await handle_chat_request(make_request({"prompt": "  "}), self.factory, require_auth=False)

        self.assertEqual(resp.status_code, 422)
        self.assertEqual(json.loads(resp.get_body())["errors"][0]["field"], "prompt")
        self.assertEqual(self.model.prompts, [])

    async def test_invalid_json_is_rejected(self):
        resp = await handle_chat_request(make_request(b"{not json"), self.factory, require_auth=False)
        self.assertEqual(resp.status_code, 400)

    async def test_upstream_failure_maps_to_bad_gateway(self):
        self.model.error = UpstreamError("quota exceeded")

        resp = await handle_chat_request(make_request({"prompt": "hello"}), self.factory, require_auth=False)

        self.assertEqual(resp.status_code, 502)
        self.assertNotIn("quota", resp.get_body().decode("utf-8"))

    async def test_unexpected_failure_maps_to_internal_error(self):
        self.model.error = RuntimeError("boom")
        resp = await handle_chat_request(make_request({"prompt": "hello"}), self.factory, require_auth=False)
        self.assertEqual(resp.status_code, 500)

    async def test_missing_token_is_unauthorized(self):
        resp = await handle_chat_request(make_request({"prompt": "hello"}), self.factory, require_auth=True)

        self.assertEqual(resp.status_code, 401)
        self.assertEqual(self.model.prompts, [])

    @patch.dict(os.environ, {"SUPABASE_JWT_SECRET": JWT_SECRET})
    async def test_valid_token_is_accepted(self):
        resp = await handle_chat_request(
            make_request({"prompt": "hello"}, token=make_token()), self.factory, require_auth=True
        )
        self.assertEqual(resp.status_code, 200)

    @patch.dict(os.environ, {"SUPABASE_JWT_SECRET": JWT_SECRET, "CHAT_REQUIRE_AUTH": "false"})
    async def test_auth_requirement_read_from_settings(self):
        resp = await handle_chat_request(make_request({"prompt": "hello"}), self.factory)
        self.assertEqual(resp.status_code, 200)


class ChatModelClientTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.calls = []
        self.status = 200
        self.body = {"choices": [{"message": {"role": "assistant", "content": "42"}}]}

        async def completions(request):
            self.calls.append({
                "json": await request.json(),
                "authorization": request.headers.get("Authorization"),
            })
            return web.json_response(self.body, status=self.status)

        app = web.Application()
        app.router.add_post("/v1/chat/completions", completions)
        self.server = test_utils.TestServer(app)
        await self.server.start_server()
        self.client = ChatModelClient(
            api_key="sk-test",
            base_url=str(self.server.make_url("/v1")),
            model="test-model",
        )

    async def asyncTearDown(self):
        await self.server.close()

    async def test_complete_sends_prompt_with_secret(self):
        reply = await self.client.complete("meaning of life?")

        self.assertEqual(reply, "42")
        self.assertEqual(self.calls[0]["authorization"], "Bearer sk-test")
        self.assertEqual(self.calls[0]["json"], {
            "model": "test-model",
            "messages": [{"role": "user", "content": "meaning of life?"}],
        })

    async def test_error_status_raises_upstream_error(self):
        self.status = 429
        self.body = {"error": {"message": "rate limited"}}

        with self.assertRaises(UpstreamError) as ctx:
            await self.client.complete("hi")
        self.assertIn("rate limited", str(ctx.exception))

    async def test_malformed_reply_raises_upstream_error(self):
        self.body = {"choices": []}
        with self.assertRaises(UpstreamError):
            await self.client.complete("hi")

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_api_key_is_a_configuration_error(self):
        with self.assertRaises(ValueError):
            ChatModelClient()


if __name__ == "__main__":
    unittest.main()
