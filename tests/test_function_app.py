import json
import unittest

import azure.functions as func

import function_app


class HealthCheckTests(unittest.TestCase):
    def test_health_check_reports_healthy(self):
        req = func.HttpRequest(method="GET", url="/api/health", body=b"")
        handler = function_app.health_check.build().get_user_function()

        resp = handler(req)

        self.assertEqual(resp.status_code, 200)
        body = json.loads(resp.get_body())
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["service"], "Todo Companion Chat")


if __name__ == "__main__":
    unittest.main()
