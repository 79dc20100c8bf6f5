import unittest

import httpx
from fastapi.testclient import TestClient

from services.radar.app.config import Settings
from services.radar.app.main import app

WEBHOOK_URL = "http://webhook.test/webhook/news"


class ProxyTestCase(unittest.TestCase):
    def setUp(self):
        self.requests = []
        self.respond = lambda request: httpx.Response(200, json=[])
        app.state.settings = Settings(
            proxy_upstream_url=WEBHOOK_URL, user_agent="TechRadar-Server/9.9", upstream_timeout=5,
        )
        app.state.proxy_transport = httpx.MockTransport(self._handle)
        self.client = TestClient(app)

    def tearDown(self):
        app.state.settings = None
        app.state.proxy_transport = None

    def _handle(self, request):
        self.requests.append(request)
        return self.respond(request)


class TestNewsProxy(ProxyTestCase):
    def test_relays_json_with_cors_headers(self):
        self.respond = lambda request: httpx.Response(200, json={"data": [{"title": "Grid battery deal"}]})

        r = self.client.get("/api/news")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"data": [{"title": "Grid battery deal"}]})
        self.assertEqual(r.headers["access-control-allow-origin"], "*")
        self.assertIn("GET", r.headers["access-control-allow-methods"])

    def test_uses_installed_settings_for_upstream_request(self):
        self.client.get("/api/news")

        req = self.requests[0]
        self.assertEqual(str(req.url), WEBHOOK_URL)
        self.assertEqual(req.headers["user-agent"], "TechRadar-Server/9.9")
        self.assertEqual(req.headers["ngrok-skip-browser-warning"], "true")
        self.assertEqual(req.headers["accept"], "application/json")

    def test_upstream_error_status_is_relayed(self):
        self.respond = lambda request: httpx.Response(503, text="down")

        r = self.client.get("/api/news")

        self.assertEqual(r.status_code, 503)
        self.assertEqual(
            r.json(),
            {"error": "Webhook request failed", "status": 503, "statusText": "Service Unavailable"},
        )

    def test_empty_body_becomes_empty_list(self):
        self.respond = lambda request: httpx.Response(200, text="")

        r = self.client.get("/api/news")

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [])

    def test_invalid_json_is_500_with_preview(self):
        body = "<html>" + "x" * 600
        self.respond = lambda request: httpx.Response(200, text=body)

        r = self.client.get("/api/news")

        self.assertEqual(r.status_code, 500)
        data = r.json()
        self.assertEqual(data["error"], "Invalid JSON response from webhook")
        self.assertTrue(data["details"])
        self.assertEqual(data["responsePreview"], body[:500])

    def test_network_failure_is_internal_error(self):
        def refuse(request):
            raise httpx.ConnectError("refused")

        self.respond = refuse

        r = self.client.get("/api/news")

        self.assertEqual(r.status_code, 500)
        data = r.json()
        self.assertEqual(data["error"], "Internal server error")
        self.assertIn("refused", data["message"])
        self.assertIn("timestamp", data)


class TestWebhookDiagnostics(ProxyTestCase):
    def test_reports_upstream_answer(self):
        self.respond = lambda request: httpx.Response(
            200, text="[1,2]", headers={"content-type": "application/json"},
        )

        r = self.client.get("/api/webhook-test")

        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["status"], 200)
        self.assertEqual(data["statusText"], "OK")
        self.assertEqual(data["body"], "[1,2]")
        self.assertEqual(data["bodyLength"], 5)
        self.assertTrue(data["isJson"])
        self.assertIn("content-type", data["headers"])
        self.assertEqual(str(self.requests[0].url), WEBHOOK_URL)
        self.assertEqual(self.requests[0].headers["user-agent"], "TechRadar-Test/1.0")

    def test_non_2xx_is_reported_not_raised(self):
        self.respond = lambda request: httpx.Response(404, text="nope")

        r = self.client.get("/api/webhook-test")

        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertFalse(data["success"])
        self.assertEqual(data["status"], 404)
        self.assertEqual(data["body"], "nope")
        self.assertFalse(data["isJson"])

    def test_connection_failure(self):
        def refuse(request):
            raise httpx.ConnectError("no route")

        self.respond = refuse

        r = self.client.get("/api/webhook-test")

        self.assertEqual(r.status_code, 500)
        data = r.json()
        self.assertFalse(data["success"])
        self.assertIn("no route", data["error"])


if __name__ == "__main__":
    unittest.main()
