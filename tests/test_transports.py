import json
import unittest

import httpx

from services.radar.app.config import Settings
from services.radar.app.errors import UpstreamError
from services.radar.app.models import CATEGORIES
from services.radar.app.transports import (
    DisabledTransport,
    TransportConfig,
    VectorSearchTransport,
    WebhookTransport,
    WorkflowTransport,
    build_transport,
    list_transport_kinds,
)

URL = "http://upstream.test/webhook/news"


def _cfg(kind="webhook", **kw):
    return TransportConfig(name="test", kind=kind, url=URL, **kw)


class Recorder:
    """MockTransport handler that remembers the last request."""

    def __init__(self, response: httpx.Response = None, exc: Exception = None):
        self.response = response or httpx.Response(200, json=[{"title": "x"}])
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def mock(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class TestRequestShapes(unittest.IsolatedAsyncioTestCase):
    async def test_webhook_issues_get_with_default_headers(self):
        rec = Recorder()
        t = WebhookTransport(_cfg(user_agent="UA/1"), http_transport=rec.mock)

        payload = await t.fetch_payload()

        self.assertEqual(payload, [{"title": "x"}])
        req = rec.requests[0]
        self.assertEqual(req.method, "GET")
        self.assertEqual(str(req.url), URL)
        self.assertEqual(req.headers["accept"], "application/json")
        self.assertEqual(req.headers["ngrok-skip-browser-warning"], "true")
        self.assertEqual(req.headers["user-agent"], "UA/1")

    async def test_extra_headers_are_sent(self):
        rec = Recorder()
        t = WebhookTransport(_cfg(headers={"X-Api-Key": "k"}), http_transport=rec.mock)
        await t.fetch_payload()
        self.assertEqual(rec.requests[0].headers["x-api-key"], "k")

    async def test_workflow_posts_action_envelope(self):
        rec = Recorder()
        t = WorkflowTransport(_cfg("workflow"), limit=7, http_transport=rec.mock)

        await t.fetch_payload()

        req = rec.requests[0]
        self.assertEqual(req.method, "POST")
        self.assertEqual(
            json.loads(req.content),
            {"action": "get_latest_news", "limit": 7, "categories": list(CATEGORIES)},
        )

    async def test_vector_posts_query(self):
        rec = Recorder(httpx.Response(200, json=[{"title": "x", "similarity": 0.91}]))
        t = VectorSearchTransport(_cfg("vector"), query="grid storage", limit=3, http_transport=rec.mock)

        payload = await t.fetch_payload()

        self.assertEqual(json.loads(rec.requests[0].content), {"query": "grid storage", "limit": 3})
        self.assertEqual(payload[0]["similarity"], 0.91)


class TestFailureKinds(unittest.IsolatedAsyncioTestCase):
    async def _kind_of(self, rec: Recorder) -> UpstreamError:
        t = WebhookTransport(_cfg(), http_transport=rec.mock)
        with self.assertRaises(UpstreamError) as ctx:
            await t.fetch_payload()
        return ctx.exception

    async def test_non_2xx_is_status(self):
        e = await self._kind_of(Recorder(httpx.Response(503, text="maintenance")))
        self.assertEqual(e.kind, "status")
        self.assertEqual(e.status_code, 503)
        self.assertEqual(e.detail, "maintenance")

    async def test_blank_body_is_empty(self):
        e = await self._kind_of(Recorder(httpx.Response(200, text="  \n")))
        self.assertEqual(e.kind, "empty")

    async def test_invalid_json_is_parse(self):
        e = await self._kind_of(Recorder(httpx.Response(200, text="<html>oops</html>")))
        self.assertEqual(e.kind, "parse")
        self.assertEqual(e.detail, "<html>oops</html>")
        self.assertIsInstance(e.__cause__, ValueError)

    async def test_connect_error_is_network(self):
        e = await self._kind_of(Recorder(exc=httpx.ConnectError("refused")))
        self.assertEqual(e.kind, "network")

    async def test_read_timeout_is_timeout(self):
        e = await self._kind_of(Recorder(exc=httpx.ReadTimeout("slow")))
        self.assertEqual(e.kind, "timeout")

    async def test_disabled_never_calls_network(self):
        rec = Recorder()
        t = DisabledTransport(_cfg("disabled"), http_transport=rec.mock)
        with self.assertRaises(UpstreamError) as ctx:
            await t.fetch_payload()
        self.assertEqual(ctx.exception.kind, "disabled")
        self.assertEqual(rec.requests, [])


class TestBuildTransport(unittest.TestCase):
    def test_kinds(self):
        expected = {
            "webhook": WebhookTransport,
            "proxy": WebhookTransport,
            "workflow": WorkflowTransport,
            "vector": VectorSearchTransport,
            "disabled": DisabledTransport,
        }
        self.assertEqual(sorted(list_transport_kinds()), sorted(expected))
        for kind, cls in expected.items():
            with self.subTest(kind=kind):
                t = build_transport(Settings(upstream_kind=kind, upstream_url=URL))
                self.assertIsInstance(t, cls)
                self.assertEqual(t.kind, kind)
                self.assertEqual(t.config.url, URL)

    def test_kind_is_case_insensitive(self):
        t = build_transport(Settings(upstream_kind=" Workflow ", upstream_limit=4))
        self.assertIsInstance(t, WorkflowTransport)
        self.assertEqual(t.limit, 4)

    def test_settings_flow_into_config(self):
        s = Settings(upstream_kind="vector", upstream_timeout=2.5, user_agent="UA/2", vector_query="q")
        t = build_transport(s)
        self.assertEqual(t.config.timeout_s, 2.5)
        self.assertEqual(t.config.user_agent, "UA/2")
        self.assertEqual(t.query, "q")

    def test_unknown_kind_raises(self):
        with self.assertRaises(KeyError):
            build_transport(Settings(upstream_kind="carrier-pigeon"))


if __name__ == "__main__":
    unittest.main()
