from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ..errors import UpstreamError

DEFAULT_HEADERS = {
    "Accept": "application/json",
    # ngrok tunnels answer browsers with an HTML interstitial unless told otherwise
    "ngrok-skip-browser-warning": "true",
}


@dataclass(frozen=True)
class TransportConfig:
    name: str
    kind: str  # "webhook" | "proxy" | "workflow" | "vector" | "disabled"
    url: str
    timeout_s: float = 10.0
    user_agent: str = "TechRadar-Server/1.0"
    headers: Dict[str, str] = field(default_factory=dict)


def decode_json_response(resp: httpx.Response) -> Any:
    """Decode an upstream response body, classifying everything that is not usable JSON."""
    if not resp.is_success:
        raise UpstreamError(
            f"upstream returned HTTP {resp.status_code}",
            kind="status",
            status_code=resp.status_code,
            detail=(resp.text or "").strip()[:500],
        )

    text = resp.text or ""
    if not text.strip():
        raise UpstreamError("upstream returned an empty body", kind="empty", status_code=resp.status_code)

    try:
        return json.loads(text)
    except ValueError as e:
        raise UpstreamError(
            f"upstream returned non-JSON body: {e}",
            kind="parse",
            status_code=resp.status_code,
            detail=text[:500],
        ) from e


class UpstreamTransport:
    """Strategy for "fetch news from somewhere".

    Subclasses implement `fetch_payload`, returning decoded JSON or raising UpstreamError.
    """

    config: TransportConfig

    def __init__(self, config: TransportConfig, *, http_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._http_transport = http_transport

    @property
    def kind(self) -> str:
        return self.config.kind

    def _headers(self) -> Dict[str, str]:
        return {**DEFAULT_HEADERS, "User-Agent": self.config.user_agent, **self.config.headers}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers(),
            timeout=httpx.Timeout(self.config.timeout_s, connect=self.config.timeout_s),
            follow_redirects=True,
            transport=self._http_transport,
        )

    async def _request(self, method: str, *, json_body: Any = None) -> Any:
        try:
            async with self._client() as client:
                resp = await client.request(method, self.config.url, json=json_body)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"upstream timed out: {e}", kind="timeout") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"upstream request failed: {e}", kind="network") from e
        return decode_json_response(resp)

    async def fetch_payload(self) -> Any:
        raise NotImplementedError
