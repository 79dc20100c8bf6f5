from __future__ import annotations

from typing import Any

from .base import UpstreamTransport


class WebhookTransport(UpstreamTransport):
    """Plain GET against a webhook (or against our own /api/news proxy)."""

    async def fetch_payload(self) -> Any:
        return await self._request("GET")
