from __future__ import annotations

from typing import Any, Optional

import httpx

from ..models import CATEGORIES
from .base import TransportConfig, UpstreamTransport


class WorkflowTransport(UpstreamTransport):
    """POSTs an action envelope to a workflow endpoint (n8n style)."""

    def __init__(
        self,
        config: TransportConfig,
        *,
        limit: int = 10,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config, http_transport=http_transport)
        self.limit = limit

    async def fetch_payload(self) -> Any:
        body = {
            "action": "get_latest_news",
            "limit": self.limit,
            "categories": list(CATEGORIES),
        }
        return await self._request("POST", json_body=body)
