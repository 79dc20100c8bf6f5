from __future__ import annotations

from typing import Any, Optional

import httpx

from .base import TransportConfig, UpstreamTransport


class VectorSearchTransport(UpstreamTransport):
    """Queries a vector-search endpoint; rows usually carry a `similarity` score.

    Those provider scores end up as relevance_score as-is (score_source="provider").
    """

    def __init__(
        self,
        config: TransportConfig,
        *,
        query: str,
        limit: int = 10,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config, http_transport=http_transport)
        self.query = query
        self.limit = limit

    async def fetch_payload(self) -> Any:
        return await self._request("POST", json_body={"query": self.query, "limit": self.limit})
