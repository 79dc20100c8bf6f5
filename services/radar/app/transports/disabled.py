from __future__ import annotations

from typing import Any

from ..errors import UpstreamError
from .base import UpstreamTransport


class DisabledTransport(UpstreamTransport):
    """Fallback-only deployments: every fetch fails, so demo data is served."""

    async def fetch_payload(self) -> Any:
        raise UpstreamError("upstream is disabled", kind="disabled")
