from __future__ import annotations

from typing import Callable, Dict, List, Optional

import httpx

from ..config import Settings
from .base import TransportConfig, UpstreamTransport, decode_json_response
from .disabled import DisabledTransport
from .vector import VectorSearchTransport
from .webhook import WebhookTransport
from .workflow import WorkflowTransport


def _webhook(cfg: TransportConfig, s: Settings, ht) -> UpstreamTransport:
    return WebhookTransport(cfg, http_transport=ht)

def _workflow(cfg: TransportConfig, s: Settings, ht) -> UpstreamTransport:
    return WorkflowTransport(cfg, limit=s.upstream_limit, http_transport=ht)

def _vector(cfg: TransportConfig, s: Settings, ht) -> UpstreamTransport:
    return VectorSearchTransport(cfg, query=s.vector_query, limit=s.upstream_limit, http_transport=ht)

def _disabled(cfg: TransportConfig, s: Settings, ht) -> UpstreamTransport:
    return DisabledTransport(cfg, http_transport=ht)


# Registry keyed by UPSTREAM_KIND
REGISTRY: Dict[str, Callable[[TransportConfig, Settings, Optional[httpx.AsyncBaseTransport]], UpstreamTransport]] = {
    "webhook": _webhook,
    "proxy": _webhook,
    "workflow": _workflow,
    "vector": _vector,
    "disabled": _disabled,
}

def list_transport_kinds() -> List[str]:
    return list(REGISTRY.keys())

def build_transport(
    settings: Settings,
    *,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UpstreamTransport:
    kind = (settings.upstream_kind or "").strip().lower()
    try:
        factory = REGISTRY[kind]
    except KeyError:
        raise KeyError(f"Unknown upstream kind: {settings.upstream_kind}")
    cfg = TransportConfig(
        name=f"{kind}:{settings.upstream_url}",
        kind=kind,
        url=settings.upstream_url,
        timeout_s=settings.upstream_timeout,
        user_agent=settings.user_agent,
    )
    return factory(cfg, settings, http_transport)


__all__ = [
    "DisabledTransport",
    "TransportConfig",
    "UpstreamTransport",
    "VectorSearchTransport",
    "WebhookTransport",
    "WorkflowTransport",
    "build_transport",
    "decode_json_response",
    "list_transport_kinds",
]
