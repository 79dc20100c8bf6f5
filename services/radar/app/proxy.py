from __future__ import annotations

import logging
from typing import Dict

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .errors import UpstreamError
from .transports import decode_json_response
from .transports.base import DEFAULT_HEADERS
from .utils import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or default_settings


def _client(request: Request, s: Settings) -> httpx.AsyncClient:
    # app.state.proxy_transport lets tests (or an embedding app) swap the HTTP layer
    return httpx.AsyncClient(
        timeout=httpx.Timeout(s.upstream_timeout, connect=s.upstream_timeout),
        follow_redirects=True,
        transport=getattr(request.app.state, "proxy_transport", None),
    )


def _upstream_headers(user_agent: str) -> Dict[str, str]:
    return {**DEFAULT_HEADERS, "User-Agent": user_agent}


@router.get("/news")
async def news_proxy(request: Request):
    """Relay the upstream webhook so browsers do not hit its CORS policy."""
    s = _settings(request)
    url = s.proxy_upstream_url
    logger.info("proxying news request to %s", url)
    try:
        async with _client(request, s) as client:
            r = await client.get(url, headers=_upstream_headers(s.user_agent))
        logger.info("webhook status=%s content_type=%s len=%s",
                    r.status_code, r.headers.get("content-type"), len(r.content))

        try:
            data = decode_json_response(r)
        except UpstreamError as e:
            if e.kind == "empty":
                logger.warning("empty response from webhook")
                return JSONResponse(status_code=200, content=[])
            if e.kind == "status":
                logger.error("webhook error: %s %s", r.status_code, r.reason_phrase)
                return JSONResponse(
                    status_code=r.status_code,
                    content={
                        "error": "Webhook request failed",
                        "status": r.status_code,
                        "statusText": r.reason_phrase,
                    },
                )
            logger.error("webhook returned invalid JSON: %s", e)
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Invalid JSON response from webhook",
                    "details": str(e.__cause__ or e),
                    "responsePreview": (e.detail or "")[:500],
                },
            )

        return JSONResponse(content=data, headers=CORS_HEADERS)
    except Exception as e:
        logger.exception("news proxy failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(e) or type(e).__name__,
                "timestamp": utc_now_iso(),
            },
        )


@router.get("/webhook-test")
async def webhook_test(request: Request):
    """Diagnostics: show exactly what the upstream webhook answers."""
    s = _settings(request)
    url = s.proxy_upstream_url
    headers = _upstream_headers("TechRadar-Test/1.0")
    logger.info("testing webhook connection to %s", url)
    try:
        async with _client(request, s) as client:
            r = await client.get(url, headers=headers)
    except Exception as e:
        logger.error("webhook test failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e) or type(e).__name__, "timestamp": utc_now_iso()},
        )

    body = r.text or ""
    return {
        "success": r.is_success,
        "status": r.status_code,
        "statusText": r.reason_phrase,
        "headers": dict(r.headers),
        "body": body,
        "bodyLength": len(body),
        "isJson": "application/json" in (r.headers.get("content-type") or ""),
        "timestamp": utc_now_iso(),
    }
