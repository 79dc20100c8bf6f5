from contextlib import asynccontextmanager
from typing import List
import logging

from fastapi import FastAPI, Query, Request

from .config import Settings, settings
from .logging_setup import setup_logging
from .models import FetchResult, ImpactIn, NewsItem
from .proxy import router as proxy_router
from .scheduler import start_refresh_scheduler
from .service import NewsService
from .transports import build_transport

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # tests (or an embedding app) may install their own settings and service first
    if getattr(app.state, "settings", None) is None:
        app.state.settings = settings
    cfg: Settings = app.state.settings
    setup_logging(cfg.log_level)
    if getattr(app.state, "news_service", None) is None:
        app.state.news_service = NewsService(build_transport(cfg), settings=cfg)
    service: NewsService = app.state.news_service
    logger.info("startup upstream=%s url=%s", service.transport.kind, cfg.upstream_url)

    sched = start_refresh_scheduler(service, cfg.refresh_every_sec)
    try:
        yield
    finally:
        if sched is not None:
            sched.shutdown(wait=False)
        await service.aclose()


app = FastAPI(title="TechRadar News API", version="1.0.0", lifespan=lifespan)
app.include_router(proxy_router)


def _service(request: Request) -> NewsService:
    return request.app.state.news_service


def _dump(items: List[NewsItem]) -> List[dict]:
    return [it.model_dump(by_alias=True) for it in items]


def _news_payload(result: FetchResult) -> dict:
    return {
        "ok": True,
        "n": len(result.value),
        "used_fallback": result.used_fallback,
        "from_cache": result.from_cache,
        "items": _dump(result.value),
    }


@app.get("/health")
def health(request: Request):
    service = _service(request)
    return {"ok": True, "degraded": service.degraded, "upstream": service.transport.kind}


@app.get("/news")
async def news(request: Request):
    result = await _service(request).fetch_latest()
    return _news_payload(result)


@app.post("/news/refresh")
async def news_refresh(request: Request):
    """Manual refresh: one upstream attempt, ignoring cache freshness."""
    result = await _service(request).refresh()
    return _news_payload(result)


@app.get("/news/search")
async def news_search(request: Request, q: str = Query("", max_length=500)):
    items = await _service(request).search_news(q)
    return {"ok": True, "n": len(items), "items": _dump(items)}


@app.post("/news/impact")
async def news_impact(request: Request, item: ImpactIn):
    impact = await _service(request).get_impact_analysis(item)
    return {"ok": True, "impact": impact}


@app.delete("/news/cache")
def news_cache_clear(request: Request):
    _service(request).clear_cache()
    return {"ok": True}
