from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, List, Optional, Set

from .cache import LATEST_NEWS_KEY, CacheEntry, NewsCache
from .config import Settings, settings as default_settings
from .errors import UpstreamError
from .fallback import fallback_items
from .impact import narrate
from .models import FetchResult, NewsItem
from .normalizer import normalize
from .transports import UpstreamTransport

logger = logging.getLogger(__name__)


def _matches(item: NewsItem, q: str) -> bool:
    fields = [item.headline, item.summary, item.category, *item.keywords]
    return any(q in (f or "").lower() for f in fields)


class NewsService:
    """Fetch-or-fallback news source for the dashboard.

    Every public coroutine always resolves with usable data: upstream failures are
    logged and replaced by stale cached data or the demo list, never raised.
    The instance owns its cache; build one per app and pass it around.
    """

    def __init__(
        self,
        transport: UpstreamTransport,
        *,
        settings: Settings = default_settings,
        cache: Optional[NewsCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.transport = transport
        self.settings = settings
        self._clock = clock
        self.cache = cache or NewsCache(clock=clock)
        self.last_result: Optional[FetchResult] = None
        self._background: Set[asyncio.Task] = set()
        # stale real data is served without an upstream attempt until this time
        self._retry_at: Optional[float] = None

    @property
    def degraded(self) -> bool:
        return bool(self.last_result and not self.last_result.ok)

    # --- cache helpers ---

    def _ttl(self, entry: CacheEntry) -> float:
        return self.settings.fallback_ttl if entry.is_fallback else self.settings.cache_ttl

    def _fresh_entry(self) -> Optional[CacheEntry]:
        entry = self.cache.get(LATEST_NEWS_KEY)
        if entry is None:
            return None
        if entry.age(self._clock()) < self._ttl(entry):
            return entry
        return None

    def _stale_real_entry(self) -> Optional[CacheEntry]:
        entry = self.cache.get(LATEST_NEWS_KEY)
        if entry is not None and not entry.is_fallback and entry.data:
            return entry
        return None

    def _retry_pending(self) -> bool:
        return self._retry_at is not None and self._clock() < self._retry_at

    def _mark_failed(self) -> None:
        self._retry_at = self._clock() + self.settings.fallback_ttl

    def _remember(self, result: FetchResult) -> FetchResult:
        self.last_result = result
        return result

    # --- upstream ---

    async def _attempt_upstream(self) -> List[NewsItem]:
        try:
            payload = await asyncio.wait_for(
                self.transport.fetch_payload(),
                timeout=self.settings.upstream_timeout,
            )
        except asyncio.TimeoutError as e:
            raise UpstreamError(
                f"upstream did not answer within {self.settings.upstream_timeout}s",
                kind="timeout",
            ) from e

        items = normalize(payload)
        if not items:
            raise UpstreamError("upstream payload contained no usable news items", kind="shape")
        return items

    async def _fetch_or_fallback(self) -> FetchResult:
        try:
            items = await self._attempt_upstream()
        except UpstreamError as e:
            logger.warning("upstream %s failed (%s): %s", self.transport.kind, e.kind, e)
            return self._on_failure(f"{e.kind}: {e}")
        except Exception as e:
            logger.exception("upstream %s failed unexpectedly: %s", self.transport.kind, e)
            return self._on_failure(f"unexpected: {e}")

        self.cache.set(LATEST_NEWS_KEY, items)
        self._retry_at = None
        logger.info("upstream %s returned %s items", self.transport.kind, len(items))
        return self._remember(FetchResult(ok=True, value=list(items)))

    def _on_failure(self, error: str) -> FetchResult:
        stale = self._stale_real_entry()
        if stale is not None:
            # stale real data beats demo data; upstream is retried once fallback_ttl has passed
            self._mark_failed()
            logger.info("serving stale cached news (%s items)", len(stale.data))
            return self._remember(FetchResult(
                ok=False, value=list(stale.data), from_cache=True, error=error,
            ))

        data = fallback_items()
        self.cache.set(LATEST_NEWS_KEY, data, is_fallback=True)
        return self._remember(FetchResult(ok=False, value=data, used_fallback=True, error=error))

    async def _refresh_once(self) -> None:
        try:
            items = await self._attempt_upstream()
        except Exception as e:
            logger.info("background refresh via %s failed: %s", self.transport.kind, e)
            self._mark_failed()
            return
        self.cache.set(LATEST_NEWS_KEY, items)
        self._retry_at = None
        self._remember(FetchResult(ok=True, value=list(items)))
        logger.info("background refresh stored %s items", len(items))

    def refresh_in_background(self) -> asyncio.Task:
        """Fire-and-forget upstream refresh; failures are logged and dropped."""
        task = asyncio.get_running_loop().create_task(self._refresh_once())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    # --- public API ---

    async def fetch_latest(self) -> FetchResult:
        entry = self._fresh_entry()
        if entry is not None:
            return FetchResult(
                ok=not entry.is_fallback,
                value=list(entry.data),
                used_fallback=entry.is_fallback,
                from_cache=True,
            )

        stale = self._stale_real_entry()
        if stale is not None and self._retry_pending():
            error = self.last_result.error if self.last_result else None
            return FetchResult(ok=False, value=list(stale.data), from_cache=True, error=error)

        if self.settings.serve_fallback_first:
            if not self._background:
                self.refresh_in_background()
            if stale is not None:
                return self._remember(FetchResult(ok=False, value=list(stale.data), from_cache=True))
            data = fallback_items()
            self.cache.set(LATEST_NEWS_KEY, data, is_fallback=True)
            return self._remember(FetchResult(ok=False, value=data, used_fallback=True))

        return await self._fetch_or_fallback()

    async def fetch_latest_news(self) -> List[NewsItem]:
        return (await self.fetch_latest()).value

    async def refresh(self) -> FetchResult:
        """One upstream attempt regardless of cache freshness."""
        return await self._fetch_or_fallback()

    async def search_news(self, query: str) -> List[NewsItem]:
        entry = self.cache.get(LATEST_NEWS_KEY)
        data = list(entry.data) if entry is not None and entry.data else fallback_items()

        q = (query or "").strip().lower()
        matches = [it for it in data if _matches(it, q)]
        if matches:
            return matches[: self.settings.search_limit]
        return data[: self.settings.search_fallback_count]

    async def get_impact_analysis(self, item: Any) -> str:
        return narrate(item)

    def clear_cache(self) -> None:
        self.cache.clear()
        self._retry_at = None

    async def aclose(self) -> None:
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
