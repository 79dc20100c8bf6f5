from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .models import NewsItem

LATEST_NEWS_KEY = "latest_news"


@dataclass(frozen=True)
class CacheEntry:
    data: List[NewsItem]
    stored_at: float
    is_fallback: bool = False

    def age(self, now: float) -> float:
        return now - self.stored_at


class NewsCache:
    """In-memory keyed store. Entries never expire on their own; callers judge freshness."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def set(self, key: str, data: List[NewsItem], *, is_fallback: bool = False) -> CacheEntry:
        entry = CacheEntry(data=list(data), stored_at=self._clock(), is_fallback=is_fallback)
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()
