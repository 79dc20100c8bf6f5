from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dateutil import parser as dtparser

from .categorizer import categorize
from .impact import narrate
from .locations import resolve_location
from .models import SCORE_HEURISTIC, SCORE_PROVIDER, NewsItem
from .scoring import score_item
from .utils import canonicalize_url, fingerprint, normalize_whitespace, to_float

logger = logging.getLogger(__name__)

WRAPPER_KEYS = ("data", "news", "articles", "items", "results")

# Upstream shapes vary by provider; for each canonical field the first
# non-empty candidate wins.
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "_id"),
    "headline": ("headline", "title", "name"),
    "source": ("source", "source_name", "publisher", "provider"),
    "summary": ("summary", "description", "content", "text", "snippet"),
    "category": ("category", "type", "tag", "tags"),
    "location": ("location", "geo", "country", "city", "region"),
    "timestamp": ("timestamp", "published_at", "publishedAt", "pubDate", "date", "created_at"),
    "impact": ("impact", "impact_analysis"),
    "score": ("similarity", "relevance_score", "relevanceScore", "score", "_score"),
    "keywords": ("keywords", "tags"),
    "url": ("url", "link", "href"),
}

# A bare object counts as a single item only if it carries one of these.
_ITEM_MARKERS = (
    FIELD_CANDIDATES["headline"] + FIELD_CANDIDATES["summary"]
    + FIELD_CANDIDATES["url"] + FIELD_CANDIDATES["id"]
)

MAX_KEYWORDS = 5


def _empty(v: Any) -> bool:
    return v is None or v == "" or v == [] or v == {}


def _first(raw: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_CANDIDATES[field]:
        v = raw.get(key)
        if isinstance(v, str):
            v = v.strip()
        if not _empty(v):
            return v
    return None


def _text(v: Any) -> str:
    if isinstance(v, str):
        return normalize_whitespace(v)
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return ""


def extract_items(payload: Any) -> List[Any]:
    """Pull the list of raw items out of whatever shape upstream returned."""
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        return []
    for key in WRAPPER_KEYS:
        v = payload.get(key)
        if isinstance(v, list):
            return v
        if isinstance(v, Mapping):
            return [v]
    if any(not _empty(payload.get(k)) for k in _ITEM_MARKERS):
        return [payload]
    return []


def _source(raw: Mapping[str, Any]) -> str:
    v = _first(raw, "source")
    if isinstance(v, Mapping):
        v = v.get("name") or v.get("title")
    return _text(v) or "Unknown Source"


def _raw_category(raw: Mapping[str, Any]) -> str:
    v = _first(raw, "category")
    if isinstance(v, list):
        v = next((t for t in v if isinstance(t, str) and t.strip()), None)
    return _text(v)


def _location_input(raw: Mapping[str, Any]) -> Any:
    v = _first(raw, "location")
    # {"country": "Germany"} without coordinates is as good as the bare name
    if isinstance(v, Mapping) and (v.get("lat") is None or v.get("lng") is None):
        name = v.get("country") or v.get("name")
        if isinstance(name, str):
            return name
    return v


def _timestamp(v: Any, now: dt.datetime) -> str:
    parsed: Optional[dt.datetime] = None
    if isinstance(v, str):
        try:
            parsed = dtparser.parse(v)
        except (ValueError, OverflowError):
            parsed = None
    elif isinstance(v, (int, float)) and not isinstance(v, bool):
        secs = v / 1000.0 if v > 1e12 else float(v)
        try:
            parsed = dt.datetime.fromtimestamp(secs, tz=dt.timezone.utc)
        except (ValueError, OverflowError, OSError):
            parsed = None
    if parsed is None:
        parsed = now
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc).isoformat()


def _keywords(raw: Mapping[str, Any], hits: List[str]) -> List[str]:
    v = _first(raw, "keywords")
    if isinstance(v, str):
        words = [w.strip() for w in v.split(",")]
    elif isinstance(v, list):
        words = [_text(w) for w in v]
    else:
        words = []
    words = [w for w in words if w]
    return (words or hits)[:MAX_KEYWORDS]


def normalize_item(raw: Any, index: int, *, now: Optional[dt.datetime] = None) -> NewsItem:
    """Map one raw upstream object onto a NewsItem. Raises on unusable input."""
    if not isinstance(raw, Mapping):
        raise TypeError(f"news item must be an object, got {type(raw).__name__}")
    now = now or dt.datetime.now(dt.timezone.utc)

    meta = raw.get("metadata")
    if isinstance(meta, Mapping):
        raw = {**meta, **raw}

    headline = _text(_first(raw, "headline")) or "Unknown Headline"
    summary = _text(_first(raw, "summary")) or "No summary available"
    raw_category = _raw_category(raw)
    category = categorize(raw_category or headline)
    location = resolve_location(_location_input(raw))
    url = _text(_first(raw, "url"))
    if url:
        url = canonicalize_url(url)

    # scored on the upstream category text, not our label
    heuristic = score_item({"headline": headline, "summary": summary, "category": raw_category})
    provider_score = to_float(_first(raw, "score"))
    if provider_score is not None:
        relevance, score_source = provider_score, SCORE_PROVIDER
    else:
        relevance, score_source = heuristic.score, SCORE_HEURISTIC

    item_id = _text(_first(raw, "id")) or "news_" + fingerprint(headline, url, str(index))[:12]

    impact = _text(_first(raw, "impact"))
    if not impact:
        impact = narrate({
            "headline": headline,
            "summary": summary,
            "category": category,
            "location": location,
        })

    return NewsItem(
        id=item_id,
        headline=headline,
        source=_source(raw),
        category=category,
        summary=summary,
        location=location,
        timestamp=_timestamp(_first(raw, "timestamp"), now),
        impact=impact,
        relevance_score=relevance,
        score_source=score_source,
        keywords=_keywords(raw, heuristic.hits),
        url=url,
    )


def normalize(payload: Any, *, now: Optional[dt.datetime] = None) -> List[NewsItem]:
    """Normalize any upstream payload; items that fail to map are dropped."""
    now = now or dt.datetime.now(dt.timezone.utc)
    out: List[NewsItem] = []
    for i, raw in enumerate(extract_items(payload)):
        try:
            out.append(normalize_item(raw, i, now=now))
        except Exception as e:
            logger.debug("dropping news item #%s: %s", i, e)
            continue
    return out
