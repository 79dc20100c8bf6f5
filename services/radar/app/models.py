from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CATEGORIES = ("AI", "Energy Tech", "Robotics", "Quantum Computing", "Energy Storage")
DEFAULT_CATEGORY = "Technology"

SCORE_HEURISTIC = "heuristic"
SCORE_PROVIDER = "provider"


class _CamelModel(BaseModel):
    # UI speaks camelCase; python code uses snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(_CamelModel):
    lat: float
    lng: float
    city: str
    country: str


class NewsItem(_CamelModel):
    """Canonical news item handed to the dashboard.

    Produced by the normalizer (or the fallback list); every field is populated.
    `score_source` tells whether `relevance_score` is our heuristic (clamped to
    [0.3, 1.0]) or a provider similarity passed through untouched.
    """

    id: str
    headline: str
    source: str
    category: str
    summary: str
    location: Location
    timestamp: str
    impact: str
    relevance_score: float
    score_source: str = SCORE_HEURISTIC
    keywords: List[str] = Field(default_factory=list, max_length=5)
    url: str = ""


class ImpactIn(_CamelModel):
    id: str = ""
    headline: str = ""
    summary: str = ""
    category: str = DEFAULT_CATEGORY
    location: Optional[Location] = None


@dataclass
class FetchResult:
    ok: bool
    value: List[NewsItem] = field(default_factory=list)
    used_fallback: bool = False
    from_cache: bool = False
    error: Optional[str] = None
