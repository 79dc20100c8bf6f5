from __future__ import annotations

import datetime as dt
from typing import List, Optional

from .locations import LOCATIONS
from .models import Location, NewsItem
from .scoring import score_item

_DEMO = [
    {
        "id": "fallback_1",
        "headline": "Microsoft Announces Major AI Infrastructure Investment",
        "source": "Reuters",
        "category": "AI",
        "summary": "Microsoft commits $20B to new AI data centers across Europe",
        "location": "Germany",
        "age_s": 0,
        "impact": "Potential partnership opportunities for ADNOC's digital transformation initiatives",
        "keywords": ["microsoft", "ai", "data center", "europe"],
    },
    {
        "id": "fallback_2",
        "headline": "Saudi Arabia Launches New Green Hydrogen Initiative",
        "source": "Bloomberg",
        "category": "Energy Tech",
        "summary": "NEOM announces $8.5B green hydrogen facility",
        "location": "Saudi Arabia",
        "age_s": 300,
        "impact": "Direct competition in renewable energy sector - strategic response needed",
        "keywords": ["saudi arabia", "neom", "green hydrogen"],
    },
    {
        "id": "fallback_3",
        "headline": "Norway Approves Floating Offshore Wind Expansion",
        "source": "Financial Times",
        "category": "Energy Tech",
        "summary": "Equinor secures permits for a 1.5 GW floating wind cluster in the North Sea",
        "location": "Norway",
        "age_s": 900,
        "impact": "Offshore wind developments open synergies with ADNOC's offshore operations and Masdar investments.",
        "keywords": ["offshore wind", "equinor", "north sea"],
    },
    {
        "id": "fallback_4",
        "headline": "Japanese Lab Demonstrates Error-Corrected Qubit Array",
        "source": "Nikkei Asia",
        "category": "Quantum Computing",
        "summary": "Researchers in Tokyo report a 48-qubit processor with logical error correction",
        "location": "Japan",
        "age_s": 1800,
        "impact": "Long-term implications for computational capabilities in complex energy modeling and optimization.",
        "keywords": ["quantum", "qubit", "error correction"],
    },
]


def fallback_items(now: Optional[dt.datetime] = None) -> List[NewsItem]:
    """Fixed demo list served whenever upstream is unavailable."""
    now = now or dt.datetime.now(dt.timezone.utc)
    out: List[NewsItem] = []
    for d in _DEMO:
        ts = (now - dt.timedelta(seconds=d["age_s"])).replace(microsecond=0)
        loc: Location = LOCATIONS[d["location"]]
        out.append(NewsItem(
            id=d["id"],
            headline=d["headline"],
            source=d["source"],
            category=d["category"],
            summary=d["summary"],
            location=loc.model_copy(),
            timestamp=ts.isoformat(),
            impact=d["impact"],
            relevance_score=score_item(d).score,
            keywords=list(d["keywords"]),
        ))
    return out
