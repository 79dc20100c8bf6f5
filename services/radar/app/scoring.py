from typing import Any, List, Mapping, NamedTuple

ORG_TERMS = [
    "adnoc", "abu dhabi", "uae", "emirates", "middle east", "gulf", "saudi", "neom", "opec",
]

ENERGY_TERMS = [
    "oil", "gas", "energy", "hydrogen", "solar", "wind", "renewable", "battery",
    "carbon", "lng", "grid",
]

TECH_TERMS = [
    "artificial intelligence", "machine learning", "robot", "quantum", "digital",
    "automation", "data center", "semiconductor",
]

BASE_SCORE = 0.5
ORG_WEIGHT = 0.20
ENERGY_WEIGHT = 0.15
TECH_WEIGHT = 0.10
MIN_SCORE = 0.3
MAX_SCORE = 1.0


class ScoreResult(NamedTuple):
    score: float
    hits: List[str]


def _matched(text: str, terms: List[str]) -> List[str]:
    return [term for term in terms if term in text]

def _clamp(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))

def score_text(text: str) -> ScoreResult:
    t = (text or "").lower()
    org = _matched(t, ORG_TERMS)
    energy = _matched(t, ENERGY_TERMS)
    tech = _matched(t, TECH_TERMS)

    raw = BASE_SCORE + ORG_WEIGHT * len(org) + ENERGY_WEIGHT * len(energy) + TECH_WEIGHT * len(tech)
    return ScoreResult(round(_clamp(raw), 4), org + energy + tech)

def score(text: str) -> float:
    return score_text(text).score

def score_item(item: Mapping[str, Any]) -> ScoreResult:
    """Heuristic relevance of a raw or normalized item to the dashboard's audience."""
    parts = [
        item.get("headline") or item.get("title") or "",
        item.get("summary") or item.get("description") or "",
        item.get("category") or "",
    ]
    return score_text(" ".join(str(p) for p in parts))
