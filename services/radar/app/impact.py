from __future__ import annotations

from typing import Any, Callable, List, Tuple

IMPACT_TEMPLATES = {
    "AI": "Potential opportunities for ADNOC to explore AI integration in operations and digital transformation initiatives.",
    "Energy Tech": "Strategic relevance for ADNOC's renewable energy portfolio and sustainable technology investments.",
    "Robotics": "Opportunity to enhance operational efficiency through automation and robotics in oil and gas operations.",
    "Quantum Computing": "Long-term implications for computational capabilities in complex energy modeling and optimization.",
    "Energy Storage": "Critical technology for ADNOC's renewable energy projects and grid stability solutions.",
}

GENERIC_IMPACT = "Potential relevance to ADNOC's technological advancement and innovation strategy."


def _get(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _country(item: Any) -> str:
    loc = _get(item, "location")
    if loc is None:
        return ""
    return str(_get(loc, "country") or "")


def _has(*terms: str) -> Callable[[str, Any], bool]:
    return lambda text, item: any(t in text for t in terms)


# Checked in order; the first hit wins over the category template.
SPECIAL_CASES: List[Tuple[Callable[[str, Any], bool], str]] = [
    (
        _has("microsoft", "azure"),
        "Potential partnership opportunities for ADNOC's digital transformation and AI infrastructure initiatives.",
    ),
    (
        lambda text, item: _has("saudi", "neom")(text, item) or _country(item) == "Saudi Arabia",
        "Direct competition in the regional renewable energy sector - strategic response needed.",
    ),
    (
        _has("hydrogen"),
        "Strategic relevance for ADNOC's low-carbon hydrogen roadmap and export ambitions.",
    ),
    (
        lambda text, item: "quantum" in text or _get(item, "category") == "Quantum Computing",
        "Long-term implications for reservoir simulation and energy optimization through quantum computing.",
    ),
    (
        _has("tesla", "battery"),
        "Battery advances could reshape ADNOC's grid-scale storage plans and EV-driven demand outlook.",
    ),
    (
        _has("offshore", "wind"),
        "Offshore wind developments open synergies with ADNOC's offshore operations and Masdar investments.",
    ),
]


def narrate(item: Any) -> str:
    """Human-readable impact sentence for a news item (NewsItem or plain dict)."""
    text = f"{_get(item, 'headline') or ''} {_get(item, 'summary') or ''}".lower()
    for matches, sentence in SPECIAL_CASES:
        if matches(text, item):
            return sentence
    return IMPACT_TEMPLATES.get(str(_get(item, "category") or ""), GENERIC_IMPACT)
