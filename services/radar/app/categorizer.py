from typing import Dict, List

from .models import DEFAULT_CATEGORY

# Order matters: first group with a hit wins.
CATEGORY_TERMS: Dict[str, List[str]] = {
    "AI": [
        "artificial intelligence", "machine learning", "neural network", "deep learning",
        "ai", "chatgpt", "openai", "google ai",
    ],
    "Energy Tech": [
        "renewable energy", "solar", "wind", "hydrogen", "green energy", "clean energy",
        "battery", "electric",
    ],
    "Robotics": ["robot", "automation", "autonomous", "drone", "robotics"],
    "Quantum Computing": ["quantum", "qubit", "quantum computing", "quantum processor"],
    "Energy Storage": ["battery", "energy storage", "lithium", "fuel cell"],
}


def categorize(text: str) -> str:
    t = (text or "").lower()
    for category, terms in CATEGORY_TERMS.items():
        if any(term in t for term in terms):
            return category
    return DEFAULT_CATEGORY
