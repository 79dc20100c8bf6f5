from __future__ import annotations

from typing import Any, Dict, Mapping

from .models import Location
from .utils import to_float

DEFAULT_COUNTRY = "United States"

LOCATIONS: Dict[str, Location] = {
    "United States": Location(lat=39.8283, lng=-98.5795, city="Washington DC", country="USA"),
    "China": Location(lat=39.9042, lng=116.4074, city="Beijing", country="China"),
    "Germany": Location(lat=52.52, lng=13.405, city="Berlin", country="Germany"),
    "United Kingdom": Location(lat=51.5074, lng=-0.1278, city="London", country="UK"),
    "Japan": Location(lat=35.6762, lng=139.6503, city="Tokyo", country="Japan"),
    "India": Location(lat=28.6139, lng=77.209, city="New Delhi", country="India"),
    "Saudi Arabia": Location(lat=24.7136, lng=46.6753, city="Riyadh", country="Saudi Arabia"),
    "Norway": Location(lat=59.9139, lng=10.7522, city="Oslo", country="Norway"),
    "France": Location(lat=48.8566, lng=2.3522, city="Paris", country="France"),
    "South Korea": Location(lat=37.5665, lng=126.978, city="Seoul", country="South Korea"),
}

_LOWER = {k.lower(): k for k in LOCATIONS}


def resolve_location(raw: Any) -> Location:
    """Map a structured {lat,lng} or a country name onto a Location.

    Unknown names and any other input resolve to the United States entry.
    """
    if isinstance(raw, Mapping):
        lat = to_float(raw.get("lat"))
        lng = to_float(raw.get("lng"))
        if lat is not None and lng is not None:
            return Location(
                lat=lat,
                lng=lng,
                city=str(raw.get("city") or "Unknown City"),
                country=str(raw.get("country") or "Unknown Country"),
            )

    if isinstance(raw, str):
        name = raw.strip()
        if name in LOCATIONS:
            return LOCATIONS[name].model_copy()
        key = _LOWER.get(name.lower())
        if key:
            return LOCATIONS[key].model_copy()

    return LOCATIONS[DEFAULT_COUNTRY].model_copy()
