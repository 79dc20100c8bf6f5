import re
import math
import hashlib
import datetime as dt
from urllib.parse import urlparse, urlunparse, parse_qsl, urlencode

def canonicalize_url(url: str) -> str:
    try:
        p = urlparse(url)
        q = [(k, v) for k, v in parse_qsl(p.query, keep_blank_values=True)
             if not k.lower().startswith("utm_") and k.lower() not in ("yclid", "gclid", "fbclid")]
        new = p._replace(query=urlencode(q, doseq=True), fragment="")
        return urlunparse(new)
    except Exception:
        return url

def fingerprint(*parts: str) -> str:
    s = "|".join((p or "").strip().lower() for p in parts).encode("utf-8", errors="ignore")
    return hashlib.sha256(s).hexdigest()

def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()

def to_float(v):
    if isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None

def utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).replace(microsecond=0).isoformat()
