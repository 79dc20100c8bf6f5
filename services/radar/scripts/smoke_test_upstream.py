#!/usr/bin/env python3
"""Quick smoke test for the configured upstream.

Usage (from repo root):
  python -m services.radar.scripts.smoke_test_upstream --kind webhook --url https://example/webhook/news

This script performs live HTTP requests.
"""

from __future__ import annotations

import argparse
import asyncio

from services.radar.app.config import Settings
from services.radar.app.errors import UpstreamError
from services.radar.app.normalizer import extract_items, normalize
from services.radar.app.transports import build_transport, list_transport_kinds


async def _run(s: Settings) -> int:
    transport = build_transport(s)
    print(f"Upstream: {transport.kind} -> {transport.config.url}")

    try:
        payload = await transport.fetch_payload()
    except UpstreamError as e:
        print(f"[FAIL] {e.kind}: {e}")
        if e.detail:
            print(e.detail[:500])
        return 1

    raw = extract_items(payload)
    items = normalize(payload)
    print(f"Raw items: {len(raw)}  normalized: {len(items)}")

    for i, it in enumerate(items[: min(3, len(items))], 1):
        print("\n---")
        print(f"#{i}: {it.headline}")
        print(f"{it.source} | {it.category} | {it.location.city}, {it.location.country}")
        print(f"score={it.relevance_score} ({it.score_source}) keywords={it.keywords}")
        print(it.impact)

        # basic quality checks
        if it.headline == "Unknown Headline":
            print("[WARN] no headline field recognised")
        if it.summary == "No summary available":
            print("[WARN] no summary field recognised")

    if raw and len(items) < len(raw):
        print(f"\n[WARN] {len(raw) - len(items)} item(s) dropped during normalization")
    return 0 if items else 1


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--kind", default=None, help="Upstream kind (default: UPSTREAM_KIND)")
    ap.add_argument("--url", default=None, help="Upstream URL (default: UPSTREAM_URL)")
    ap.add_argument("--timeout", type=float, default=None)
    args = ap.parse_args()

    s = Settings()
    overrides = {}
    if args.kind:
        overrides["upstream_kind"] = args.kind
    if args.url:
        overrides["upstream_url"] = args.url
    if args.timeout:
        overrides["upstream_timeout"] = args.timeout
    s = s.model_copy(update=overrides)

    if s.upstream_kind not in list_transport_kinds():
        print("Unknown upstream kind. Available:")
        for k in list_transport_kinds():
            print(" -", k)
        return 2

    return asyncio.run(_run(s))


if __name__ == "__main__":
    raise SystemExit(main())
