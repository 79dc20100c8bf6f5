from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .service import NewsService

logger = logging.getLogger(__name__)


async def job_refresh(service: NewsService) -> None:
    try:
        result = await service.fetch_latest()
    except Exception as e:
        logger.error("refresh job failed: %s", e)
        return
    logger.info(
        "refresh job: n=%s from_cache=%s used_fallback=%s",
        len(result.value), result.from_cache, result.used_fallback,
    )


def start_refresh_scheduler(service: NewsService, every_sec: int) -> Optional[AsyncIOScheduler]:
    """Poll upstream on an interval, like the dashboard's 2-minute refresh. Needs a running loop."""
    if every_sec <= 0:
        logger.info("refresh scheduler disabled (REFRESH_EVERY_SEC=%s)", every_sec)
        return None

    sched = AsyncIOScheduler()
    sched.add_job(
        job_refresh,
        "interval",
        seconds=every_sec,
        args=[service],
        id="refresh",
        max_instances=1,
        coalesce=True,
    )
    sched.start()
    logger.info("refresh scheduler started every=%ss", every_sec)
    return sched
