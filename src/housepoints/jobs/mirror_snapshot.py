"""Background scheduler for roster JSON mirroring."""

from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from ..core.config import get_settings
from ..core.database import SessionLocal
from ..services.mirror_service import MirrorResult, mirror_roster

logger = logging.getLogger(__name__)

_scheduler = AsyncIOScheduler(timezone="UTC")


async def _execute_mirror() -> None:
    result = run_mirror_once()
    if result is not None and not result.ok:
        logger.error("roster mirror job failed: %s", result.error)


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app when mirroring is configured."""

    settings = get_settings()
    if not settings.mirror_dir:
        return

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _scheduler.get_job("roster_mirror"):
            _scheduler.add_job(
                _execute_mirror,
                "interval",
                minutes=settings.mirror_interval_minutes,
                id="roster_mirror",
                misfire_grace_time=300,
                coalesce=True,
            )
        if not _scheduler.running:
            _scheduler.start()
            logger.info("roster mirror scheduler started (%s)", settings.mirror_dir)

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("roster mirror scheduler stopped")


def run_mirror_once(directory: Optional[str] = None) -> Optional[MirrorResult]:
    """Mirror the roster synchronously; returns ``None`` when no directory is configured."""

    target = directory or get_settings().mirror_dir
    if not target:
        return None

    session = SessionLocal()
    try:
        return mirror_roster(session, target)
    finally:
        session.close()
