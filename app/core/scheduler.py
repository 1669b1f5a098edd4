"""
APScheduler setup for deferred notification sends.
Jobs live in the in-memory job store only, so anything still pending
when the process exits is dropped.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def schedule_once(run_at: datetime, func: Callable[..., Any], *args: Any) -> str:
    """Register a one-shot job firing at run_at. Returns the job id."""
    job = scheduler.add_job(
        func,
        trigger=DateTrigger(run_date=run_at),
        args=list(args),
        id=uuid.uuid4().hex,
        name=f"Deferred {getattr(func, '__name__', 'job')}",
        # fire even if the loop was busy at the deadline
        misfire_grace_time=None,
    )
    logger.info(f"⏰ Scheduled job {job.id} for {run_at.isoformat()}")
    return job.id


def start_scheduler():
    """Start the scheduler on the running event loop"""
    if scheduler.running:
        logger.warning("Scheduler already running")
        return

    try:
        scheduler.start()
        logger.info("✅ Scheduler started successfully")
    except Exception as e:
        logger.error(f"❌ Failed to start scheduler: {str(e)}", exc_info=True)


def stop_scheduler():
    """Stop the scheduler, discarding pending jobs"""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("✅ Scheduler stopped")
