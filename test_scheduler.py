import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from app.core import scheduler as scheduler_module
from app.models.notification_models import NotificationRequest
from app.services.notification_service import notification_service


@pytest_asyncio.fixture
async def live_scheduler(monkeypatch):
    """A fresh AsyncIOScheduler standing in for the module-level one"""
    fresh = AsyncIOScheduler()
    monkeypatch.setattr(scheduler_module, "scheduler", fresh)
    yield fresh
    scheduler_module.stop_scheduler()
    # shutdown is queued on the loop; let it run before the loop closes
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_deferred_send_fires_once_after_delay(live_scheduler, fake_db, fake_fcm):
    scheduler_module.start_scheduler()
    run_at = datetime.now(timezone.utc) + timedelta(seconds=0.5)

    result = await notification_service.dispatch(
        NotificationRequest(title="Soon", body="Half a second", scheduledTime=run_at.isoformat())
    )

    assert result == {"success": True, "message": "Scheduled"}
    assert fake_fcm.sent == []
    assert fake_db.docs("notifications") == []
    assert len(live_scheduler.get_jobs()) == 1

    for _ in range(50):
        if fake_db.docs("notifications"):
            break
        await asyncio.sleep(0.1)

    assert len(fake_fcm.sent) == 1
    assert [r["title"] for r in fake_db.docs("notifications")] == ["Soon"]
    assert live_scheduler.get_jobs() == []


@pytest.mark.asyncio
async def test_schedule_once_registers_a_date_job(live_scheduler):
    scheduler_module.start_scheduler()
    run_at = datetime.now(timezone.utc) + timedelta(hours=1)

    async def noop():
        pass

    job_id = scheduler_module.schedule_once(run_at, noop)

    job = live_scheduler.get_job(job_id)
    assert job is not None
    assert job.next_run_time == run_at
    assert job.misfire_grace_time is None


@pytest.mark.asyncio
async def test_stop_scheduler_halts_it(live_scheduler):
    scheduler_module.start_scheduler()
    assert live_scheduler.running

    scheduler_module.stop_scheduler()

    assert not live_scheduler.running
