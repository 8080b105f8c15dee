"""Background alert scheduler tests."""
import asyncio
from datetime import date, timedelta

import pytest

from vecdoc.core.utils import now_local
from vecdoc.jobs.alert_scheduler import AlertScheduler, run_alert_tick
from vecdoc.models.alert import AlertStatus, DocumentAlert
from vecdoc.models.notification import NotificationQueueEntry


class IdleScheduler(AlertScheduler):
    async def run_once(self):
        return {}


class TestRunAlertTick:

    def test_tick_uses_its_own_session(self, session_factory, db_session, make_document, make_alert):
        document = make_document(expiry_date=date(2027, 3, 1))
        alert = make_alert(document, now_local() - timedelta(minutes=1))

        summary = run_alert_tick(session_factory)

        assert summary["sent"] == 1
        db_session.expire_all()
        assert db_session.get(DocumentAlert, alert.id).status == AlertStatus.SENT
        assert db_session.query(NotificationQueueEntry).count() == 1


class TestAlertScheduler:

    @pytest.mark.asyncio
    async def test_run_once_returns_summary(self, session_factory, make_document, make_alert):
        document = make_document(expiry_date=date(2027, 3, 1))
        make_alert(document, now_local() - timedelta(minutes=1))

        summary = await AlertScheduler(session_factory).run_once()

        assert summary["sent"] == 1

    @pytest.mark.asyncio
    async def test_run_once_swallows_tick_failure(self):
        def broken_factory():
            raise RuntimeError("database unavailable")

        assert await AlertScheduler(broken_factory).run_once() is None

    @pytest.mark.asyncio
    async def test_start_runs_first_tick_and_stop_cancels(self, session_factory):
        ticked = asyncio.Event()

        class RecordingScheduler(AlertScheduler):
            async def run_once(self):
                ticked.set()
                return {}

        scheduler = RecordingScheduler(session_factory, interval_seconds=3600)
        scheduler.start()
        assert scheduler.is_running

        await asyncio.wait_for(ticked.wait(), timeout=1)
        await scheduler.stop()

        assert not scheduler.is_running

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_task(self, session_factory):
        scheduler = IdleScheduler(session_factory, interval_seconds=3600)
        scheduler.start()
        task = scheduler._task
        scheduler.start()

        assert scheduler._task is task
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, session_factory):
        await AlertScheduler(session_factory).stop()
