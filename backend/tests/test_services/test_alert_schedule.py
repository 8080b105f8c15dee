"""Alert schedule generation tests."""
from datetime import date, datetime, timedelta

from vecdoc.models.alert import AlertStatus, AlertType, DocumentAlert
from vecdoc.services.alert_schedule import AlertScheduleService, build_schedule

NOW = datetime(2026, 10, 18, 12, 0)


class TestBuildSchedule:

    def test_far_future_expiry_yields_full_ladder(self):
        expiry = date(2027, 3, 1)
        schedule = build_schedule(expiry, NOW, alert_hour=9)

        assert [t for t, _ in schedule] == [
            AlertType.THIRTY_DAY,
            AlertType.SEVEN_DAY,
            AlertType.ONE_DAY,
            AlertType.EXPIRED,
        ]
        times = [fire_at for _, fire_at in schedule]
        assert times == sorted(times)
        assert times[0] == datetime(2027, 1, 30, 9, 0)
        assert times[-1] == datetime(2027, 3, 1, 9, 0)

    def test_every_far_expiry_has_four_alerts(self):
        for days_ahead in (31, 45, 90, 365):
            expiry = NOW.date() + timedelta(days=days_ahead)
            assert len(build_schedule(expiry, NOW, alert_hour=9)) == 4

    def test_three_days_out_only_one_day_and_expired_left(self):
        expiry = NOW.date() + timedelta(days=3)
        schedule = build_schedule(expiry, NOW, alert_hour=9)
        assert [t for t, _ in schedule] == [AlertType.ONE_DAY, AlertType.EXPIRED]

    def test_past_expiry_yields_nothing(self):
        assert build_schedule(date(2026, 10, 1), NOW, alert_hour=9) == []

    def test_fire_time_equal_to_now_is_skipped(self):
        now = datetime(2026, 10, 18, 9, 0)
        schedule = build_schedule(date(2026, 10, 25), now, alert_hour=9)
        # 7_day fires exactly at now
        assert [t for t, _ in schedule] == [AlertType.ONE_DAY, AlertType.EXPIRED]

    def test_expiry_25_days_out_skips_thirty_day(self):
        now = datetime(2026, 10, 18, 8, 0)
        schedule = build_schedule(now.date() + timedelta(days=25), now, alert_hour=9)
        assert [t for t, _ in schedule] == [AlertType.SEVEN_DAY, AlertType.ONE_DAY, AlertType.EXPIRED]
        assert schedule[0][1] == datetime(2026, 11, 5, 9, 0)


class TestAlertScheduleService:

    def test_schedule_alerts_persists_pending_rows(self, db_session, make_document):
        document = make_document(expiry_date=date(2027, 3, 1))
        service = AlertScheduleService(db_session)

        alerts = service.schedule_alerts(document, now=NOW)
        db_session.commit()

        assert len(alerts) == 4
        rows = db_session.query(DocumentAlert).filter_by(document_id=document.id).all()
        assert len(rows) == 4
        assert all(a.status == AlertStatus.PENDING for a in rows)
        assert all(a.retry_count == 0 for a in rows)
        assert all(a.user_id == document.user_id for a in rows)

    def test_document_without_expiry_gets_no_alerts(self, db_session, make_document):
        document = make_document(expiry_date=None)
        alerts = AlertScheduleService(db_session).schedule_alerts(document, now=NOW)
        assert alerts == []

    def test_regeneration_cancels_previous_schedule(self, db_session, make_document):
        document = make_document(expiry_date=date(2027, 3, 1))
        service = AlertScheduleService(db_session)
        service.schedule_alerts(document, now=NOW)
        db_session.commit()

        document.expiry_date = date(2027, 6, 1)
        service.schedule_alerts(document, now=NOW)
        db_session.commit()

        rows = db_session.query(DocumentAlert).filter_by(document_id=document.id).all()
        pending = [a for a in rows if a.status == AlertStatus.PENDING]
        cancelled = [a for a in rows if a.status == AlertStatus.ACKNOWLEDGED]
        assert len(cancelled) == 4
        assert len(pending) == 4
        # no rung is pending twice
        assert len({a.alert_type for a in pending}) == len(pending)
        assert all(a.scheduled_at.year == 2027 and a.scheduled_at.month >= 5 for a in pending)

    def test_regeneration_leaves_sent_alerts_alone(self, db_session, make_document, make_alert):
        document = make_document(expiry_date=date(2027, 3, 1))
        sent = make_alert(document, NOW - timedelta(days=1), AlertType.THIRTY_DAY, status=AlertStatus.SENT)

        AlertScheduleService(db_session).schedule_alerts(document, now=NOW)
        db_session.commit()
        db_session.refresh(sent)
        assert sent.status == AlertStatus.SENT

    def test_cancel_alerts(self, db_session, make_document):
        document = make_document(expiry_date=date(2027, 3, 1))
        service = AlertScheduleService(db_session)
        service.schedule_alerts(document, now=NOW)
        db_session.commit()

        count = service.cancel_alerts(document.id)
        db_session.commit()

        assert count == 4
        rows = db_session.query(DocumentAlert).filter_by(document_id=document.id).all()
        assert all(a.status == AlertStatus.ACKNOWLEDGED for a in rows)
