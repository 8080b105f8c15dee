"""Urgency calculator tests."""
from datetime import date, datetime

from vecdoc.schemas.maintenance import MaintenanceStatus
from vecdoc.services.urgency import days_until_expiry, maintenance_due_status, oil_change_status


class TestDaysUntilExpiry:

    def test_rounds_partial_days_up(self):
        now = datetime(2026, 10, 18, 9, 0)
        assert days_until_expiry(date(2026, 10, 20), now) == 2

    def test_exact_midnight(self):
        now = datetime(2026, 10, 18, 0, 0)
        assert days_until_expiry(date(2026, 10, 20), now) == 2

    def test_expiry_today_is_zero(self):
        now = datetime(2026, 10, 18, 15, 30)
        assert days_until_expiry(date(2026, 10, 18), now) == 0

    def test_expired_is_negative(self):
        now = datetime(2026, 10, 18, 9, 0)
        assert days_until_expiry(date(2026, 10, 10), now) == -8


class TestOilChangeStatus:

    def test_due_soon(self):
        result = oil_change_status(2400, 0, 2500)
        assert result.status == MaintenanceStatus.DUE_SOON
        assert result.km_remaining == 100
        assert result.percentage_used == 96.0

    def test_overdue(self):
        result = oil_change_status(2600, 0, 2500)
        assert result.status == MaintenanceStatus.OVERDUE
        assert result.km_remaining == 0
        assert result.overdue_by_km == 100
        assert result.percentage_used == 100.0

    def test_exactly_at_interval_is_overdue(self):
        result = oil_change_status(2500, 0, 2500)
        assert result.status == MaintenanceStatus.OVERDUE

    def test_boundary_250_is_due_soon(self):
        assert oil_change_status(2250, 0, 2500).status == MaintenanceStatus.DUE_SOON
        assert oil_change_status(2249, 0, 2500).status == MaintenanceStatus.OK

    def test_ok(self):
        result = oil_change_status(11000, 10000, 2500)
        assert result.status == MaintenanceStatus.OK
        assert result.km_remaining == 1500
        assert result.km_since_last_change == 1000
        assert result.next_change_at_km == 12500
        assert result.percentage_used == 40.0

    def test_percentage_never_negative(self):
        # odometer corrected below the last change reading
        result = oil_change_status(900, 1000, 2500)
        assert result.percentage_used == 0.0


class TestMaintenanceDueStatus:

    def test_distance_only(self):
        result = maintenance_due_status(4900, 0, date(2026, 10, 18), interval_km=5000)
        assert result.status == MaintenanceStatus.DUE_SOON
        assert result.km_remaining == 100
        assert result.next_due_km == 5000
        assert result.days_remaining is None

    def test_date_rule_can_be_more_severe(self):
        result = maintenance_due_status(
            1000, 0, date(2026, 10, 18),
            interval_km=5000,
            last_service_date=date(2026, 4, 1),
            interval_days=180,
        )
        assert result.km_remaining == 4000
        assert result.next_due_date == date(2026, 9, 28)
        assert result.days_remaining == -20
        assert result.status == MaintenanceStatus.OVERDUE

    def test_date_due_soon(self):
        result = maintenance_due_status(
            0, 0, date(2026, 10, 18),
            last_service_date=date(2026, 9, 20),
            interval_days=30,
        )
        assert result.days_remaining == 2
        assert result.status == MaintenanceStatus.DUE_SOON

    def test_no_rules_is_ok(self):
        result = maintenance_due_status(1000, 0, date(2026, 10, 18))
        assert result.status == MaintenanceStatus.OK
        assert result.km_remaining is None
