"""Notification settings and history API tests."""
from datetime import timedelta

from vecdoc.core.utils import now_local
from tests.conftest import USER_ID


class TestNotificationSettings:

    def test_get_default_settings(self, client):
        resp = client.get(f"/api/v1/notifications/settings/{USER_ID}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["document_alerts"] is True
        assert data["quiet_hours_start"] is None

    def test_update_quiet_hours(self, client):
        resp = client.put(
            f"/api/v1/notifications/settings/{USER_ID}",
            json={"quiet_hours_start": "22:00", "quiet_hours_end": "07:00"},
        )
        assert resp.status_code == 200

        data = client.get(f"/api/v1/notifications/settings/{USER_ID}").json()
        assert data["quiet_hours_start"] == "22:00"
        assert data["quiet_hours_end"] == "07:00"
        assert data["push_enabled"] is True

    def test_invalid_time_format(self, client):
        resp = client.put(
            f"/api/v1/notifications/settings/{USER_ID}",
            json={"quiet_hours_start": "25:00", "quiet_hours_end": "07:00"},
        )
        assert resp.status_code == 422

    def test_half_window_rejected(self, client):
        resp = client.put(
            f"/api/v1/notifications/settings/{USER_ID}",
            json={"quiet_hours_end": "07:00"},
        )
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "VALIDATION_ERROR"


class TestNotificationHistory:

    def test_history_after_processing(self, client, make_document, make_alert):
        document = make_document(expiry_date=now_local().date() + timedelta(days=1))
        make_alert(document, now_local() - timedelta(minutes=5))
        client.post("/api/v1/alerts/process")

        resp = client.get("/api/v1/notifications", params={"user_id": USER_ID})

        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        item = data["items"][0]
        assert item["status"] == "pending"
        assert item["category"] == "document"
        assert item["data"]["documentId"] == document.id

    def test_history_pagination_limits(self, client):
        resp = client.get("/api/v1/notifications", params={"user_id": USER_ID, "limit": 500})
        assert resp.status_code == 422
