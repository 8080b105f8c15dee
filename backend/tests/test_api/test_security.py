"""
API key authentication tests.
"""


def test_unauthenticated_request_returns_401(client_no_auth):
    """Request without API key should return 401."""
    response = client_no_auth.get("/api/v1/notifications", params={"user_id": "user-0001"})
    assert response.status_code == 401
    assert "Invalid or missing API key" in response.json()["detail"]


def test_authenticated_request_succeeds(client):
    """Request with valid API key should succeed."""
    response = client.get("/api/v1/notifications", params={"user_id": "user-0001"})
    assert response.status_code == 200


def test_wrong_api_key_returns_401(client_no_auth):
    """Request with wrong API key should return 401."""
    response = client_no_auth.post(
        "/api/v1/alerts/process",
        headers={"X-API-Key": "wrong-key"}
    )
    assert response.status_code == 401


def test_health_needs_no_key(client_no_auth):
    assert client_no_auth.get("/health").status_code == 200


def test_unset_api_key_rejects_everything(client, monkeypatch):
    from vecdoc.core.config import settings
    monkeypatch.setattr(settings, "API_KEY", "")

    response = client.get("/api/v1/notifications", params={"user_id": "user-0001"})
    assert response.status_code == 401
