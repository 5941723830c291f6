#!/usr/bin/env python3
"""
Access API Tests

Tests for:
- Health and root endpoints
- GET /api/v1/access/status/{user_id} for each access kind
- POST /api/v1/access/resolve with a pinned evaluation instant
- WS /ws/access/{user_id} initial push, notifications and ping/pong
"""

import pytest
from datetime import timedelta

from config import Settings
from web_ui.api.routes.access import build_status


# ============================================================================
# APP ENDPOINTS
# ============================================================================

class TestAppEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client):
        data = client.get("/").json()
        assert data["name"] == "VIP Access API"
        assert data["docs"] == "/docs"


# ============================================================================
# STATUS ENDPOINT
# ============================================================================

class TestStatusEndpoint:

    def test_trial_user(self, client):
        response = client.get("/api/v1/access/status/trial-user")
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "trial-user"
        assert data["locale"] == "en"
        assert data["state"]["kind"] == "trial"
        assert data["state"]["has_access"] is True
        assert data["state"]["grant"] == "trial"
        assert data["description"]["text"].startswith("3-Day VIP Trial (")
        assert data["trial"]["trial_days_total"] == 3
        assert data["show_upgrade_prompt"] is False

    def test_paid_user(self, client):
        data = client.get("/api/v1/access/status/paid-user").json()
        assert data["state"]["kind"] == "active"
        assert data["state"]["grant"] == "subscription"
        assert data["description"]["text"].startswith("Active VIP Subscription (")
        assert data["trial"] is None

    def test_lapsed_user(self, client):
        data = client.get("/api/v1/access/status/lapsed-user").json()
        assert data["state"]["kind"] == "expired"
        assert data["state"]["has_access"] is False
        assert data["state"]["time_remaining_seconds"] == 0
        assert data["state"]["progress_percentage"] == 100.0
        assert data["description"]["text"] == "3-Day VIP Trial Expired"
        assert data["description"]["urgency"] == "critical"
        assert data["trial"]["days_used"] == 3

    def test_unknown_user_is_signed_out(self, client):
        data = client.get("/api/v1/access/status/nobody").json()
        assert data["state"]["kind"] == "none"
        assert data["description"]["text"] == "Not signed in"
        assert data["trial"] is None

    def test_hungarian_locale(self, client):
        data = client.get("/api/v1/access/status/lapsed-user", params={"locale": "hu-HU"}).json()
        assert data["locale"] == "hu"
        assert data["description"]["text"] == "3 Napos VIP Trial Lejárt"


# ============================================================================
# RESOLVE ENDPOINT
# ============================================================================

class TestResolveEndpoint:

    def test_resolve_trial(self, client):
        response = client.post("/api/v1/access/resolve", json={
            "trial_expires_at": "2025-07-26T12:00:00Z",
            "is_trial_used": False,
            "now": "2025-07-24T12:00:00Z",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] is None
        assert data["state"]["kind"] == "trial"
        assert data["state"]["days"] == 2
        assert data["state"]["hours"] == 0
        assert data["state"]["resolved_at"] == "2025-07-24T12:00:00+00:00"
        assert data["description"]["text"] == "3-Day VIP Trial (2d 0h left)"
        assert data["trial"]["days_used"] == 1

    def test_resolve_subscription_with_epoch(self, client, now):
        expires = (now + timedelta(hours=5)).timestamp()
        data = client.post("/api/v1/access/resolve", json={
            "subscription_active": True,
            "subscription_expires_at": expires,
            "is_trial_used": True,
            "now": now.isoformat(),
        }).json()
        assert data["state"]["kind"] == "active"
        assert data["state"]["is_expiring_soon"] is True
        assert data["state"]["hours"] == 5

    def test_malformed_timestamp_is_absent(self, client):
        data = client.post("/api/v1/access/resolve", json={
            "subscription_active": True,
            "subscription_expires_at": "garbage",
            "now": "2025-07-24T12:00:00Z",
        }).json()
        assert data["state"]["kind"] == "none"
        assert data["description"]["text"] == "No Active VIP Subscription"

    def test_empty_body(self, client):
        data = client.post("/api/v1/access/resolve", json={}).json()
        assert data["state"]["kind"] == "none"

    def test_locale_query(self, client):
        data = client.post("/api/v1/access/resolve", params={"locale": "hu"}, json={
            "trial_expires_at": "2025-07-26T12:00:00Z",
            "now": "2025-07-24T12:00:00Z",
        }).json()
        assert data["description"]["text"] == "3 Napos VIP Trial (2n 0ó hátra)"


class TestBuildStatus:

    def test_settings_drive_precedence(self, make_record, now):
        record = make_record(trial_in=timedelta(days=1), subscription_in=timedelta(days=30))
        trial_first = build_status(record, Settings(ACCESS_PRECEDENCE="trial_first"), now=now)
        paid_first = build_status(record, Settings(ACCESS_PRECEDENCE="subscription_first"), now=now)
        assert trial_first["state"]["kind"] == "trial"
        assert paid_first["state"]["kind"] == "active"
        # The trial panel always shows the trial window
        assert paid_first["trial"]["days_used"] == 2

    def test_settings_drive_trial_length(self, make_record, now):
        record = make_record(trial_in=timedelta(hours=-1))
        status = build_status(record, Settings(TRIAL_DURATION_DAYS=7), now=now)
        assert status["description"]["text"] == "7-Day VIP Trial Expired"


# ============================================================================
# WEBSOCKET
# ============================================================================

class TestAccessWebSocket:

    def test_initial_state(self, client):
        with client.websocket_connect("/ws/access/trial-user") as websocket:
            message = websocket.receive_json()
            assert message["type"] == "state"
            assert message["data"]["user_id"] == "trial-user"
            assert message["data"]["state"]["kind"] == "trial"

    def test_ping_pong(self, client):
        with client.websocket_connect("/ws/access/paid-user") as websocket:
            assert websocket.receive_json()["type"] == "state"
            websocket.send_json({"type": "ping"})
            assert websocket.receive_json() == {"type": "pong"}

    def test_invalid_json(self, client):
        with client.websocket_connect("/ws/access/paid-user") as websocket:
            websocket.receive_json()
            websocket.send_text("not json")
            message = websocket.receive_json()
            assert message["type"] == "error"

    def test_expired_user_gets_notification(self, client):
        with client.websocket_connect("/ws/access/lapsed-user?locale=hu") as websocket:
            state = websocket.receive_json()
            assert state["data"]["state"]["kind"] == "expired"
            notification = websocket.receive_json()
            assert notification["type"] == "notification"
            assert notification["data"]["level"] == "error"
            assert notification["data"]["title"] == "VIP hozzáférés lejárt"

    def test_pushes_every_tick(self, provider):
        from fastapi.testclient import TestClient
        from web_ui.api.main import create_app

        fast = Settings(_env_file=None, REFRESH_INTERVAL_SECONDS=0.05)
        with TestClient(create_app(provider=provider, settings=fast)) as fast_client:
            with fast_client.websocket_connect("/ws/access/paid-user") as websocket:
                first = websocket.receive_json()
                second = websocket.receive_json()
                assert first["type"] == second["type"] == "state"
                assert second["data"]["state"]["resolved_at"] >= first["data"]["state"]["resolved_at"]

