#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides shared fixtures and configuration for all tests.
"""

import pytest
import sys
import os
from datetime import datetime, timedelta, timezone

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from access.models import UserAccessRecord
from access.providers import InMemoryRecordProvider
from config import Settings


# ============================================================================
# ASYNCIO CONFIGURATION
# ============================================================================
# Note: pytest-asyncio is configured with asyncio_mode = "auto" in pyproject.toml


# ============================================================================
# TIME FIXTURES
# ============================================================================

FIXED_NOW = datetime(2025, 7, 24, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """A fixed evaluation instant so every resolution is deterministic"""
    return FIXED_NOW


# ============================================================================
# RECORD FIXTURES
# ============================================================================

@pytest.fixture
def make_record(now):
    """
    Build a UserAccessRecord with expiries given as offsets from `now`.

    Usage:
        make_record(trial_in=timedelta(days=2))
        make_record(trial_consumed=True, subscription_in=timedelta(days=10))
    """
    def _make(trial_in=None, subscription_in=None, subscription_active=None,
              trial_consumed=False, subscription_started_in=None, user_id="user-1"):
        if subscription_active is None:
            subscription_active = subscription_in is not None
        return UserAccessRecord(
            subscription_active=subscription_active,
            subscription_expires_at=now + subscription_in if subscription_in is not None else None,
            subscription_started_at=now + subscription_started_in if subscription_started_in is not None else None,
            trial_expires_at=now + trial_in if trial_in is not None else None,
            trial_consumed=trial_consumed,
            user_id=user_id,
        )
    return _make


@pytest.fixture
def trial_record(make_record):
    """Unconsumed trial with two days left"""
    return make_record(trial_in=timedelta(days=2))


@pytest.fixture
def subscription_record(make_record):
    """Consumed trial and a paid subscription with ten days left"""
    return make_record(trial_consumed=True, subscription_in=timedelta(days=10))


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def test_settings():
    """Settings with a long tick so websocket tests see a single push"""
    return Settings(
        TRIAL_DURATION_DAYS=3,
        EXPIRING_SOON_HOURS=24,
        ACCESS_PRECEDENCE="trial_first",
        REFRESH_INTERVAL_SECONDS=60.0,
        DEFAULT_LOCALE="en",
    )


@pytest.fixture
def provider():
    """In-memory provider with one user per access kind (relative to wall clock)"""
    wall_now = datetime.now(timezone.utc)
    return InMemoryRecordProvider({
        "trial-user": {
            "trial_expires_at": (wall_now + timedelta(days=2)).isoformat(),
            "is_trial_used": False,
            "subscription_active": False,
        },
        "paid-user": {
            "trial_expires_at": (wall_now - timedelta(days=30)).isoformat(),
            "is_trial_used": True,
            "subscription_active": True,
            "subscription_expires_at": (wall_now + timedelta(days=10)).isoformat(),
        },
        "lapsed-user": {
            "trial_expires_at": (wall_now - timedelta(hours=1)).isoformat(),
            "is_trial_used": False,
            "subscription_active": False,
        },
    })


@pytest.fixture
def app(provider, test_settings):
    """Create FastAPI application for testing"""
    from web_ui.api.main import create_app
    return create_app(provider=provider, settings=test_settings)


@pytest.fixture
def client(app):
    """Create synchronous test client"""
    from fastapi.testclient import TestClient
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (may take several seconds)"
    )
