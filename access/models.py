"""
Access Data Models

Defines the record read from the identity/billing store and the access state
derived from it. The record is owned by the store; this package only reads it.
"""

import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Any, Dict
from datetime import datetime, timedelta, timezone

from access.dates import parse_timestamp, time_breakdown, TimeBreakdown

logger = logging.getLogger(__name__)


class AccessKind(str, Enum):
    """Resolved access kinds"""
    NO_ACCESS = "none"
    TRIAL = "trial"
    ACTIVE_SUBSCRIPTION = "active"
    EXPIRED = "expired"

    @property
    def grants_access(self) -> bool:
        return self in (AccessKind.TRIAL, AccessKind.ACTIVE_SUBSCRIPTION)


class GrantType(str, Enum):
    """Which grant decided an access state"""
    TRIAL = "trial"
    SUBSCRIPTION = "subscription"


class UrgencyLevel(str, Enum):
    """How urgently the user should renew"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Store column name -> record attribute. Both the database's snake_case
# columns and the camelCase names used by API clients are accepted.
_FIELD_ALIASES = {
    'subscription_active': 'subscription_active',
    'subscriptionActive': 'subscription_active',
    'subscription_expires_at': 'subscription_expires_at',
    'subscriptionExpiresAt': 'subscription_expires_at',
    'subscription_started_at': 'subscription_started_at',
    'subscriptionStartedAt': 'subscription_started_at',
    'current_period_start': 'subscription_started_at',
    'trial_expires_at': 'trial_expires_at',
    'trialExpiresAt': 'trial_expires_at',
    'trial_consumed': 'trial_consumed',
    'trialConsumed': 'trial_consumed',
    'is_trial_used': 'trial_consumed',
    'user_id': 'user_id',
    'userId': 'user_id',
    'id': 'user_id',
}

_TRUE_STRINGS = {"true", "t", "1", "yes", "y"}
_FALSE_STRINGS = {"false", "f", "0", "no", "n", ""}


def parse_flag(value: Any) -> bool:
    """
    Read a boolean column from a loosely typed row.

    Only real bools, 0/1 and true/false strings are understood; anything else
    is treated like an absent flag (False).
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    logger.warning(f"Ignoring malformed flag: {value!r}")
    return False


@dataclass(frozen=True)
class UserAccessRecord:
    """
    Subscription and trial fields of a user profile.

    Timestamps are normalized to aware UTC datetimes on construction; a value
    that cannot be parsed is stored as None.
    """
    subscription_active: bool = False
    subscription_expires_at: Optional[datetime] = None
    trial_expires_at: Optional[datetime] = None
    trial_consumed: bool = False
    subscription_started_at: Optional[datetime] = None
    user_id: Optional[str] = None

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        for name in ('subscription_expires_at', 'trial_expires_at', 'subscription_started_at'):
            object.__setattr__(self, name, parse_timestamp(getattr(self, name)))
        object.__setattr__(self, 'subscription_active', parse_flag(self.subscription_active))
        object.__setattr__(self, 'trial_consumed', parse_flag(self.trial_consumed))
        if self.user_id is not None:
            object.__setattr__(self, 'user_id', str(self.user_id))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserAccessRecord':
        """Create from a user-profile row or API payload"""
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = _FIELD_ALIASES.get(key)
            if attr is None or attr in kwargs:
                continue
            kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Convert to dictionary using the store's column names"""
        return {
            'user_id': self.user_id,
            'subscription_active': self.subscription_active,
            'subscription_expires_at': self.subscription_expires_at.isoformat() if self.subscription_expires_at else None,
            'subscription_started_at': self.subscription_started_at.isoformat() if self.subscription_started_at else None,
            'trial_expires_at': self.trial_expires_at.isoformat() if self.trial_expires_at else None,
            'is_trial_used': self.trial_consumed,
        }


@dataclass(frozen=True)
class AccessState:
    """
    Point-in-time answer to "does this user have access, and under what grant".

    Recomputed on every read; never persisted.
    """
    kind: AccessKind
    time_remaining: timedelta = timedelta(0)
    progress_percentage: float = 0.0
    is_expiring_soon: bool = False
    expires_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    grant: Optional[GrantType] = None
    resolved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_access(self) -> bool:
        return self.kind.grants_access

    @property
    def breakdown(self) -> TimeBreakdown:
        return time_breakdown(self.time_remaining)

    @property
    def days(self) -> int:
        return self.breakdown.days

    @property
    def hours(self) -> int:
        return self.breakdown.hours

    @property
    def minutes(self) -> int:
        return self.breakdown.minutes

    @property
    def seconds(self) -> int:
        return self.breakdown.seconds

    @property
    def hours_left(self) -> float:
        """Total remaining time in (fractional) hours"""
        return self.time_remaining.total_seconds() / 3600

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses"""
        parts = self.breakdown
        return {
            'kind': self.kind.value,
            'has_access': self.has_access,
            'time_remaining_seconds': int(self.time_remaining.total_seconds()),
            'days': parts.days,
            'hours': parts.hours,
            'minutes': parts.minutes,
            'seconds': parts.seconds,
            'progress_percentage': round(self.progress_percentage, 2),
            'is_expiring_soon': self.is_expiring_soon,
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'grant': self.grant.value if self.grant else None,
            'resolved_at': self.resolved_at.isoformat(),
        }
