"""
Access-Status Resolver

Maps a user's subscription/trial fields and the current time to a single
AccessState. This is the only place access is decided; the API routes, the
watcher and the presentation helpers all go through resolve_access().

Usage:
    state = resolve_access(record)
    if state.has_access:
        ...

    # Deterministic (tests, replays)
    state = resolve_access(record, now=datetime(2025, 7, 24, tzinfo=timezone.utc))
"""

from datetime import datetime, timedelta
from typing import Optional

from access.dates import as_utc, progress_percentage, utcnow
from access.models import AccessKind, AccessState, GrantType, UserAccessRecord
from utils.logger import logger

TRIAL_FIRST = "trial_first"
SUBSCRIPTION_FIRST = "subscription_first"
PRECEDENCES = (TRIAL_FIRST, SUBSCRIPTION_FIRST)

DEFAULT_TRIAL_DAYS = 3
DEFAULT_EXPIRING_SOON_HOURS = 24


def _grant_state(
    kind: AccessKind,
    grant: GrantType,
    expires_at: datetime,
    started_at: Optional[datetime],
    now: datetime,
    trial_days: int,
    expiring_soon: timedelta,
) -> AccessState:
    # Without a persisted start, assume the grant lasted one trial length
    if started_at is None or started_at >= expires_at:
        started_at = expires_at - timedelta(days=trial_days)

    remaining = expires_at - now
    return AccessState(
        kind=kind,
        time_remaining=remaining,
        progress_percentage=progress_percentage(started_at, expires_at, now),
        is_expiring_soon=remaining <= expiring_soon,
        expires_at=expires_at,
        started_at=started_at,
        grant=grant,
        resolved_at=now,
    )


def _live_trial(record: UserAccessRecord, now: datetime) -> bool:
    return (
        not record.trial_consumed
        and record.trial_expires_at is not None
        and record.trial_expires_at > now
    )


def _live_subscription(record: UserAccessRecord, now: datetime) -> bool:
    return (
        record.subscription_active
        and record.subscription_expires_at is not None
        and record.subscription_expires_at > now
    )


def resolve_access(
    record: Optional[UserAccessRecord],
    now: Optional[datetime] = None,
    *,
    precedence: str = TRIAL_FIRST,
    trial_days: int = DEFAULT_TRIAL_DAYS,
    expiring_soon_hours: int = DEFAULT_EXPIRING_SOON_HOURS,
) -> AccessState:
    """
    Resolve the access state of a user at `now`.

    Args:
        record: The user's access record, or None for an unauthenticated caller
        now: Evaluation instant; defaults to the current UTC time
        precedence: "trial_first" checks a live trial before a live
            subscription, "subscription_first" the other way round
        trial_days: Trial length, used to estimate a missing window start
        expiring_soon_hours: Remaining time at or below which a granting
            state is flagged as expiring soon

    Returns:
        AccessState. Never raises for malformed record data.
    """
    if precedence not in PRECEDENCES:
        raise ValueError(f"Unknown precedence '{precedence}', expected one of {PRECEDENCES}")

    now = as_utc(now) if now is not None else utcnow()

    if record is None:
        return AccessState(kind=AccessKind.NO_ACCESS, resolved_at=now)

    expiring_soon = timedelta(hours=expiring_soon_hours)

    def trial_state() -> AccessState:
        return _grant_state(
            AccessKind.TRIAL, GrantType.TRIAL, record.trial_expires_at, None,
            now, trial_days, expiring_soon,
        )

    def subscription_state() -> AccessState:
        return _grant_state(
            AccessKind.ACTIVE_SUBSCRIPTION, GrantType.SUBSCRIPTION, record.subscription_expires_at,
            record.subscription_started_at, now, trial_days, expiring_soon,
        )

    checks = [(_live_trial, trial_state), (_live_subscription, subscription_state)]
    if precedence == SUBSCRIPTION_FIRST:
        checks.reverse()

    for is_live, build in checks:
        if is_live(record, now):
            state = build()
            logger.debug(
                f"Resolved access for {record.user_id or '<anonymous>'}: "
                f"{state.kind.value}, {state.time_remaining} left"
            )
            return state

    # Nothing live. Any timestamp we did see has lapsed.
    lapsed = [
        (ts, grant) for ts, grant in (
            (record.trial_expires_at, GrantType.TRIAL),
            (record.subscription_expires_at, GrantType.SUBSCRIPTION),
        )
        if ts is not None and ts <= now
    ]
    if lapsed:
        expires_at, grant = max(lapsed, key=lambda item: item[0])
        return AccessState(
            kind=AccessKind.EXPIRED,
            progress_percentage=100.0,
            expires_at=expires_at,
            grant=grant,
            resolved_at=now,
        )

    return AccessState(kind=AccessKind.NO_ACCESS, resolved_at=now)


def has_premium_access(record: Optional[UserAccessRecord], now: Optional[datetime] = None, **options) -> bool:
    """Whether the user may use VIP tools right now"""
    return resolve_access(record, now, **options).has_access
