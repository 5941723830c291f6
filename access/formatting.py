"""
Presentation helpers for access states.

Countdown strings, localized dates and the status bundle the UI renders next
to the countdown. Nothing here changes what access a user has.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from access.dates import as_utc, time_breakdown, utcnow
from access.labels import label, normalize_locale
from access.models import AccessKind, AccessState, GrantType, UrgencyLevel
from access.resolver import DEFAULT_TRIAL_DAYS

COUNTDOWN = "countdown"
LONG = "long"

# UI gradient tokens
COLOR_TRIAL = "from-blue-500 to-cyan-500"
COLOR_ACTIVE = "from-green-500 to-emerald-500"
COLOR_EXPIRING = "from-orange-500 to-red-500"
COLOR_LOCKED = "from-red-500 to-pink-500"
COLOR_ANONYMOUS = "from-gray-500 to-gray-600"


@dataclass(frozen=True)
class AccessDescription:
    """Everything the UI shows alongside a countdown"""
    text: str
    status_message: str
    recommended_action: str
    urgency: UrgencyLevel
    formatted_time_left: str
    formatted_expiry: str
    color: str

    def to_dict(self) -> dict:
        return {
            'text': self.text,
            'status_message': self.status_message,
            'recommended_action': self.recommended_action,
            'urgency': self.urgency.value,
            'formatted_time_left': self.formatted_time_left,
            'formatted_expiry': self.formatted_expiry,
            'color': self.color,
        }


def _unit(value: int, unit: str, locale: str) -> str:
    key = f"unit_{unit}" if value == 1 else f"unit_{unit}s"
    return f"{value} {label(key, locale)}"


def format_time_remaining(delta: timedelta, locale: str = None, style: str = COUNTDOWN) -> str:
    """
    Render a remaining duration, starting at the coarsest non-zero unit.

    countdown: "2d 3h 4m", "3h 4m 5s", "4m 5s", "5s"
    long:      "2 days, 3 hours left", ..., "5 seconds left"
    """
    if style not in (COUNTDOWN, LONG):
        raise ValueError(f"Unknown style '{style}'")

    locale = normalize_locale(locale)
    days, hours, minutes, seconds = time_breakdown(delta)

    if days == hours == minutes == seconds == 0:
        return label("expired", locale)

    if style == COUNTDOWN:
        d, h, m, s = (label(f"unit_{u}_short", locale) for u in ("day", "hour", "minute", "second"))
        if days > 0:
            return f"{days}{d} {hours}{h} {minutes}{m}"
        if hours > 0:
            return f"{hours}{h} {minutes}{m} {seconds}{s}"
        if minutes > 0:
            return f"{minutes}{m} {seconds}{s}"
        return f"{seconds}{s}"

    if days > 0:
        text = f"{_unit(days, 'day', locale)}, {_unit(hours, 'hour', locale)}"
    elif hours > 0:
        text = f"{_unit(hours, 'hour', locale)}, {_unit(minutes, 'minute', locale)}"
    elif minutes > 0:
        text = f"{_unit(minutes, 'minute', locale)}, {_unit(seconds, 'second', locale)}"
    else:
        text = _unit(seconds, 'second', locale)
    return f"{text} {label('left_suffix', locale)}"


def format_expiry(value: Optional[datetime], locale: str = None) -> str:
    """Absolute expiry date in UTC, e.g. 'Jul 27, 2025 18:30 UTC'"""
    if value is None:
        return label("not_available", locale)
    return as_utc(value).strftime(label("expiry_format", locale))


def format_relative_time(value: datetime, now: Optional[datetime] = None, locale: str = None) -> str:
    """'in 3 days' / '2 hours ago', using the coarsest non-zero unit"""
    now = as_utc(now) if now is not None else utcnow()
    diff = int((as_utc(value) - now).total_seconds())
    if diff == 0:
        return label("relative_now", locale)

    days, hours, minutes, seconds = time_breakdown(timedelta(seconds=abs(diff)))
    if days:
        text = _unit(days, 'day', locale)
    elif hours:
        text = _unit(hours, 'hour', locale)
    elif minutes:
        text = _unit(minutes, 'minute', locale)
    else:
        text = _unit(seconds, 'second', locale)

    key = "relative_future" if diff > 0 else "relative_past"
    return label(key, locale, value=text)


def urgency_level(state: AccessState) -> UrgencyLevel:
    if not state.has_access or state.hours_left <= 1:
        return UrgencyLevel.CRITICAL
    if state.hours_left <= 6:
        return UrgencyLevel.HIGH
    if state.days == 0:
        return UrgencyLevel.MEDIUM
    return UrgencyLevel.LOW


def _status_text(state: AccessState, locale: str, trial_days: int, authenticated: bool) -> str:
    if state.kind == AccessKind.TRIAL:
        return label("status_trial", locale, trial_days=trial_days, days=state.days, hours=state.hours)
    if state.kind == AccessKind.ACTIVE_SUBSCRIPTION:
        return label("status_active", locale, days=state.days, hours=state.hours)
    if state.kind == AccessKind.EXPIRED:
        if state.grant == GrantType.TRIAL:
            return label("status_trial_expired", locale, trial_days=trial_days)
        return label("status_expired", locale)
    return label("status_none" if authenticated else "status_anonymous", locale)


def _color(state: AccessState, authenticated: bool) -> str:
    if not authenticated:
        return COLOR_ANONYMOUS
    if not state.has_access:
        return COLOR_LOCKED
    if state.is_expiring_soon:
        return COLOR_EXPIRING
    return COLOR_TRIAL if state.kind == AccessKind.TRIAL else COLOR_ACTIVE


def describe_access(
    state: AccessState,
    locale: str = None,
    trial_days: int = DEFAULT_TRIAL_DAYS,
    authenticated: bool = True,
) -> AccessDescription:
    """Build the localized status bundle for a resolved state"""
    locale = normalize_locale(locale)
    urgency = urgency_level(state)

    if not state.has_access:
        key = "expired"
    elif urgency == UrgencyLevel.CRITICAL:
        key = "critical"
    else:
        key = urgency.value

    if state.kind == AccessKind.NO_ACCESS:
        formatted_time_left = label("not_available", locale)
    else:
        formatted_time_left = format_time_remaining(state.time_remaining, locale, LONG)

    return AccessDescription(
        text=_status_text(state, locale, trial_days, authenticated),
        status_message=label(f"message_{key}", locale, days=state.days),
        recommended_action=label(f"action_{key}", locale),
        urgency=urgency,
        formatted_time_left=formatted_time_left,
        formatted_expiry=format_expiry(state.expires_at, locale),
        color=_color(state, authenticated),
    )
