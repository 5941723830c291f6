"""
Expiry notifications

Turns a stream of access states into occasional user-facing warnings as a
trial runs out, throttled so the same view is not spammed every tick.

Usage:
    notifier = ExpiryNotifier(locale="hu")
    notification = notifier.check(state)
    if notification:
        push_to_ui(notification.to_dict())
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from access.dates import as_utc
from access.labels import label, normalize_locale
from access.models import AccessKind, AccessState
from access.resolver import DEFAULT_TRIAL_DAYS
from utils.logger import logger


@dataclass(frozen=True)
class Notification:
    level: str  # warning, critical, error
    title: str
    message: str
    action: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            'level': self.level,
            'title': self.title,
            'message': self.message,
            'action': self.action,
            'created_at': self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class NotificationRule:
    """Fires for a trial whose remaining hours fall in (min_hours, max_hours]"""
    key: str
    level: str
    max_hours: float
    min_hours: float
    cooldown: timedelta


TRIAL_RULES = (
    NotificationRule("trial_24h", "warning", 24, 12, timedelta(hours=6)),
    NotificationRule("trial_12h", "warning", 12, 6, timedelta(hours=3)),
    NotificationRule("trial_1h", "critical", 1, 0, timedelta(minutes=30)),
)
EXPIRED_COOLDOWN = timedelta(hours=24)


def should_show_upgrade_prompt(state: AccessState) -> bool:
    return state.kind == AccessKind.TRIAL and state.hours_left <= 24


class ExpiryNotifier:
    """
    Per-view notification throttle.

    The cooldown is measured from the last notification of any kind, so a
    view never gets two notices closer together than the active rule allows.
    """

    def __init__(self, locale: str = None, trial_days: int = DEFAULT_TRIAL_DAYS):
        self.locale = normalize_locale(locale)
        self.trial_days = trial_days
        self._last_sent: Optional[datetime] = None
        self._lock = threading.Lock()

    @property
    def last_sent(self) -> Optional[datetime]:
        return self._last_sent

    def reset(self) -> None:
        with self._lock:
            self._last_sent = None

    def _cooled_down(self, now: datetime, cooldown: timedelta) -> bool:
        return self._last_sent is None or (now - self._last_sent) > cooldown

    def _build(self, key: str, level: str, state: AccessState, now: datetime) -> Notification:
        hours = round(state.hours_left)
        values = {'trial_days': self.trial_days, 'hours': hours}
        return Notification(
            level=level,
            title=label(f"notify_{key}_title", self.locale, **values),
            message=label(f"notify_{key}_message", self.locale, **values),
            action=label(f"notify_{key}_action", self.locale),
            created_at=now,
        )

    def check(self, state: AccessState, now: Optional[datetime] = None) -> Optional[Notification]:
        """Return a notification if one is due for this state, else None"""
        now = as_utc(now) if now is not None else state.resolved_at

        with self._lock:
            if state.kind == AccessKind.TRIAL:
                hours_left = state.hours_left
                for rule in TRIAL_RULES:
                    if rule.min_hours < hours_left <= rule.max_hours:
                        if not self._cooled_down(now, rule.cooldown):
                            return None
                        notification = self._build(rule.key, rule.level, state, now)
                        break
                else:
                    return None

            elif state.kind == AccessKind.EXPIRED:
                if not self._cooled_down(now, EXPIRED_COOLDOWN):
                    return None
                notification = self._build("expired", "error", state, now)

            else:
                return None

            self._last_sent = now

        logger.info(f"Access notification: {notification.title}")
        return notification
