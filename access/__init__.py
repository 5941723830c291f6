"""
VIP Access Status

Derives a user's access to the VIP tools (arbitrage calculator, AI prompt
generator, VIP tips) from the subscription and trial fields kept by the
identity/billing store:
- One resolver for every surface (API, websocket countdown, watcher)
- Trial and paid subscription windows with live countdown metrics
- Locale label maps instead of per-language copies of the logic

Architecture:
- The store owns the record; this package never writes to it
- Providers are injected, never module-level clients
- States are recomputed on every read and never persisted
"""

from access.models import (
    AccessKind,
    AccessState,
    GrantType,
    UrgencyLevel,
    UserAccessRecord,
)
from access.resolver import (
    resolve_access,
    has_premium_access,
    TRIAL_FIRST,
    SUBSCRIPTION_FIRST,
)
from access.formatting import (
    AccessDescription,
    describe_access,
    format_expiry,
    format_relative_time,
    format_time_remaining,
    urgency_level,
)
from access.notifications import ExpiryNotifier, Notification, should_show_upgrade_prompt
from access.trial import TrialDetails, trial_details
from access.providers import RecordProvider, InMemoryRecordProvider
from access.watcher import AccessStatusWatcher

__all__ = [
    # Core resolution
    'AccessKind',
    'AccessState',
    'GrantType',
    'UrgencyLevel',
    'UserAccessRecord',
    'resolve_access',
    'has_premium_access',
    'TRIAL_FIRST',
    'SUBSCRIPTION_FIRST',
    # Presentation
    'AccessDescription',
    'describe_access',
    'format_expiry',
    'format_relative_time',
    'format_time_remaining',
    'urgency_level',
    # Notifications
    'ExpiryNotifier',
    'Notification',
    'should_show_upgrade_prompt',
    # Trial panel
    'TrialDetails',
    'trial_details',
    # Providers and live refresh
    'RecordProvider',
    'InMemoryRecordProvider',
    'AccessStatusWatcher',
]
