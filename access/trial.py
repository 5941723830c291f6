"""VIP trial details for the upsell panel"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from access.labels import benefits, label
from access.models import AccessState, GrantType, UserAccessRecord
from access.resolver import DEFAULT_TRIAL_DAYS, resolve_access


@dataclass(frozen=True)
class TrialDetails:
    state: AccessState
    trial_days_total: int
    days_used: int
    upgrade_message: str
    benefits: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'trial_days_total': self.trial_days_total,
            'days_used': self.days_used,
            'upgrade_message': self.upgrade_message,
            'benefits': list(self.benefits),
            'expires_at': self.state.expires_at.isoformat() if self.state.expires_at else None,
            'is_expiring_soon': self.state.is_expiring_soon,
        }


def trial_details(
    record: Optional[UserAccessRecord],
    now: Optional[datetime] = None,
    trial_days: int = DEFAULT_TRIAL_DAYS,
    locale: str = None,
    **options,
) -> Optional[TrialDetails]:
    """
    Trial panel data, or None if the user has no unconsumed trial on record.

    The state is resolved with trial precedence so the panel always reflects
    the trial window, even where the account-wide precedence prefers a paid
    subscription.
    """
    if record is None or record.trial_consumed or record.trial_expires_at is None:
        return None

    options.pop("precedence", None)
    state = resolve_access(record, now, trial_days=trial_days, precedence="trial_first", **options)
    # A lapsed trial resolves to EXPIRED or to the subscription behind it
    trial_live = state.grant == GrantType.TRIAL and state.has_access
    days_remaining = state.days if trial_live else 0
    urgent = not trial_live or state.is_expiring_soon

    return TrialDetails(
        state=state,
        trial_days_total=trial_days,
        days_used=max(0, trial_days - days_remaining),
        upgrade_message=label("upgrade_urgent" if urgent else "upgrade_relaxed", locale),
        benefits=benefits(locale),
    )
