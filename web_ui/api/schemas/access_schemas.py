"""Access status API schemas"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class AccessRecordRequest(BaseModel):
    """Subscription/trial fields to resolve without a stored profile"""
    subscription_active: bool = False
    subscription_expires_at: Optional[Union[datetime, str, float]] = None
    subscription_started_at: Optional[Union[datetime, str, float]] = None
    trial_expires_at: Optional[Union[datetime, str, float]] = None
    is_trial_used: bool = Field(False, description="Trial already consumed")
    now: Optional[datetime] = Field(None, description="Evaluation instant, defaults to server time")


class AccessStateOut(BaseModel):
    """Resolved access state"""
    kind: str  # none, trial, active, expired
    has_access: bool
    time_remaining_seconds: int
    days: int
    hours: int
    minutes: int
    seconds: int
    progress_percentage: float
    is_expiring_soon: bool
    expires_at: Optional[str] = None
    started_at: Optional[str] = None
    grant: Optional[str] = None  # trial, subscription
    resolved_at: str


class AccessDescriptionOut(BaseModel):
    """Localized presentation of an access state"""
    text: str
    status_message: str
    recommended_action: str
    urgency: str  # low, medium, high, critical
    formatted_time_left: str
    formatted_expiry: str
    color: str


class TrialDetailsOut(BaseModel):
    """VIP trial panel data"""
    trial_days_total: int
    days_used: int
    upgrade_message: str
    benefits: List[str]
    expires_at: Optional[str] = None
    is_expiring_soon: bool


class AccessStatusResponse(BaseModel):
    """Full access status for the dashboard"""
    user_id: Optional[str] = None
    locale: str
    state: AccessStateOut
    description: AccessDescriptionOut
    trial: Optional[TrialDetailsOut] = None
    show_upgrade_prompt: bool
