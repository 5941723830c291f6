"""
Access Routes - API endpoints for VIP access status

The dashboard reads the resolved state from here instead of computing it in
the browser. The websocket pushes a fresh state every refresh tick for the
live countdown.
"""

import asyncio
import json
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, WebSocket, WebSocketDisconnect

from access import (
    ExpiryNotifier,
    UserAccessRecord,
    describe_access,
    resolve_access,
    should_show_upgrade_prompt,
    trial_details,
)
from access.labels import normalize_locale
from access.providers import RecordProvider
from config import Settings
from utils.logger import logger
from web_ui.api.schemas.access_schemas import AccessRecordRequest, AccessStatusResponse


router = APIRouter(prefix="/access", tags=["access"])
ws_router = APIRouter()


# ========== Dependencies ==========

def get_record_provider(request: Request) -> RecordProvider:
    return request.app.state.record_provider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def build_status(
    record: Optional[UserAccessRecord],
    settings: Settings,
    locale: Optional[str] = None,
    now: Optional[datetime] = None,
    user_id: Optional[str] = None,
    authenticated: bool = True,
) -> dict:
    """Resolve a record and bundle everything the dashboard renders"""
    locale = normalize_locale(locale or settings.DEFAULT_LOCALE)
    options = settings.resolver_options()

    state = resolve_access(record, now, **options)
    trial = trial_details(
        record, now,
        trial_days=settings.TRIAL_DURATION_DAYS,
        locale=locale,
        expiring_soon_hours=settings.EXPIRING_SOON_HOURS,
    )

    return {
        "user_id": user_id,
        "locale": locale,
        "state": state.to_dict(),
        "description": describe_access(
            state, locale,
            trial_days=settings.TRIAL_DURATION_DAYS,
            authenticated=authenticated,
        ).to_dict(),
        "trial": trial.to_dict() if trial else None,
        "show_upgrade_prompt": should_show_upgrade_prompt(state),
    }


# ========== Routes ==========

@router.get("/status/{user_id}", response_model=AccessStatusResponse)
async def get_access_status(
    user_id: str,
    locale: Optional[str] = Query(None, description="Label locale, e.g. 'en' or 'hu'"),
    provider: RecordProvider = Depends(get_record_provider),
    settings: Settings = Depends(get_settings),
):
    """
    Get the current access status of a user.

    An unknown user resolves like a signed-out caller (kind 'none'); the
    store, not this endpoint, decides whether a profile exists.
    """
    record = provider.get_record(user_id)
    return build_status(
        record, settings, locale,
        user_id=user_id,
        authenticated=record is not None,
    )


@router.post("/resolve", response_model=AccessStatusResponse)
async def resolve_access_record(
    request: AccessRecordRequest,
    locale: Optional[str] = Query(None, description="Label locale, e.g. 'en' or 'hu'"),
    settings: Settings = Depends(get_settings),
):
    """
    Resolve access for the given fields without a stored profile.

    Malformed timestamps are treated as absent rather than rejected.
    """
    payload = request.model_dump(exclude={"now"})
    record = UserAccessRecord.from_dict(payload)
    return build_status(record, settings, locale, now=request.now)


# ========== WebSocket ==========

async def _send_state(
    websocket: WebSocket,
    user_id: str,
    locale: Optional[str],
    provider: RecordProvider,
    settings: Settings,
    notifier: ExpiryNotifier,
) -> None:
    """Send the resolved state, plus a notification when one is due"""
    record = provider.get_record(user_id)
    state = resolve_access(record, **settings.resolver_options())
    payload = build_status(
        record, settings, locale,
        now=state.resolved_at,
        user_id=user_id,
        authenticated=record is not None,
    )
    await websocket.send_json({"type": "state", "data": payload})

    notification = notifier.check(state)
    if notification:
        await websocket.send_json({"type": "notification", "data": notification.to_dict()})


@ws_router.websocket("/ws/access/{user_id}")
async def access_websocket(
    websocket: WebSocket,
    user_id: str,
    locale: Optional[str] = Query(None),
):
    """
    Live access countdown.

    Sends {"type": "state"} immediately and then every refresh tick, and
    {"type": "notification"} when an expiry warning is due. Clients may send
    {"type": "ping"} to get {"type": "pong"}. The loop ends on disconnect.
    """
    provider: RecordProvider = websocket.app.state.record_provider
    settings: Settings = websocket.app.state.settings
    notifier = ExpiryNotifier(locale=locale or settings.DEFAULT_LOCALE, trial_days=settings.TRIAL_DURATION_DAYS)

    await websocket.accept()
    logger.info(f"Access WebSocket connected for user: {user_id}")

    try:
        await _send_state(websocket, user_id, locale, provider, settings, notifier)

        while True:
            try:
                # Wait for a client message, or push the next tick on timeout
                data = await asyncio.wait_for(
                    websocket.receive_text(),
                    timeout=settings.REFRESH_INTERVAL_SECONDS,
                )
            except asyncio.TimeoutError:
                await _send_state(websocket, user_id, locale, provider, settings, notifier)
                continue

            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_json({"type": "error", "message": "Invalid JSON"})
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})

    except WebSocketDisconnect:
        logger.info(f"Access WebSocket disconnected for user: {user_id}")
    except Exception as e:
        logger.error(f"Access WebSocket error for {user_id}: {e}")
