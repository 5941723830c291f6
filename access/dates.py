"""
Date helpers for subscription and trial windows.

All datetimes handed out by this module are timezone-aware UTC. Naive input
is assumed to already be UTC, which is how the store writes timestamps.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, NamedTuple, Optional

logger = logging.getLogger(__name__)

# Postgres trims trailing zeros from fractions and may write "+00" offsets
_FRACTION_RE = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")
_SHORT_OFFSET_RE = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)([+-]\d{2}):?(\d{2})?$")


class TimeBreakdown(NamedTuple):
    days: int
    hours: int
    minutes: int
    seconds: int


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime or convert an aware one"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _normalize_iso(text: str) -> str:
    """Rewrite store ISO variants into the form datetime.fromisoformat accepts"""
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '000000')[:6]}", text, count=1)
    return _SHORT_OFFSET_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}:{m.group(3) or '00'}", text, count=1)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a store timestamp into an aware UTC datetime.

    Accepts datetime objects, ISO-8601 strings (a trailing 'Z' is allowed)
    and Unix epoch seconds. Anything that cannot be parsed is treated as an
    absent field and returns None instead of raising.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return as_utc(value)

    # bool is an int subclass but never a valid timestamp
    if isinstance(value, bool):
        logger.warning(f"Ignoring malformed timestamp: {value!r}")
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning(f"Ignoring out-of-range epoch timestamp: {value!r}")
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return as_utc(datetime.fromisoformat(_normalize_iso(text)))
        except ValueError:
            logger.warning(f"Ignoring malformed timestamp: {value!r}")
            return None

    logger.warning(f"Ignoring timestamp of unsupported type {type(value).__name__}: {value!r}")
    return None


def time_breakdown(delta: timedelta) -> TimeBreakdown:
    """Split a duration into whole days/hours/minutes/seconds (floored)"""
    total = int(delta.total_seconds())
    if total <= 0:
        return TimeBreakdown(0, 0, 0, 0)

    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeBreakdown(days, hours, minutes, seconds)


def progress_percentage(start: datetime, end: datetime, now: datetime) -> float:
    """Elapsed fraction of [start, end] at `now`, clamped to 0-100"""
    total = (end - start).total_seconds()
    if total <= 0:
        return 100.0 if now >= end else 0.0

    elapsed = (now - start).total_seconds()
    return min(100.0, max(0.0, elapsed / total * 100))
