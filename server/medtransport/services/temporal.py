"""Pickup window reconstruction between split and combined forms.

The upstream API stores a pickup as separate ``preferred_date`` (YYYY-MM-DD)
and ``preferred_time`` (HH:MM:SS) strings expressed in one configured
timezone. The application holds a single timezone-aware instant. Neither
direction raises: splitting bad input gives ``(None, None)`` and joining bad
input gives the clock's current instant.

Defaults when joining:
    both fields missing  -> clock()
    time missing         -> 00:00:00 on the given date
    date missing         -> the clock's current date in the configured timezone
    unparseable input    -> clock()
"""

import logging
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Callable, Optional

from ..core.observability import metrics_collector

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_PICKUP_TIME = time(0, 0, 0)


def utc_now() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_instant(value: Any, *, tz: tzinfo = timezone.utc) -> Optional[datetime]:
    """
    Parse a datetime or ISO 8601 string into an aware datetime.

    Naive values are taken to be in ``tz``. A trailing ``Z`` is accepted.

    Returns:
        Aware datetime, or None when the value cannot be parsed
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, DEFAULT_PICKUP_TIME)
    else:
        text = _text(value)
        if text is None:
            return None
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz)
    return moment


def split_pickup_window(
    timestamp: Any,
    *,
    tz: tzinfo = timezone.utc,
) -> tuple[Optional[str], Optional[str]]:
    """
    Split a combined instant into upstream date and time fields.

    Args:
        timestamp: Aware or naive datetime, or ISO 8601 string
        tz: Timezone the upstream fields are expressed in

    Returns:
        ``(YYYY-MM-DD, HH:MM:SS)``, or ``(None, None)`` for empty or malformed input
    """
    moment = parse_instant(timestamp, tz=tz)
    if moment is None:
        if timestamp not in (None, ""):
            logger.warning("Unparseable pickup timestamp", extra={"timestamp": str(timestamp)})
            metrics_collector.record_temporal_fallback("split_unparseable")
        return None, None

    try:
        local = moment.astimezone(tz)
    except (OverflowError, ValueError):
        logger.warning("Pickup timestamp out of range", extra={"timestamp": str(timestamp)})
        metrics_collector.record_temporal_fallback("split_out_of_range")
        return None, None

    # sub-second precision is not representable upstream
    return local.date().isoformat(), local.time().replace(microsecond=0).isoformat()


def join_pickup_window(
    preferred_date: Optional[str],
    preferred_time: Optional[str],
    *,
    clock: Clock = utc_now,
    tz: tzinfo = timezone.utc,
) -> datetime:
    """
    Join upstream date and time fields into one UTC instant.

    Args:
        preferred_date: ``YYYY-MM-DD`` or None
        preferred_time: ``HH:MM[:SS]`` or None
        clock: Source of the current instant for the documented defaults
        tz: Timezone the upstream fields are expressed in

    Returns:
        Timezone-aware datetime in UTC
    """
    date_text = _text(preferred_date)
    time_text = _text(preferred_time)
    now = _as_utc(clock())

    if date_text is None and time_text is None:
        metrics_collector.record_temporal_fallback("both_missing")
        return now

    try:
        if date_text is None:
            metrics_collector.record_temporal_fallback("date_missing")
            day = now.astimezone(tz).date()
        else:
            day = date.fromisoformat(date_text)

        if time_text is None:
            metrics_collector.record_temporal_fallback("time_missing")
            wall = DEFAULT_PICKUP_TIME
        else:
            wall = time.fromisoformat(time_text)

        combined = datetime.combine(day, wall)
        if combined.tzinfo is None:
            combined = combined.replace(tzinfo=tz)
        return combined.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        logger.warning(
            "Unparseable pickup window, using current instant",
            extra={"preferred_date": date_text, "preferred_time": time_text, "error": str(e)}
        )
        metrics_collector.record_temporal_fallback("join_unparseable")
        return now
