"""Rolling time-of-day window for upcoming departures."""

from __future__ import annotations

from datetime import datetime

DEFAULT_WINDOW_MINUTES = 120


def minutes_since_midnight(value: str) -> int | None:
    """Convert an "HH:mm" string to minutes since midnight; None if unparseable."""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (ValueError, AttributeError):
        return None
    return parsed.hour * 60 + parsed.minute


def is_within_window(
    entry_time: str,
    now: datetime,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> bool:
    """True if entry_time falls in [now, now + window] on the same day.

    Times already past today are excluded rather than read as tomorrow.
    """
    entry_minutes = minutes_since_midnight(entry_time)
    if entry_minutes is None:
        return False
    now_minutes = now.hour * 60 + now.minute
    return now_minutes <= entry_minutes <= now_minutes + window_minutes


__all__ = ["DEFAULT_WINDOW_MINUTES", "minutes_since_midnight", "is_within_window"]
