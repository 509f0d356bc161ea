"""Hex color parsing and display helpers."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
import string

from smart_transit.data.schedule_builder import LAST_UPDATED_FORMAT

RGB = tuple[int, int, int]

FALLBACK_COLOR: RGB = (0, 0, 0)


def parse_hex_color(value: str) -> RGB:
    """Parse "#RGB", "#RRGGBB" or "#AARRGGBB"; other lengths give black."""
    digits = "".join(ch for ch in value if ch in string.ascii_letters + string.digits)
    try:
        number = int(digits, 16) if digits else 0
    except ValueError:
        return FALLBACK_COLOR

    if len(digits) == 3:
        return ((number >> 8) * 17, (number >> 4 & 0xF) * 17, (number & 0xF) * 17)
    if len(digits) == 6:
        return (number >> 16, number >> 8 & 0xFF, number & 0xFF)
    if len(digits) == 8:
        # Alpha is dropped; the board has no transparency.
        return (number >> 16 & 0xFF, number >> 8 & 0xFF, number & 0xFF)
    return FALLBACK_COLOR


def format_last_updated(value: str, tz: tzinfo | None = None) -> str:
    """Render a snapshot timestamp as a short clock time, or "Unknown"."""
    try:
        parsed = datetime.strptime(value, LAST_UPDATED_FORMAT).replace(tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return "Unknown"
    clock = parsed.astimezone(tz).strftime("%I:%M %p")
    return clock.lstrip("0") if clock.startswith("0") else clock


__all__ = ["RGB", "FALLBACK_COLOR", "parse_hex_color", "format_last_updated"]
