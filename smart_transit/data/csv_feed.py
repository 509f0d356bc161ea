"""Parser for the four-column schedule CSV feeds."""

from __future__ import annotations

import logging
from pathlib import Path

from smart_transit.data.models import RawCsvRow

logger = logging.getLogger(__name__)

FIELD_COUNT = 4


class ScheduleDataError(Exception):
    """Raised when a schedule feed cannot be turned into rows."""


class DataSourceNotFound(ScheduleDataError):
    """Raised when a required feed file is missing or unreadable."""

    def __init__(self, source: str = "") -> None:
        self.source = source
        message = "Schedule file not found"
        if source:
            message = f"{message}: {source}"
        super().__init__(message)


class InvalidData(ScheduleDataError):
    """Raised when a feed has no data rows after its header."""

    def __init__(self, source: str = "") -> None:
        self.source = source
        message = "Invalid schedule data"
        if source:
            message = f"{message}: {source}"
        super().__init__(message)


def parse_csv_content(content: str, source: str = "") -> list[RawCsvRow]:
    """Parse feed text into rows; malformed rows are dropped, not reported."""
    lines = content.splitlines()
    if len(lines) <= 1:
        raise InvalidData(source)

    rows: list[RawCsvRow] = []
    dropped = 0
    for raw_line in lines[1:]:
        line = raw_line.strip()
        if not line:
            continue

        fields = line.split(",")
        if len(fields) < FIELD_COUNT:
            dropped += 1
            continue

        bound, departure, arrival, route = (field.strip() for field in fields[:FIELD_COUNT])
        rows.append(
            RawCsvRow(
                bound=bound,
                departure_time=departure,
                arrival_time=arrival,
                route_short_id=route,
            )
        )

    if dropped:
        logger.debug("Dropped %d malformed row(s) from %s", dropped, source or "feed")
    return rows


def load_csv_feed(path: str | Path) -> list[RawCsvRow]:
    """Read and parse a feed file."""
    feed_path = Path(path)
    try:
        content = feed_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DataSourceNotFound(str(feed_path)) from exc
    except UnicodeDecodeError as exc:
        raise InvalidData(str(feed_path)) from exc
    return parse_csv_content(content, source=str(feed_path))


__all__ = [
    "ScheduleDataError",
    "DataSourceNotFound",
    "InvalidData",
    "parse_csv_content",
    "load_csv_feed",
]
