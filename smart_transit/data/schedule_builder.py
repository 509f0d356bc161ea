"""Assemble a ScheduleSnapshot from the northbound and southbound feeds."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
from typing import Iterable, Sequence

from smart_transit.data.catalog import NORTH_STOP_ID, ROUTES, SOUTH_STOP_ID, STOPS, route_id_for
from smart_transit.data.csv_feed import load_csv_feed
from smart_transit.data.models import RawCsvRow, Route, ScheduleEntry, ScheduleSnapshot, Stop

logger = logging.getLogger(__name__)

LAST_UPDATED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_last_updated(now: datetime | None = None) -> str:
    """Sortable UTC timestamp, seconds precision."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(LAST_UPDATED_FORMAT)


def _entries_for_feed(
    rows: Iterable[RawCsvRow],
    prefix: str,
    stop_id: str,
    first_id: int,
) -> list[ScheduleEntry]:
    entries = []
    entry_id = first_id
    for row in rows:
        # Feed departure lands in arrival_time and vice versa; existing
        # consumers depend on this mapping.
        entries.append(
            ScheduleEntry(
                id=f"{prefix}_{entry_id}",
                route_id=route_id_for(row.route_short_id),
                stop_id=stop_id,
                arrival_time=row.departure_time,
                departure_time=row.arrival_time,
                is_real_time=False,
                delay=None,
            )
        )
        entry_id += 1
    return entries


def build_snapshot(
    north_feed: str | Path,
    south_feed: str | Path,
    *,
    stops: Sequence[Stop] = STOPS,
    routes: Sequence[Route] = ROUTES,
    now: datetime | None = None,
) -> ScheduleSnapshot:
    """Parse both feeds and return a fresh snapshot; parser errors propagate."""
    north_rows = load_csv_feed(north_feed)
    south_rows = load_csv_feed(south_feed)

    north_entries = _entries_for_feed(north_rows, "north", NORTH_STOP_ID, first_id=1)
    south_entries = _entries_for_feed(
        south_rows, "south", SOUTH_STOP_ID, first_id=len(north_entries) + 1
    )

    snapshot = ScheduleSnapshot(
        stops=tuple(stops),
        routes=tuple(routes),
        entries=tuple(north_entries + south_entries),
        last_updated=format_last_updated(now),
    )
    logger.info(
        "Built schedule snapshot: %d northbound, %d southbound entries",
        len(north_entries),
        len(south_entries),
    )
    return snapshot


__all__ = ["build_snapshot", "format_last_updated", "LAST_UPDATED_FORMAT"]
