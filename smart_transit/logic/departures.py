"""Upcoming departures at a stop, joined with their routes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from smart_transit.data.models import Route, ScheduleEntry
from smart_transit.data.service import ScheduleService
from smart_transit.logic.time_window import DEFAULT_WINDOW_MINUTES, is_within_window

DEFAULT_DEPARTURE_LIMIT = 10


@dataclass(frozen=True)
class Departure:
    entry: ScheduleEntry
    route: Route


def upcoming_departures(
    service: ScheduleService,
    stop_id: str,
    now: datetime | None = None,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
    limit: int = DEFAULT_DEPARTURE_LIMIT,
) -> list[Departure]:
    """Departures in the window, earliest first; entries with unknown routes are skipped."""
    if now is None:
        now = datetime.now()
    upcoming = [
        entry
        for entry in service.entries_for_stop(stop_id)
        if is_within_window(entry.arrival_time, now, window_minutes)
    ][:limit]

    departures = []
    for entry in upcoming:
        route = service.route_by_id(entry.route_id)
        if route is None:
            continue
        departures.append(Departure(entry=entry, route=route))
    return departures


__all__ = ["Departure", "DEFAULT_DEPARTURE_LIMIT", "upcoming_departures"]
