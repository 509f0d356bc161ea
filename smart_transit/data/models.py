"""Data structures for stops, routes and schedule snapshots."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Stop:
    """Physical transit location with scheduled departures."""

    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    routes: tuple[str, ...]  # route ids serving this stop


@dataclass(frozen=True)
class Route:
    """Transit line identity and styling."""

    id: str
    name: str
    short_name: str
    color: str
    text_color: str
    direction: str


@dataclass(frozen=True)
class ScheduleEntry:
    """One scheduled arrival/departure pairing for a route at a stop."""

    id: str
    route_id: str
    stop_id: str
    arrival_time: str  # "HH:mm"
    departure_time: str  # "HH:mm"
    is_real_time: bool
    delay: int | None = None  # minutes, None if on time

    @property
    def is_delayed(self) -> bool:
        return self.delay is not None and self.delay > 0

    @property
    def delay_text(self) -> str:
        if not self.is_delayed:
            return ""
        return f"+{self.delay} min"

    @property
    def status(self) -> str:
        if self.is_delayed:
            return "Delayed"
        if self.is_real_time:
            return "Live"
        return "Scheduled"


@dataclass(frozen=True)
class ScheduleSnapshot:
    """Fully-formed bundle of stops, routes and entries."""

    stops: tuple[Stop, ...]
    routes: tuple[Route, ...]
    entries: tuple[ScheduleEntry, ...]
    last_updated: str

    def content_key(self) -> tuple:
        """Everything but the timestamp, for comparing two loads."""
        return (self.stops, self.routes, self.entries)


@dataclass(frozen=True)
class RawCsvRow:
    """Single parsed feed row, before it becomes a ScheduleEntry."""

    bound: str
    departure_time: str
    arrival_time: str
    route_short_id: str


__all__ = ["Stop", "Route", "ScheduleEntry", "ScheduleSnapshot", "RawCsvRow"]
