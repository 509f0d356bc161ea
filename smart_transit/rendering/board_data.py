"""Data structures for rendering the departure board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from smart_transit.data.models import Stop
from smart_transit.logic.departures import Departure
from smart_transit.rendering.colors import format_last_updated


@dataclass(frozen=True)
class DepartureRow:
    """Single departure line on the board."""

    route_short_name: str
    route_color: str
    route_text_color: str
    arrival_time: str
    status: str
    delay_text: str = ""


@dataclass(frozen=True)
class BoardData:
    """Frame data for the departure board renderer."""

    stop_name: str
    last_updated: str  # already formatted for display
    departures: list[DepartureRow]


def board_data_for(stop: Stop, departures: Sequence[Departure], last_updated: str) -> BoardData:
    """Build board data from joined departures and a raw snapshot timestamp."""
    rows = [
        DepartureRow(
            route_short_name=departure.route.short_name,
            route_color=departure.route.color,
            route_text_color=departure.route.text_color,
            arrival_time=departure.entry.arrival_time,
            status=departure.entry.status,
            delay_text=departure.entry.delay_text,
        )
        for departure in departures
    ]
    return BoardData(
        stop_name=stop.name,
        last_updated=format_last_updated(last_updated),
        departures=rows,
    )


__all__ = ["DepartureRow", "BoardData", "board_data_for"]
