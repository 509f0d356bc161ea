"""Static stop and route catalog for the North Springs / Windward corridor."""

from __future__ import annotations

from smart_transit.data.models import Route, Stop

NORTH_STOP_ID = "north_springs"
SOUTH_STOP_ID = "windward_pnr"

ROUTE_ID_PREFIX = "route_"
SERVED_ROUTES = ("route_140", "route_141", "route_143")

STOPS: tuple[Stop, ...] = (
    Stop(
        id=NORTH_STOP_ID,
        name="North Springs Station",
        address="North Springs MARTA Station",
        latitude=33.9304,
        longitude=-84.3389,
        routes=SERVED_ROUTES,
    ),
    Stop(
        id=SOUTH_STOP_ID,
        name="Windward Park & Ride",
        address="Windward Park & Ride",
        latitude=34.0522,
        longitude=-84.2937,
        routes=SERVED_ROUTES,
    ),
)

ROUTES: tuple[Route, ...] = (
    Route(
        id="route_140",
        name="Route 140",
        short_name="140",
        color="#004E89",
        text_color="#FFFFFF",
        direction="Northbound/Southbound",
    ),
    Route(
        id="route_141",
        name="Route 141",
        short_name="141",
        color="#FF6B35",
        text_color="#FFFFFF",
        direction="Northbound/Southbound",
    ),
    Route(
        id="route_143",
        name="Route 143",
        short_name="143",
        color="#2ECC71",
        text_color="#FFFFFF",
        direction="Northbound/Southbound",
    ),
)


def route_id_for(short_id: str) -> str:
    return f"{ROUTE_ID_PREFIX}{short_id}"


__all__ = [
    "NORTH_STOP_ID",
    "SOUTH_STOP_ID",
    "ROUTES",
    "STOPS",
    "route_id_for",
]
