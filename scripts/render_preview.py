"""Render a departure board preview for the nearest stop."""

from __future__ import annotations

import argparse
from datetime import datetime

from smart_transit.config import load_config
from smart_transit.data.location import AuthorizationState, Coordinate, StaticLocationProvider
from smart_transit.data.service import ScheduleService
from smart_transit.log import configure_logging
from smart_transit.logic.departures import upcoming_departures
from smart_transit.rendering import board_data_for, compose_board, save_frame


def _parse_now(value: str | None) -> datetime:
    if not value:
        return datetime.now()
    clock = datetime.strptime(value, "%H:%M")
    return datetime.now().replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--output", default="preview_output/board.png")
    parser.add_argument("--at", help="Pretend the current time is HH:MM")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)

    coordinate = None
    if config.location.latitude is not None and config.location.longitude is not None:
        coordinate = Coordinate(config.location.latitude, config.location.longitude)
    authorization = (
        AuthorizationState.AUTHORIZED_WHEN_IN_USE if config.location.authorized else AuthorizationState.DENIED
    )
    provider = StaticLocationProvider(coordinate, authorization)

    with ScheduleService(
        config.schedule.north_path,
        config.schedule.south_path,
        location_provider=provider,
        auto_refresh=False,
    ) as service:
        snapshot = service.load()
        stop = service.nearest_stop()
        if snapshot is None or stop is None:
            print(f"Unable to load schedule: {service.last_error}")
            return 1

        departures = upcoming_departures(
            service,
            stop.id,
            now=_parse_now(args.at),
            window_minutes=config.display.window_minutes,
            limit=config.display.max_departures,
        )
        board = board_data_for(stop, departures, snapshot.last_updated)
        frame = compose_board(board, config.display.width, config.display.height)
        save_frame(frame, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
