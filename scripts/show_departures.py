"""Print upcoming departures for the nearest stop, refreshing periodically."""

from __future__ import annotations

import argparse
import threading
from datetime import datetime

from smart_transit.config import load_config
from smart_transit.data.location import AuthorizationState, Coordinate, StaticLocationProvider
from smart_transit.data.service import ScheduleService, ServiceState, ServiceStatus
from smart_transit.log import configure_logging
from smart_transit.logic.departures import upcoming_departures


def _print_board(service: ScheduleService, status: ServiceStatus, window_minutes: int, limit: int) -> None:
    if status.state is ServiceState.LOADING:
        return
    if status.last_error is not None:
        print(f"Unable to load schedule: {status.last_error}")
    stop = status.nearest_stop
    if stop is None:
        print("No schedule available")
        return

    print(f"\n{stop.name} ({stop.address})")
    if status.location_error is not None:
        print(f"  {status.location_error}")
    departures = upcoming_departures(service, stop.id, window_minutes=window_minutes, limit=limit)
    if not departures:
        print("  No departures in the next 2 hours")
    for departure in departures:
        entry = departure.entry
        delay = f" {entry.delay_text}" if entry.delay_text else ""
        print(f"  {departure.route.short_name:>4}  {entry.arrival_time}{delay}  {entry.status}")
    print(f"  updated {datetime.now().strftime('%H:%M:%S')}")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml")
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

    service = ScheduleService(
        config.schedule.north_path,
        config.schedule.south_path,
        refresh_interval_seconds=config.schedule.refresh_interval_seconds,
        location_provider=provider,
        auto_refresh=False,
    )
    service.subscribe(
        lambda status: _print_board(
            service, status, config.display.window_minutes, config.display.max_departures
        )
    )
    service.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        service.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
