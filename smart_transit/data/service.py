"""Schedule query service with threaded periodic refresh."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
import threading
from typing import Callable, Sequence

from smart_transit.data.catalog import ROUTES, STOPS
from smart_transit.data.csv_feed import ScheduleDataError
from smart_transit.data.location import (
    PERMISSION_DENIED,
    AuthorizationState,
    Coordinate,
    LocationError,
    LocationProvider,
    LocationUpdate,
)
from smart_transit.data.models import Route, ScheduleEntry, ScheduleSnapshot, Stop
from smart_transit.data.schedule_builder import build_snapshot
from smart_transit.logic.nearest_stop import resolve_nearest_stop

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_SECONDS = 60
STOP_JOIN_TIMEOUT_SECONDS = 5.0


class ServiceState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ServiceStatus:
    """Point-in-time view of the service, delivered to observers."""

    state: ServiceState
    snapshot: ScheduleSnapshot | None
    nearest_stop: Stop | None
    last_error: ScheduleDataError | None
    location_error: LocationError | None

    @property
    def is_loading(self) -> bool:
        return self.state is ServiceState.LOADING


Observer = Callable[[ServiceStatus], None]
SnapshotBuilder = Callable[..., ScheduleSnapshot]


class ScheduleService:
    """Owns the current snapshot and nearest stop; refreshes on a schedule.

    All state lives behind one lock. Snapshots are built outside the lock and
    swapped in whole, so readers see either the previous snapshot or the new
    one. When loads overlap, the most recently started one wins.
    """

    def __init__(
        self,
        north_feed: str | Path,
        south_feed: str | Path,
        *,
        refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        location_provider: LocationProvider | None = None,
        stops: Sequence[Stop] = STOPS,
        routes: Sequence[Route] = ROUTES,
        builder: SnapshotBuilder = build_snapshot,
        auto_refresh: bool = True,
    ) -> None:
        self._north_feed = north_feed
        self._south_feed = south_feed
        self._refresh_interval_seconds = refresh_interval_seconds
        self._stops = tuple(stops)
        self._routes = tuple(routes)
        self._builder = builder

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._thread: threading.Thread | None = None

        self._state = ServiceState.UNINITIALIZED
        self._snapshot: ScheduleSnapshot | None = None
        self._nearest: Stop | None = None
        self._nearest_resolved = False
        self._last_error: ScheduleDataError | None = None
        self._location_error: LocationError | None = None
        self._coordinate: Coordinate | None = None
        self._pending_loads = 0
        self._issued_ticket = 0
        self._applied_ticket = 0
        self._observers: list[Observer] = []

        self._location_provider = location_provider
        self._unsubscribe_location: Callable[[], None] | None = None
        if location_provider is not None:
            self._coordinate = location_provider.current_coordinate()
            denied = (AuthorizationState.DENIED, AuthorizationState.RESTRICTED)
            if location_provider.authorization_state() in denied:
                self._location_error = LocationError(PERMISSION_DENIED)
            self._unsubscribe_location = location_provider.subscribe(self._on_location_update)

        if auto_refresh:
            self.start()

    # Observable fields

    @property
    def state(self) -> ServiceState:
        with self._lock:
            return self._state

    @property
    def is_loading(self) -> bool:
        return self.state is ServiceState.LOADING

    @property
    def last_error(self) -> ScheduleDataError | None:
        with self._lock:
            return self._last_error

    @property
    def location_error(self) -> LocationError | None:
        with self._lock:
            return self._location_error

    @property
    def current_snapshot(self) -> ScheduleSnapshot | None:
        with self._lock:
            return self._snapshot

    def status(self) -> ServiceStatus:
        with self._lock:
            return self._status_locked()

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a change callback; returns a function that removes it."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    # Loading

    def load(self) -> ScheduleSnapshot | None:
        """Rebuild the snapshot synchronously; returns None if the load failed."""
        with self._lock:
            self._issued_ticket += 1
            ticket = self._issued_ticket
            self._pending_loads += 1
            self._state = ServiceState.LOADING
        logger.debug("Schedule load %d started", ticket)
        self._notify()

        snapshot: ScheduleSnapshot | None = None
        error: ScheduleDataError | None = None
        try:
            snapshot = self._builder(
                self._north_feed,
                self._south_feed,
                stops=self._stops,
                routes=self._routes,
            )
        except ScheduleDataError as exc:
            error = exc
            logger.error("Schedule load %d failed: %s", ticket, exc)
        except Exception as exc:
            logger.exception("Schedule load %d failed unexpectedly", ticket)
            error = ScheduleDataError(f"Schedule load failed: {exc}")
            error.__cause__ = exc
        finally:
            with self._lock:
                self._pending_loads -= 1
                finished = snapshot is not None or error is not None
                applied = finished and ticket > self._applied_ticket
                if applied:
                    self._applied_ticket = ticket
                    if error is None:
                        self._snapshot = snapshot
                        self._last_error = None
                        self._recompute_nearest_locked()
                    else:
                        self._last_error = error
                self._settle_state_locked()

        if not applied:
            logger.debug("Schedule load %d superseded by a newer load", ticket)
            self._notify()
            return None
        self._notify()
        return snapshot

    def refresh(self) -> None:
        """Request a reload without waiting for it."""
        if self._thread is not None and self._thread.is_alive():
            self._wake_event.set()
            return
        threading.Thread(target=self.load, daemon=True).start()

    # Periodic refresh

    def start(self) -> None:
        """Start the background refresh thread; it loads immediately."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._wake_event.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the refresh thread and wait for it to exit."""
        self._stop_event.set()
        self._wake_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=STOP_JOIN_TIMEOUT_SECONDS)

    def close(self) -> None:
        """Stop refreshing and detach from the location provider."""
        self.stop()
        if self._unsubscribe_location is not None:
            self._unsubscribe_location()
            self._unsubscribe_location = None

    def __enter__(self) -> ScheduleService:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.load()
            except Exception:
                logger.exception("Periodic schedule refresh failed")
            self._wake_event.wait(timeout=self._refresh_interval_seconds)
            self._wake_event.clear()

    # Queries

    def entries_for_stop(self, stop_id: str) -> list[ScheduleEntry]:
        """Entries at a stop, ordered by "HH:mm" arrival time."""
        snapshot = self.current_snapshot
        if snapshot is None:
            return []
        matching = [entry for entry in snapshot.entries if entry.stop_id == stop_id]
        return sorted(matching, key=lambda entry: entry.arrival_time)

    def route_by_id(self, route_id: str) -> Route | None:
        snapshot = self.current_snapshot
        if snapshot is None:
            return None
        return next((route for route in snapshot.routes if route.id == route_id), None)

    def stop_by_id(self, stop_id: str) -> Stop | None:
        snapshot = self.current_snapshot
        if snapshot is None:
            return None
        return next((stop for stop in snapshot.stops if stop.id == stop_id), None)

    def nearest_stop(self) -> Stop | None:
        with self._lock:
            return self._nearest_stop_locked()

    # Location

    def _on_location_update(self, update: LocationUpdate) -> None:
        with self._lock:
            self._coordinate = update.coordinate
            self._location_error = update.error
            self._recompute_nearest_locked()
        if update.error is not None:
            logger.warning("Location error (%s): %s", update.error.kind, update.error)
        self._notify()

    # Internals (caller holds self._lock)

    def _recompute_nearest_locked(self) -> None:
        if self._snapshot is None:
            self._nearest = None
            self._nearest_resolved = False
            return
        self._nearest = resolve_nearest_stop(self._coordinate, self._snapshot.stops)
        self._nearest_resolved = True

    def _nearest_stop_locked(self) -> Stop | None:
        if self._snapshot is None:
            return None
        if self._nearest_resolved:
            return self._nearest
        return self._snapshot.stops[0] if self._snapshot.stops else None

    def _settle_state_locked(self) -> None:
        previous = self._state
        if self._pending_loads > 0:
            self._state = ServiceState.LOADING
        elif self._last_error is not None:
            self._state = ServiceState.FAILED
        else:
            self._state = ServiceState.READY
        if self._state is not previous:
            logger.info("Schedule service %s -> %s", previous.value, self._state.value)

    def _status_locked(self) -> ServiceStatus:
        return ServiceStatus(
            state=self._state,
            snapshot=self._snapshot,
            nearest_stop=self._nearest_stop_locked(),
            last_error=self._last_error,
            location_error=self._location_error,
        )

    def _notify(self) -> None:
        with self._lock:
            status = self._status_locked()
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(status)
            except Exception:
                logger.exception("Schedule observer %r failed", observer)


__all__ = [
    "DEFAULT_REFRESH_INTERVAL_SECONDS",
    "Observer",
    "ScheduleService",
    "ServiceState",
    "ServiceStatus",
]
