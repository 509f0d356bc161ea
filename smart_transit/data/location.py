"""Location capability consumed by the schedule service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import threading
from typing import Callable, Protocol

PERMISSION_DENIED = "permission_denied"
LOCATION_UNAVAILABLE = "location_unavailable"
UNKNOWN_ERROR = "unknown"

_ERROR_MESSAGES = {
    PERMISSION_DENIED: "Location access denied. Please enable location services in Settings.",
    LOCATION_UNAVAILABLE: "Unable to determine your location.",
}


class AuthorizationState(Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"

    @property
    def is_authorized(self) -> bool:
        return self in (AuthorizationState.AUTHORIZED_WHEN_IN_USE, AuthorizationState.AUTHORIZED_ALWAYS)


class LocationError(Exception):
    """Location failure; kind is one of the module-level error constants."""

    def __init__(self, kind: str, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(message or _ERROR_MESSAGES.get(kind, "Unknown location error"))


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationUpdate:
    """Discrete event published by a LocationProvider."""

    coordinate: Coordinate | None
    authorization: AuthorizationState
    error: LocationError | None = None


LocationListener = Callable[[LocationUpdate], None]


class LocationProvider(Protocol):
    def current_coordinate(self) -> Coordinate | None: ...

    def authorization_state(self) -> AuthorizationState: ...

    def subscribe(self, listener: LocationListener) -> Callable[[], None]: ...


class StaticLocationProvider:
    """Provider backed by a fixed (or manually updated) coordinate."""

    def __init__(
        self,
        coordinate: Coordinate | None = None,
        authorization: AuthorizationState = AuthorizationState.AUTHORIZED_WHEN_IN_USE,
    ) -> None:
        self._coordinate = coordinate
        self._authorization = authorization
        self._error: LocationError | None = None
        self._listeners: list[LocationListener] = []
        self._lock = threading.Lock()

    def current_coordinate(self) -> Coordinate | None:
        with self._lock:
            if not self._authorization.is_authorized:
                return None
            return self._coordinate

    def authorization_state(self) -> AuthorizationState:
        with self._lock:
            return self._authorization

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def update_coordinate(self, coordinate: Coordinate | None) -> None:
        with self._lock:
            self._coordinate = coordinate
            self._error = None if coordinate is not None else LocationError(LOCATION_UNAVAILABLE)
        self._publish()

    def set_authorization(self, authorization: AuthorizationState) -> None:
        with self._lock:
            self._authorization = authorization
            if authorization in (AuthorizationState.DENIED, AuthorizationState.RESTRICTED):
                self._error = LocationError(PERMISSION_DENIED)
            elif authorization.is_authorized:
                self._error = None
        self._publish()

    def report_error(self, error: LocationError) -> None:
        with self._lock:
            self._error = error
        self._publish()

    def _publish(self) -> None:
        with self._lock:
            coordinate = self._coordinate if self._authorization.is_authorized else None
            error = self._error
            if error is None and not self._authorization.is_authorized and (
                self._authorization is not AuthorizationState.NOT_DETERMINED
            ):
                error = LocationError(PERMISSION_DENIED)
            update = LocationUpdate(coordinate=coordinate, authorization=self._authorization, error=error)
            listeners = list(self._listeners)
        for listener in listeners:
            listener(update)


__all__ = [
    "PERMISSION_DENIED",
    "LOCATION_UNAVAILABLE",
    "UNKNOWN_ERROR",
    "AuthorizationState",
    "Coordinate",
    "LocationError",
    "LocationListener",
    "LocationProvider",
    "LocationUpdate",
    "StaticLocationProvider",
]
