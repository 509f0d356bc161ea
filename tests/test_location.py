from __future__ import annotations

from unittest.mock import MagicMock

from smart_transit.data.location import (
    LOCATION_UNAVAILABLE,
    PERMISSION_DENIED,
    AuthorizationState,
    Coordinate,
    LocationError,
    StaticLocationProvider,
)


def test_authorized_provider_reports_coordinate() -> None:
    provider = StaticLocationProvider(Coordinate(33.93, -84.33))

    assert provider.current_coordinate() == Coordinate(33.93, -84.33)
    assert provider.authorization_state() is AuthorizationState.AUTHORIZED_WHEN_IN_USE


def test_denied_provider_hides_coordinate() -> None:
    provider = StaticLocationProvider(Coordinate(33.93, -84.33), AuthorizationState.DENIED)

    assert provider.current_coordinate() is None


def test_update_coordinate_notifies_listeners() -> None:
    provider = StaticLocationProvider()
    listener = MagicMock()
    provider.subscribe(listener)

    provider.update_coordinate(Coordinate(34.05, -84.29))

    listener.assert_called_once()
    update = listener.call_args.args[0]
    assert update.coordinate == Coordinate(34.05, -84.29)
    assert update.error is None


def test_lost_coordinate_reports_unavailable() -> None:
    provider = StaticLocationProvider(Coordinate(34.05, -84.29))
    listener = MagicMock()
    provider.subscribe(listener)

    provider.update_coordinate(None)

    update = listener.call_args.args[0]
    assert update.coordinate is None
    assert update.error.kind == LOCATION_UNAVAILABLE


def test_revoking_authorization_reports_permission_denied() -> None:
    provider = StaticLocationProvider(Coordinate(34.05, -84.29))
    listener = MagicMock()
    provider.subscribe(listener)

    provider.set_authorization(AuthorizationState.RESTRICTED)

    update = listener.call_args.args[0]
    assert update.coordinate is None
    assert update.authorization is AuthorizationState.RESTRICTED
    assert update.error.kind == PERMISSION_DENIED
    assert "Location access denied" in str(update.error)


def test_unsubscribe_stops_notifications() -> None:
    provider = StaticLocationProvider()
    listener = MagicMock()
    unsubscribe = provider.subscribe(listener)

    unsubscribe()
    provider.report_error(LocationError("unknown", "GPS glitch"))

    listener.assert_not_called()
