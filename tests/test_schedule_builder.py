from __future__ import annotations

from datetime import datetime, timezone
import re

import pytest

from smart_transit.data.catalog import NORTH_STOP_ID, ROUTES, SOUTH_STOP_ID, STOPS
from smart_transit.data.csv_feed import DataSourceNotFound, InvalidData
from smart_transit.data.schedule_builder import build_snapshot, format_last_updated

HEADER = "Bound,Departure,Arrival,Route"


def _write_feeds(tmp_path, north_rows: list[str], south_rows: list[str]):
    north = tmp_path / "North.csv"
    south = tmp_path / "South.csv"
    north.write_text("\n".join([HEADER, *north_rows]) + "\n", encoding="utf-8")
    south.write_text("\n".join([HEADER, *south_rows]) + "\n", encoding="utf-8")
    return north, south


def test_north_row_becomes_entry_with_swapped_times(tmp_path) -> None:
    north, south = _write_feeds(tmp_path, ["NB,08:10,08:12,140"], ["SB,09:00,09:05,141"])

    snapshot = build_snapshot(north, south)

    entry = snapshot.entries[0]
    assert entry.id == "north_1"
    assert entry.route_id == "route_140"
    assert entry.stop_id == NORTH_STOP_ID
    assert entry.arrival_time == "08:10"
    assert entry.departure_time == "08:12"
    assert entry.is_real_time is False
    assert entry.delay is None


def test_counter_continues_across_feeds(tmp_path) -> None:
    north, south = _write_feeds(
        tmp_path,
        ["NB,08:10,08:12,140", "NB,08:40,08:42,141"],
        ["SB,09:00,09:05,141", "SB,09:30,09:35,143"],
    )

    snapshot = build_snapshot(north, south)

    assert [entry.id for entry in snapshot.entries] == ["north_1", "north_2", "south_3", "south_4"]
    assert {entry.stop_id for entry in snapshot.entries[2:]} == {SOUTH_STOP_ID}
    assert len({entry.id for entry in snapshot.entries}) == len(snapshot.entries)


def test_entry_count_excludes_malformed_rows(tmp_path) -> None:
    north, south = _write_feeds(
        tmp_path,
        ["NB,08:10,08:12,140", "NB,08:40"],
        ["SB,09:00,09:05,141", "", "SB,09:30,09:35,143"],
    )

    snapshot = build_snapshot(north, south)

    assert len(snapshot.entries) == 3


def test_snapshot_carries_catalog(tmp_path) -> None:
    north, south = _write_feeds(tmp_path, ["NB,08:10,08:12,140"], ["SB,09:00,09:05,141"])

    snapshot = build_snapshot(north, south)

    assert snapshot.stops == STOPS
    assert snapshot.routes == ROUTES


def test_last_updated_is_utc_seconds(tmp_path) -> None:
    north, south = _write_feeds(tmp_path, ["NB,08:10,08:12,140"], ["SB,09:00,09:05,141"])

    snapshot = build_snapshot(north, south)

    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", snapshot.last_updated)


def test_format_last_updated_converts_to_utc() -> None:
    now = datetime(2025, 1, 26, 8, 0, 5, tzinfo=timezone.utc)

    assert format_last_updated(now) == "2025-01-26T08:00:05Z"


def test_missing_south_feed_raises(tmp_path) -> None:
    north, south = _write_feeds(tmp_path, ["NB,08:10,08:12,140"], [])
    south.unlink()

    with pytest.raises(DataSourceNotFound):
        build_snapshot(north, south)


def test_header_only_feed_raises_invalid_data(tmp_path) -> None:
    north, south = _write_feeds(tmp_path, ["NB,08:10,08:12,140"], [])
    south.write_text(HEADER, encoding="utf-8")

    with pytest.raises(InvalidData):
        build_snapshot(north, south)


def test_rebuild_has_equal_content(tmp_path) -> None:
    north, south = _write_feeds(tmp_path, ["NB,08:10,08:12,140"], ["SB,09:00,09:05,141"])

    first = build_snapshot(north, south)
    second = build_snapshot(north, south)

    assert first.content_key() == second.content_key()
