from __future__ import annotations

from smart_transit.data.models import ScheduleEntry


def _entry(*, is_real_time: bool = False, delay: int | None = None) -> ScheduleEntry:
    return ScheduleEntry(
        id="north_1",
        route_id="route_140",
        stop_id="north_springs",
        arrival_time="08:10",
        departure_time="08:12",
        is_real_time=is_real_time,
        delay=delay,
    )


def test_scheduled_entry() -> None:
    entry = _entry()

    assert entry.status == "Scheduled"
    assert entry.is_delayed is False
    assert entry.delay_text == ""


def test_live_entry() -> None:
    assert _entry(is_real_time=True).status == "Live"


def test_delayed_entry_wins_over_live() -> None:
    entry = _entry(is_real_time=True, delay=2)

    assert entry.status == "Delayed"
    assert entry.delay_text == "+2 min"


def test_zero_delay_is_on_time() -> None:
    entry = _entry(delay=0)

    assert entry.is_delayed is False
    assert entry.delay_text == ""
