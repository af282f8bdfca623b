import pytest

from app.schemas.event import CalendarEvent
from app.services.event_layout import EventLayout, process_events

MONDAY = 1 << 1
WEDNESDAY = 1 << 3


def ev(id, start, end, day=MONDAY, title=None):
    return CalendarEvent(id=id, title=title or id, start_time=start, end_time=end, day=day)


@pytest.fixture()
def layout():
    return EventLayout(start_hour=8, end_hour=20)


def test_empty_input():
    out = process_events([])
    assert out.events_by_day == {}
    assert out.no_time_events_by_day == {}


def test_single_event_position(layout):
    out = layout.process([ev("a", 900, 1000)])
    (placed,) = out.events_by_day["1"]
    assert placed.width == "100.00%"
    assert placed.left == "0.00%"
    assert placed.top_position == "8.33%"
    assert placed.height_position == "8.33%"
    assert placed.start_time_formatted == "09:00"
    assert placed.end_time_formatted == "10:00"


def test_event_expands_over_every_day_bit(layout):
    out = layout.process([ev("a", 900, 1000, day=MONDAY | WEDNESDAY)])
    assert set(out.events_by_day) == {"1", "3"}
    monday, wednesday = out.events_by_day["1"][0], out.events_by_day["3"][0]
    assert monday.id == "a"
    assert monday.model_dump() == wednesday.model_dump()


def test_untimed_events_are_bucketed_separately(layout):
    out = layout.process([ev("todo", 0, 0, day=MONDAY | WEDNESDAY), ev("half", 900, 0)])
    assert out.events_by_day == {}
    assert [e.id for e in out.no_time_events_by_day["1"]] == ["todo", "half"]
    assert [e.id for e in out.no_time_events_by_day["3"]] == ["todo"]


def test_overlapping_events_split_the_column(layout):
    out = layout.process([ev("b", 930, 1030), ev("a", 900, 1000)])
    day = out.events_by_day["1"]
    assert [e.id for e in day] == ["a", "b"]
    assert [e.width for e in day] == ["50.00%", "50.00%"]
    assert [e.left for e in day] == ["0.00%", "50.00%"]


def test_cluster_extends_to_running_max_end(layout):
    events = [
        ev("long", 900, 1200),
        ev("short", 930, 1000),
        # clear of "short" but still inside "long"
        ev("late", 1100, 1130),
        ev("after", 1200, 1300),
    ]
    day = layout.process(events).events_by_day["1"]
    widths = {e.id: e.width for e in day}
    lefts = {e.id: e.left for e in day}

    assert widths["long"] == widths["short"] == widths["late"] == "33.33%"
    assert [lefts["long"], lefts["short"], lefts["late"]] == ["0.00%", "33.33%", "66.67%"]
    assert widths["after"] == "100.00%"
    assert lefts["after"] == "0.00%"


def test_equal_starts_keep_input_order(layout):
    day = layout.process([ev("x", 1000, 1100), ev("y", 1000, 1030)]).events_by_day["1"]
    assert [e.id for e in day] == ["x", "y"]
    assert [e.left for e in day] == ["0.00%", "50.00%"]


def test_processing_is_idempotent(layout):
    events = [ev("a", 900, 1000, day=MONDAY | WEDNESDAY), ev("b", 930, 1100), ev("c", 0, 0)]
    first = layout.process(events).model_dump()
    second = layout.process(events).model_dump()
    assert first == second
    # inputs untouched
    assert events[0].day == MONDAY | WEDNESDAY


def test_custom_window(layout):
    wide = EventLayout(start_hour=0, end_hour=24)
    (placed,) = wide.process([ev("a", 1200, 1800)]).events_by_day["1"]
    assert placed.top_position == "50.00%"
    assert placed.height_position == "25.00%"


def test_invalid_window():
    with pytest.raises(ValueError):
        EventLayout(start_hour=20, end_hour=8)
