import pytest

from app.schemas.section import ONLINE_LOCATION
from app.utils.timeslots import (
    UNPARSEABLE_TIME,
    convert_time,
    extract_text_after,
    format_hhmm,
    hhmm_to_minutes,
    parse_day_flags,
    parse_time_component,
    resolve_location,
)


@pytest.mark.parametrize("text,expected", [
    ("9:00 AM", 900),
    ("11:45 AM", 1145),
    ("12:00 PM", 1200),
    ("1:30 PM", 1330),
    ("12:05 AM", 5),
    ("13:00 PM", UNPARSEABLE_TIME),
    ("9:75 AM", UNPARSEABLE_TIME),
    ("9:00", UNPARSEABLE_TIME),
    ("TBA", UNPARSEABLE_TIME),
    ("", UNPARSEABLE_TIME),
])
def test_parse_time_component(text, expected):
    assert parse_time_component(text) == expected


def test_parse_day_flags():
    assert parse_day_flags("MonWedFri") == [True, False, True, False, True]
    assert parse_day_flags("") == [False] * 5


def test_convert_time_covers_all_weekdays():
    days = [True, False, True, False, True]
    slots = convert_time('9:00 AM<span class="inner_tbl_br"> - </span>10:15 AM', days)
    assert len(slots) == 5
    assert [s.active for s in slots] == days
    assert (slots[4].start_time, slots[4].end_time) == (900, 1015)
    assert slots[1].start_time == UNPARSEABLE_TIME


def test_convert_time_without_range():
    slots = convert_time("TBA", [True] * 5)
    assert not any(s.active for s in slots)


def test_convert_time_with_garbage_times_never_effective():
    slots = convert_time("noon - later", [True] * 5)
    assert all(s.active for s in slots)
    assert not any(s.effective for s in slots)


def test_extract_text_after():
    assert extract_text_after("Room (EB2 1025)", "(", ")") == "EB2 1025"
    assert extract_text_after("Instructor: JONES, Ann; TA", "instructor:", ";") == "JONES, Ann"
    assert extract_text_after("no marker here", "(", ")") == ""
    assert extract_text_after("Seats: 12", "seats:", "|") == "12"


def test_resolve_location():
    assert resolve_location("Lecture (Withers 120)", [True] * 5) == "Withers 120"
    assert resolve_location("anything", [False] * 5) == ONLINE_LOCATION


def test_format_and_minutes():
    assert format_hhmm(930) == "09:30"
    assert format_hhmm(1745) == "17:45"
    assert format_hhmm(0) == "00:00"
    assert format_hhmm(-1) == "00:00"
    assert hhmm_to_minutes(1330) == 810
