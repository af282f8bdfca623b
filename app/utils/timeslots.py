from typing import List

from app.schemas.section import ONLINE_LOCATION, WEEKDAYS, WeeklyTimeSlot

UNPARSEABLE_TIME = -1
DAY_TOKENS = ("Mon", "Tue", "Wed", "Thu", "Fri")


def parse_time_component(text: str) -> int:
    """
    "11:45 AM" -> 1145, "1:30 PM" -> 1330, "12:05 AM" -> 5
    Anything malformed -> UNPARSEABLE_TIME
    """
    parts = (text or "").split()
    if len(parts) != 2:
        return UNPARSEABLE_TIME
    clock, period = parts[0], parts[1].upper()
    if period not in ("AM", "PM"):
        return UNPARSEABLE_TIME

    pieces = clock.split(":")
    if len(pieces) != 2:
        return UNPARSEABLE_TIME
    try:
        hours = int(pieces[0])
        minutes = int(pieces[1])
    except ValueError:
        return UNPARSEABLE_TIME
    if not (1 <= hours <= 12 and 0 <= minutes <= 59):
        return UNPARSEABLE_TIME

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0
    return hours * 100 + minutes


def parse_day_flags(text: str) -> List[bool]:
    """"MonWedFri" / "Mon Wed" -> [True, False, True, False, True]"""
    text = text or ""
    return [tok in text for tok in DAY_TOKENS]


def convert_time(time_str: str, days: List[bool]) -> List[WeeklyTimeSlot]:
    """
    Build the Mon..Fri slots of a meeting block from the portal's time cell,
    e.g. '9:00 AM<span class="inner_tbl_br"> - </span>10:15 AM'.
    """
    cleaned = (
        (time_str or "")
        .replace('<span class="inner_tbl_br">', "")
        .replace("</span>", "")
        .strip()
    )
    start = end = UNPARSEABLE_TIME
    has_range = "-" in cleaned
    if has_range:
        left, right = cleaned.split("-", 1)
        start = parse_time_component(left.strip())
        end = parse_time_component(right.strip())

    out = []
    for i in range(WEEKDAYS):
        if not has_range or not days[i]:
            out.append(WeeklyTimeSlot())
        else:
            out.append(WeeklyTimeSlot(start_time=start, end_time=end, active=True))
    return out


def extract_text_after(text: str, prefix: str, suffix: str) -> str:
    """
    Case-insensitive: text between `prefix` and the next `suffix`.
    No prefix -> "", no suffix -> rest of the text.
    """
    text = text or ""
    lower = text.lower()
    idx = lower.find(prefix.lower())
    if idx < 0:
        return ""
    start = idx + len(prefix)
    end = lower.find(suffix.lower(), start)
    if end < 0:
        return text[start:].strip()
    return text[start:end].strip()


def resolve_location(raw: str, days: List[bool]) -> str:
    # "Room (EB2 1025)" -> "EB2 1025"
    if not any(days):
        return ONLINE_LOCATION
    return extract_text_after(raw, "(", ")").strip()


def format_hhmm(value: int) -> str:
    """930 -> "09:30", non-positive -> "00:00" """
    if value <= 0:
        return "00:00"
    s = f"{value:04d}"
    return f"{s[:2]}:{s[2:4]}"


def hhmm_to_minutes(value: int) -> int:
    return (value // 100) * 60 + value % 100
