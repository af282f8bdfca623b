# app/utils/conflict.py
from typing import Iterable

from app.schemas.section import BlockedEvent, MeetingBlock, Section, WeeklyTimeSlot, WEEKDAYS


def conflicts(a: WeeklyTimeSlot, b: WeeklyTimeSlot) -> bool:
    """
    Strict overlap of two slots on the same weekday.
    Back-to-back meetings (10:00 end, 10:00 start) do not conflict.
    """
    if not a.effective or not b.effective:
        return False
    return a.start_time < b.end_time and b.start_time < a.end_time


def blocks_conflict(a: MeetingBlock, b: MeetingBlock) -> bool:
    for day in range(WEEKDAYS):
        if conflicts(a.days[day], b.days[day]):
            return True
    return False


def sections_conflict(s1: Section, s2: Section) -> bool:
    """Any meeting block of s1 overlaps any meeting block of s2 on a shared day."""
    for b1 in s1.blocks:
        for b2 in s2.blocks:
            if blocks_conflict(b1, b2):
                return True
    return False


def slot_hits_blocked(slot: WeeklyTimeSlot, day: int, blocked: Iterable[BlockedEvent]) -> bool:
    if not slot.effective:
        return False
    for ev in blocked:
        if not ev.active_days[day]:
            continue
        start, end = ev.time_range
        if slot.start_time < end and start < slot.end_time:
            return True
    return False


def section_conflicts_with_blocked(s: Section, blocked: Iterable[BlockedEvent]) -> bool:
    blocked = list(blocked)
    if not blocked:
        return False
    for block in s.blocks:
        for day, slot in enumerate(block.days):
            if slot_hits_blocked(slot, day, blocked):
                return True
    return False
