"""
Turns stored calendar events into grid-ready placements.

Events are expanded over every day in their bitmask (Sunday = bit 0), split
into timed and untimed buckets, and timed events get percentage coordinates:
overlapping events share the column width side by side, and the vertical
position/height are relative to the configured display window.
"""
from typing import Dict, List, Optional, Sequence

from app.config import settings
from app.schemas.event import CalendarEvent, ProcessedCalendarEvent, ProcessedEventsOut
from app.utils.timeslots import format_hhmm, hhmm_to_minutes

DAYS_IN_WEEK = 7


class EventLayout:
    def __init__(self, start_hour: Optional[int] = None, end_hour: Optional[int] = None):
        self.start_hour = settings.CALENDAR_START_HOUR if start_hour is None else start_hour
        self.end_hour = settings.CALENDAR_END_HOUR if end_hour is None else end_hour
        if self.end_hour <= self.start_hour:
            raise ValueError("calendar end hour must be after start hour")
        self.total_minutes = (self.end_hour - self.start_hour) * 60

    def minutes_since_start(self, value: int) -> int:
        if value <= 0:
            return 0
        return hhmm_to_minutes(value) - self.start_hour * 60

    @staticmethod
    def to_processed(event: CalendarEvent) -> ProcessedCalendarEvent:
        start = event.start_time if event.start_time > 0 else 0
        end = event.end_time if event.end_time > 0 else 0
        return ProcessedCalendarEvent(
            **event.model_dump(include=set(CalendarEvent.model_fields)),
            start_time_int=start,
            end_time_int=end,
            start_time_formatted=format_hhmm(start),
            end_time_formatted=format_hhmm(end),
        )

    @staticmethod
    def group_by_day(events: Sequence[ProcessedCalendarEvent]):
        timed: Dict[str, List[ProcessedCalendarEvent]] = {}
        untimed: Dict[str, List[ProcessedCalendarEvent]] = {}
        for ev in events:
            has_time = ev.start_time_int > 0 and ev.end_time_int > 0
            for bit in range(DAYS_IN_WEEK):
                if not ev.day & (1 << bit):
                    continue
                bucket = timed if has_time else untimed
                bucket.setdefault(str(bit), []).append(ev.model_copy())
        return timed, untimed

    def assign_columns(self, day_events: List[ProcessedCalendarEvent]) -> List[ProcessedCalendarEvent]:
        # sorted() is stable: equal starts keep their input order
        ordered = sorted(day_events, key=lambda e: e.start_time_int)

        clusters: List[List[ProcessedCalendarEvent]] = []
        cluster_end = None
        for ev in ordered:
            start = self.minutes_since_start(ev.start_time_int)
            end = self.minutes_since_start(ev.end_time_int)
            if clusters and cluster_end is not None and start < cluster_end:
                clusters[-1].append(ev)
                cluster_end = max(cluster_end, end)
            else:
                clusters.append([ev])
                cluster_end = end

        for cluster in clusters:
            width = 100.0 / len(cluster)
            for i, ev in enumerate(cluster):
                ev.width_percent = width
                ev.left_percent = i * width
        return ordered

    def assign_rows(self, day_events: List[ProcessedCalendarEvent]) -> None:
        for ev in day_events:
            start = self.minutes_since_start(ev.start_time_int)
            end = self.minutes_since_start(ev.end_time_int)
            duration = max(0, end - start)
            ev.top_percent = start / self.total_minutes * 100.0
            ev.height_percent = duration / self.total_minutes * 100.0

    def process(self, events: Sequence[CalendarEvent]) -> ProcessedEventsOut:
        if not events:
            return ProcessedEventsOut(events_by_day={}, no_time_events_by_day={})

        processed = [self.to_processed(e) for e in events]
        timed, untimed = self.group_by_day(processed)

        for key, day_events in timed.items():
            ordered = self.assign_columns(day_events)
            self.assign_rows(ordered)
            timed[key] = ordered

        return ProcessedEventsOut(events_by_day=timed, no_time_events_by_day=untimed)


def process_events(events: Sequence[CalendarEvent]) -> ProcessedEventsOut:
    return EventLayout().process(events)
