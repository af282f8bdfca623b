from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field, computed_field


class NewEventIn(BaseModel):
    title: str
    start_time: int = 0     # HHMM, 0 = no time
    end_time: int = 0
    day: int = Field(0, ge=0, le=0b1111111, description="bitmask, Sunday=bit0 .. Saturday=bit6")
    professor: str = ""
    description: str = ""


class CalendarEvent(NewEventIn):
    model_config = ConfigDict(from_attributes=True)

    id: str


class ProcessedCalendarEvent(CalendarEvent):
    start_time_int: int = 0
    end_time_int: int = 0
    start_time_formatted: str = "00:00"
    end_time_formatted: str = "00:00"

    width_percent: float = 100.0
    left_percent: float = 0.0
    top_percent: float = 0.0
    height_percent: float = 0.0

    # CSS-ready strings for the calendar grid
    @computed_field
    @property
    def width(self) -> str:
        return f"{self.width_percent:.2f}%"

    @computed_field
    @property
    def left(self) -> str:
        return f"{self.left_percent:.2f}%"

    @computed_field
    @property
    def top_position(self) -> str:
        return f"{self.top_percent:.2f}%"

    @computed_field
    @property
    def height_position(self) -> str:
        return f"{self.height_percent:.2f}%"


class ProcessedEventsOut(BaseModel):
    events_by_day: Dict[str, List[ProcessedCalendarEvent]] = {}
    no_time_events_by_day: Dict[str, List[ProcessedCalendarEvent]] = {}
