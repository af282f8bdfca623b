from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

WEEKDAYS = 5  # Monday..Friday
ONLINE_LOCATION = "Distance Education - Online"


class WeeklyTimeSlot(BaseModel):
    """One weekday meeting window, HHMM integers (1330 = 1:30 PM)."""
    model_config = ConfigDict(frozen=True)

    start_time: int = -1
    end_time: int = -1
    active: bool = False

    @property
    def effective(self) -> bool:
        # unparseable times come through as -1 and must never constrain anything
        return self.active and self.start_time >= 0 and self.end_time >= 0


def _inactive_week() -> List[WeeklyTimeSlot]:
    return [WeeklyTimeSlot() for _ in range(WEEKDAYS)]


class MeetingBlock(BaseModel):
    """A single meeting pattern of a section (lecture, lab, recitation...)."""
    section_id: str
    location: str = ""
    instructor: str = ""
    days: List[WeeklyTimeSlot] = Field(default_factory=_inactive_week)

    @field_validator("days")
    @classmethod
    def _five_weekdays(cls, v):
        if len(v) != WEEKDAYS:
            raise ValueError(f"days must hold exactly {WEEKDAYS} slots (Mon..Fri), got {len(v)}")
        return v

    def has_schedule(self) -> bool:
        return any(d.effective for d in self.days)


class Section(BaseModel):
    """
    One offering of a course. A lecture with an attached lab is a single
    Section carrying two blocks.
    """
    code: str                     # subject code, e.g. CSC
    name: str                     # catalog number, e.g. 316
    description: str = ""
    blocks: List[MeetingBlock] = Field(default_factory=list)

    @property
    def course_key(self) -> str:
        return f"{self.code}{self.name}"

    @property
    def cache_id(self) -> str:
        key = self.course_key
        for b in self.blocks:
            key = f"{key}/{b.section_id}"
        return key

    @property
    def section_id(self) -> str:
        return self.blocks[0].section_id if self.blocks else ""

    @property
    def instructor(self) -> str:
        return self.blocks[0].instructor if self.blocks else ""

    def has_schedule(self) -> bool:
        return any(b.has_schedule() for b in self.blocks)

    def __str__(self) -> str:
        parts = []
        for b in self.blocks:
            times = " ".join(
                f"{d.start_time:04d}-{d.end_time:04d}" if d.active else "NA" for d in b.days
            )
            parts.append(f"{b.section_id} [{times}] {b.location}, {b.instructor}")
        return f"{self.code} {self.name} <{' & '.join(parts)}>"


class UserCourseConstraint(BaseModel):
    course_code: str
    course_name: str
    section_id: Optional[str] = None
    instructor: Optional[str] = None

    @field_validator("course_code")
    @classmethod
    def _normalize_code(cls, v: str) -> str:
        # cache keys are stored upper-case, e.g. CSC316
        return v.strip().upper()

    @field_validator("course_name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("section_id", "instructor")
    @classmethod
    def _blank_is_unset(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def course_key(self) -> str:
        return f"{self.course_code}{self.course_name}"


class BlockedEvent(BaseModel):
    """A recurring busy period sections must stay clear of."""
    time_range: Tuple[int, int]
    active_days: List[bool] = Field(default_factory=lambda: [False] * WEEKDAYS)

    @field_validator("active_days")
    @classmethod
    def _five_weekdays(cls, v):
        if len(v) != WEEKDAYS:
            raise ValueError(f"active_days must hold exactly {WEEKDAYS} flags (Mon..Fri)")
        return v


class SearchOptions(BaseModel):
    # the three search filter checkboxes of the registration portal
    open_only: bool = True
    include_waitlisted: bool = False
    include_reserved: bool = True
