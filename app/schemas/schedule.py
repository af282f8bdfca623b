from typing import List, Tuple
from pydantic import BaseModel, Field

from app.schemas.section import BlockedEvent, SearchOptions, Section, UserCourseConstraint


class GenerateIn(BaseModel):
    courses: List[UserCourseConstraint]
    blocked: List[BlockedEvent] = Field(default_factory=list)
    search_options: SearchOptions = Field(default_factory=SearchOptions)


class ScheduleOut(BaseModel):
    key: str
    sections: List[Section]


class GenerateOut(BaseModel):
    total: int
    schedules: List[ScheduleOut]
    # sections left per course after filtering, request order
    group_sizes: List[int]
    empty_courses: List[str] = []
    unresolvable_pairs: List[Tuple[str, str]] = []


class DisplayScheduleIn(BaseModel):
    index: int = Field(..., ge=0)


class DisplayScheduleOut(BaseModel):
    index: int | None = None
