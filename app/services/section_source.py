"""
Boundary to whatever fetches sections from the registration portal.

The scheduler never drives a browser itself. A source is installed on
``app.state.section_source`` at startup; without one, only cached courses
can be scheduled.
"""
from typing import List, Optional, Protocol, runtime_checkable

from fastapi import Request

from app.schemas.section import SearchOptions, Section, UserCourseConstraint


@runtime_checkable
class SectionSource(Protocol):
    def fetch_sections(
        self,
        requests: List[UserCourseConstraint],
        options: SearchOptions,
    ) -> List[List[Section]]:
        """
        Return one list of sections per request, in request order. A course
        with no offerings yields an empty list rather than being skipped.
        Failures are raised as SectionSourceError.
        """
        ...


def get_section_source(request: Request) -> Optional[SectionSource]:
    return getattr(request.app.state, "section_source", None)
