"""
Narrows each requested course's scraped sections down to the ones the user
can actually take, before combinations are searched.
"""
import logging
from typing import List, Optional, Sequence

from app.schemas.section import BlockedEvent, Section, UserCourseConstraint
from app.utils.conflict import section_conflicts_with_blocked

logger = logging.getLogger("app.filter")


def section_matches(section: Section, constraint: Optional[UserCourseConstraint],
                    blocked: Sequence[BlockedEvent]) -> bool:
    if not section.has_schedule():
        return False

    if constraint is not None:
        if constraint.section_id and not any(
            b.section_id == constraint.section_id for b in section.blocks
        ):
            return False

        if constraint.instructor:
            wanted = constraint.instructor.casefold()
            if not any(b.instructor.casefold() == wanted for b in section.blocks):
                return False

    return not section_conflicts_with_blocked(section, blocked)


def filter_course_groups(
    raw_groups: List[List[Section]],
    constraints: List[UserCourseConstraint],
    blocked: List[BlockedEvent],
) -> List[List[Section]]:
    """
    One output group per input group, same order. A course whose sections are
    all filtered out stays as an empty list so callers can tell "nothing fits
    for course N" apart from "course N was never requested".
    """
    if len(constraints) != len(raw_groups):
        logger.warning(
            "Constraint count (%d) doesn't match course group count (%d); "
            "unpaired groups are filtered without section/instructor constraints",
            len(constraints), len(raw_groups),
        )

    out: List[List[Section]] = []
    for i, sections in enumerate(raw_groups):
        constraint = constraints[i] if i < len(constraints) else None
        kept = []
        for s in sections:
            if section_matches(s, constraint, blocked):
                kept.append(s)
            else:
                logger.debug("Dropped %s", s)

        label = constraint.course_key if constraint else f"#{i + 1}"
        if kept:
            logger.info("Course %s: kept %d of %d sections", label, len(kept), len(sections))
        else:
            logger.info("Course %s: no sections remaining after filtering", label)
        out.append(kept)
    return out
