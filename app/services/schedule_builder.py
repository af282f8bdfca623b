"""
Request-level schedule generation: resolve sections (cache first, then the
section source), filter, search combinations, and persist the result.
"""
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.exceptions import SectionSourceError, SectionSourceUnavailable
from app.models.app_data import APP_DATA_ID, AppData
from app.models.course import CachedSection
from app.models.schedule import Schedule, ScheduleTable
from app.schemas.section import BlockedEvent, SearchOptions, Section, UserCourseConstraint
from app.services.combinations import (
    deserialize_combination,
    find_unresolvable_pairs,
    generate_combinations,
    serialize_combination,
)
from app.services.section_filter import filter_course_groups
from app.services.section_source import SectionSource

logger = logging.getLogger("app.schedules")


@dataclass
class BuildResult:
    combinations: List[List[Section]]
    keys: List[str]
    group_sizes: List[int]
    empty_courses: List[str] = field(default_factory=list)
    unresolvable_pairs: List[Tuple[str, str]] = field(default_factory=list)


# ---------- section cache ----------

def get_cached_sections(db: Session, course_key: str) -> List[Section]:
    rows = (
        db.query(CachedSection)
        .filter(CachedSection.classname == course_key)
        .order_by(CachedSection.id.asc())
        .all()
    )
    return [Section.model_validate_json(r.data) for r in rows]


def save_sections_batch(db: Session, groups: Sequence[Sequence[Section]]) -> int:
    """Upsert every section; returns how many rows were written."""
    written = 0
    for group in groups:
        for s in group:
            db.merge(CachedSection(id=s.cache_id, classname=s.course_key, data=s.model_dump_json()))
            written += 1
    db.commit()
    return written


def load_course_groups(
    db: Session,
    requests: List[UserCourseConstraint],
    source: Optional[SectionSource],
    options: Optional[SearchOptions] = None,
) -> List[List[Section]]:
    """
    One raw group per request, in request order. Cached courses are never
    re-scraped; the rest go to the section source in a single batch.
    """
    groups: Dict[int, List[Section]] = {}
    to_scrape: List[int] = []

    for i, req in enumerate(requests):
        try:
            cached = get_cached_sections(db, req.course_key)
        except Exception:
            logger.warning("Failed to query cache for %s, treating as miss", req.course_key, exc_info=True)
            db.rollback()
            cached = []
        if cached:
            groups[i] = cached
        else:
            to_scrape.append(i)

    if to_scrape:
        missing = [requests[i].course_key for i in to_scrape]
        if source is None:
            raise SectionSourceUnavailable(missing)

        logger.info("Fetching sections for %s", ", ".join(missing))
        scraped = source.fetch_sections([requests[i] for i in to_scrape], options or SearchOptions())
        if len(scraped) != len(to_scrape):
            raise SectionSourceError(
                f"section source returned {len(scraped)} groups for {len(to_scrape)} courses"
            )

        try:
            save_sections_batch(db, scraped)
        except Exception:
            logger.warning("Failed to cache scraped sections", exc_info=True)
            db.rollback()

        for i, group in zip(to_scrape, scraped):
            groups[i] = list(group)

    return [groups[i] for i in range(len(requests))]


# ---------- schedules ----------

def replace_schedules(
    db: Session, combinations: Sequence[Sequence[Section]]
) -> List[Tuple[str, List[Section]]]:
    """
    Swap the whole schedules table for `combinations` in one transaction.
    Returns the stored (key, combination) pairs; duplicates are stored once.
    """
    stored: List[Tuple[str, List[Section]]] = []
    rows: List[Schedule] = []
    seen = set()
    for combo in combinations:
        key = serialize_combination(combo)
        if key in seen:
            continue
        seen.add(key)
        stored.append((key, list(combo)))
        rows.append(Schedule(id=key, position=len(rows), data=key))

    try:
        db.query(Schedule).delete(synchronize_session=False)
        # the pinned index would point into the old listing
        state = db.get(AppData, APP_DATA_ID)
        if state is not None:
            state.display_schedule = None
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return stored


def build_schedules(
    db: Session,
    requests: List[UserCourseConstraint],
    blocked: List[BlockedEvent],
    source: Optional[SectionSource] = None,
    options: Optional[SearchOptions] = None,
    cancel_event: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
) -> BuildResult:
    """
    `timeout` (seconds) bounds only the combination search, not the
    scraping that precedes it.
    """
    raw_groups = load_course_groups(db, requests, source, options)
    groups = filter_course_groups(raw_groups, requests, blocked)

    timer = None
    if timeout:
        cancel_event = cancel_event or threading.Event()
        timer = threading.Timer(timeout, cancel_event.set)
        timer.daemon = True
        timer.start()
    try:
        combos = generate_combinations(groups, cancel_event=cancel_event)
    finally:
        if timer is not None:
            timer.cancel()

    stored = replace_schedules(db, combos)
    logger.info("Stored %d schedules for %s", len(stored), ", ".join(r.course_key for r in requests))

    result = BuildResult(
        combinations=[c for _, c in stored],
        keys=[k for k, _ in stored],
        group_sizes=[len(g) for g in groups],
    )
    if not combos:
        result.empty_courses = [requests[i].course_key for i, g in enumerate(groups) if not g]
        result.unresolvable_pairs = [
            (requests[i].course_key, requests[j].course_key)
            for i, j in find_unresolvable_pairs(groups)
        ]
    return result


def load_schedules(db: Session, table: ScheduleTable) -> List[Tuple[str, List[Section]]]:
    model = table.model
    rows = db.query(model).order_by(table.order_column.asc(), model.id.asc()).all()
    return [(r.id, deserialize_combination(r.data)) for r in rows]
