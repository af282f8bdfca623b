from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.exceptions import GenerationCancelled, SectionSourceError, SectionSourceUnavailable
from app.models.app_data import APP_DATA_ID, AppData
from app.models.schedule import Schedule, ScheduleTable
from app.schemas.schedule import (
    DisplayScheduleIn, DisplayScheduleOut, GenerateIn, GenerateOut, ScheduleOut,
)
from app.services.schedule_builder import build_schedules, load_schedules
from app.services.section_source import SectionSource, get_section_source
from app.utils.excel_export import make_filename, rows_to_xlsx_bytes, schedule_rows

import logging
logger = logging.getLogger("app.schedules")


router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.post("/generate", response_model=GenerateOut)
def generate_schedules(
    body: GenerateIn,
    db: Session = Depends(get_db),
    source: Optional[SectionSource] = Depends(get_section_source),
):
    if not body.courses:
        raise HTTPException(400, "No courses to schedule")

    try:
        result = build_schedules(
            db,
            body.courses,
            body.blocked,
            source=source,
            options=body.search_options,
            timeout=settings.GENERATION_TIMEOUT_SECONDS or None,
        )
    except SectionSourceUnavailable as e:
        raise HTTPException(404, {"message": "Course sections not cached", "courses": e.missing})
    except SectionSourceError as e:
        logger.error("Section source failed: %s", e)
        raise HTTPException(502, f"Fetching sections failed: {e}")
    except GenerationCancelled:
        logger.warning("Generation timed out after %ss", settings.GENERATION_TIMEOUT_SECONDS)
        raise HTTPException(408, "Schedule generation timed out; request fewer courses or narrow the sections")

    return GenerateOut(
        total=len(result.combinations),
        schedules=[ScheduleOut(key=k, sections=c) for k, c in zip(result.keys, result.combinations)],
        group_sizes=result.group_sizes,
        empty_courses=result.empty_courses,
        unresolvable_pairs=result.unresolvable_pairs,
    )


@router.get("", response_model=list[ScheduleOut])
def list_schedules(db: Session = Depends(get_db)):
    return [ScheduleOut(key=k, sections=s) for k, s in load_schedules(db, ScheduleTable.SCHEDULES)]


@router.delete("")
def delete_schedule(key: str = Body(..., embed=True), db: Session = Depends(get_db)):
    row = db.get(Schedule, key)
    if not row:
        raise HTTPException(404, "Schedule not found")

    # the pin is an index into the listing, so it moves with the rows above it
    state = db.get(AppData, APP_DATA_ID)
    if state is not None and state.display_schedule is not None:
        rank = db.query(Schedule).filter(Schedule.position < row.position).count()
        if rank == state.display_schedule:
            state.display_schedule = None
        elif rank < state.display_schedule:
            state.display_schedule -= 1

    db.delete(row)
    db.commit()
    return {"message": "Removed"}


@router.get("/export")
def export_schedules(db: Session = Depends(get_db)):
    """
    Export the generated schedules as Excel (.xlsx)
    """
    rows = schedule_rows(load_schedules(db, ScheduleTable.SCHEDULES))
    xlsx_bytes = rows_to_xlsx_bytes(rows, sheet_name="Schedules")
    filename = make_filename("schedules")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# pinned schedule shown on the home calendar
@router.get("/display", response_model=DisplayScheduleOut)
def get_display_schedule(db: Session = Depends(get_db)):
    state = db.get(AppData, APP_DATA_ID)
    return DisplayScheduleOut(index=state.display_schedule if state else None)


@router.put("/display", response_model=DisplayScheduleOut)
def set_display_schedule(body: DisplayScheduleIn, db: Session = Depends(get_db)):
    total = db.query(Schedule).count()
    if body.index >= total:
        raise HTTPException(404, "Schedule index out of range")

    state = db.get(AppData, APP_DATA_ID)
    if state is None:
        state = AppData(id=APP_DATA_ID)
        db.add(state)
    state.display_schedule = body.index
    db.commit()
    return DisplayScheduleOut(index=body.index)


@router.delete("/display", response_model=DisplayScheduleOut)
def clear_display_schedule(db: Session = Depends(get_db)):
    state = db.get(AppData, APP_DATA_ID)
    if state is not None:
        state.display_schedule = None
        db.commit()
    return DisplayScheduleOut(index=None)
