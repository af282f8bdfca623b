# app/routers/courses.py
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.database import get_db
from app.models.course_param import CourseParam
from app.schemas.course import CourseParamIn, CourseParamOut, SectionsImportIn
from app.schemas.section import Section
from app.services.schedule_builder import get_cached_sections, save_sections_batch

import logging
logger = logging.getLogger("app.courses")


router = APIRouter(tags=["Courses"])


# import sections handed over by the scraper
@router.post("/courses/sections")
def import_sections(body: SectionsImportIn, db: Session = Depends(get_db)):
    saved = save_sections_batch(db, [body.sections])
    courses = sorted({s.course_key for s in body.sections})
    logger.info("Cached %d sections for %s", saved, ", ".join(courses))
    return {"message": "Sections cached", "saved": saved, "courses": courses}


@router.get("/courses/{code}/{number}/sections", response_model=list[Section])
def get_course_sections(code: str, number: str, db: Session = Depends(get_db)):
    sections = get_cached_sections(db, f"{code.upper()}{number}")
    if not sections:
        raise HTTPException(404, "Course not cached")
    return sections


# ---------- requested courses (class parameters) ----------

@router.get("/course-params", response_model=list[CourseParamOut])
def list_course_params(db: Session = Depends(get_db)):
    return db.query(CourseParam).order_by(CourseParam.code.asc(), CourseParam.name.asc()).all()


@router.put("/course-params", response_model=CourseParamOut)
def upsert_course_param(body: CourseParamIn, db: Session = Depends(get_db)):
    param_id = body.id or str(uuid.uuid4())
    p = db.get(CourseParam, param_id)
    if p is None:
        p = CourseParam(id=param_id)
        db.add(p)

    p.code = body.code.strip().upper()
    p.name = body.name.strip()
    p.section = body.section.strip()
    p.instructor = body.instructor.strip()

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))

    db.refresh(p)
    return p


@router.delete("/course-params/{param_id}")
def delete_course_param(param_id: str, db: Session = Depends(get_db)):
    p = db.get(CourseParam, param_id)
    if not p:
        raise HTTPException(404, "Course parameter not found")

    db.delete(p)
    db.commit()
    return {"detail": "deleted"}
