import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.event import Event
from app.schemas.event import CalendarEvent, NewEventIn, ProcessedEventsOut
from app.services.event_layout import process_events

import logging
logger = logging.getLogger("app.events")


router = APIRouter(prefix="/events", tags=["Calendar Events"])


def _to_schema(e: Event) -> CalendarEvent:
    return CalendarEvent(
        id=e.id,
        title=e.title,
        start_time=e.start_time or 0,
        end_time=e.end_time or 0,
        day=e.day or 0,
        professor=e.professor or "",
        description=e.description or "",
    )


@router.get("", response_model=list[CalendarEvent])
def list_events(db: Session = Depends(get_db)):
    return [_to_schema(e) for e in db.query(Event).all()]


@router.get("/processed", response_model=ProcessedEventsOut)
def get_processed_events(db: Session = Depends(get_db)):
    """Events laid out for the weekly calendar grid."""
    return process_events([_to_schema(e) for e in db.query(Event).all()])


@router.post("", response_model=CalendarEvent)
def create_event(body: NewEventIn, db: Session = Depends(get_db)):
    e = Event(id=str(uuid.uuid4()), **body.model_dump())
    db.add(e)
    db.commit()
    db.refresh(e)
    logger.info("Created event %s (%s)", e.id, e.title)
    return _to_schema(e)


@router.put("/{event_id}", response_model=CalendarEvent)
def update_event(event_id: str, body: NewEventIn, db: Session = Depends(get_db)):
    e = db.get(Event, event_id)
    if not e:
        raise HTTPException(404, f"Event with id '{event_id}' not found")

    for k, v in body.model_dump().items():
        setattr(e, k, v)
    db.commit()
    db.refresh(e)
    return _to_schema(e)


@router.delete("/{event_id}")
def delete_event(event_id: str, db: Session = Depends(get_db)):
    e = db.get(Event, event_id)
    if not e:
        raise HTTPException(404, "Event not found")

    db.delete(e)
    db.commit()
    return {"message": "Removed"}
