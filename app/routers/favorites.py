# app/routers/favorites.py
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.favorite import Favorite
from app.models.schedule import ScheduleTable
from app.schemas.favorite import FavoriteIn
from app.schemas.schedule import ScheduleOut
from app.services.combinations import serialize_combination
from app.services.schedule_builder import load_schedules

import logging
logger = logging.getLogger("app.favorites")


router = APIRouter(prefix="/favorites", tags=["Favorites"])


# favorite a schedule
@router.post("", response_model=ScheduleOut)
def add_favorite(body: FavoriteIn, db: Session = Depends(get_db)):
    key = serialize_combination(body.sections)

    fav = db.get(Favorite, key)
    if fav is None:
        db.add(Favorite(id=key, data=key))
    else:
        fav.data = key
    db.commit()
    logger.info("Favorited schedule with %d sections", len(body.sections))
    return ScheduleOut(key=key, sections=body.sections)


# list favorites
@router.get("", response_model=list[ScheduleOut])
def list_favorites(db: Session = Depends(get_db)):
    return [ScheduleOut(key=k, sections=s) for k, s in load_schedules(db, ScheduleTable.FAVORITES)]


# unfavorite
@router.delete("")
def remove_favorite(key: str = Body(..., embed=True), db: Session = Depends(get_db)):
    fav = db.get(Favorite, key)
    if not fav:
        raise HTTPException(404, "Favorite not found")

    db.delete(fav)
    db.commit()
    return {"message": "Removed"}
