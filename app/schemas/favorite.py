# app/schemas/favorite.py
from typing import List
from pydantic import BaseModel, Field

from app.schemas.section import Section


class FavoriteIn(BaseModel):
    # the full combination is stored, so a favorite survives regeneration
    sections: List[Section] = Field(..., min_length=1)
