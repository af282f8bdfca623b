import enum

from sqlalchemy import Column, Integer, Text
from app.database import Base
from app.models.favorite import Favorite

class Schedule(Base):
    """Generated combinations; replaced wholesale on every generation."""
    __tablename__ = "schedules"

    id = Column(Text, primary_key=True)
    # order the generator emitted the combination in
    position = Column(Integer, nullable=False, index=True)
    data = Column(Text, nullable=False)


class ScheduleTable(str, enum.Enum):
    SCHEDULES = "schedules"
    FAVORITES = "favorites"

    @property
    def model(self):
        return Schedule if self is ScheduleTable.SCHEDULES else Favorite

    @property
    def order_column(self):
        return Schedule.position if self is ScheduleTable.SCHEDULES else Favorite.added_at
