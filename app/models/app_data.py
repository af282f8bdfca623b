from sqlalchemy import Column, Integer, SmallInteger
from app.database import Base

APP_DATA_ID = 0

class AppData(Base):
    """Single-row table of application state."""
    __tablename__ = "app_data"

    id = Column(SmallInteger, primary_key=True, default=APP_DATA_ID)
    # index into the schedules listing pinned for display, NULL when none
    display_schedule = Column(Integer, nullable=True)
