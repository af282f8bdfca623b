from sqlalchemy import Column, Integer, String, Text
from app.database import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    start_time = Column(Integer, nullable=False, default=0)
    end_time = Column(Integer, nullable=False, default=0)
    day = Column(Integer, nullable=False, default=0, index=True)
    professor = Column(String(255))
    description = Column(Text)
