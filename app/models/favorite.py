from sqlalchemy import Column, DateTime, Text, func
from app.database import Base

class Favorite(Base):
    __tablename__ = "favorites"

    # serialized combination, the same key used in `schedules`
    id = Column(Text, primary_key=True)
    data = Column(Text, nullable=False)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
