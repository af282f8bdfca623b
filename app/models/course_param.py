from sqlalchemy import Column, String
from app.database import Base

class CourseParam(Base):
    """A course the user wants in their schedule, with optional preferences."""
    __tablename__ = "class_parameters"

    id = Column(String(36), primary_key=True)
    code = Column(String(10), nullable=False)
    name = Column(String(10), nullable=False)
    section = Column(String(10), nullable=False, default="")
    instructor = Column(String(100), nullable=False, default="")
