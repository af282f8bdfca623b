from sqlalchemy import Column, String, Text
from app.database import Base

class CachedSection(Base):
    """Scraped sections, cached so a course is only scraped once."""
    __tablename__ = "classes"

    # code + catalog number + "/<section>" per meeting block, e.g. CSC316/001/201
    id = Column(String(120), primary_key=True)
    # code + catalog number, e.g. CSC316
    classname = Column(String(40), nullable=False, index=True)
    data = Column(Text, nullable=False)
