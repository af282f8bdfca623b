import os
import tempfile

# keep the app off the working directory: in-memory DB, throwaway log dir
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="scheduler-logs-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.schemas.section import MeetingBlock, Section, WeeklyTimeSlot, WEEKDAYS


def make_section(code="CSC", name="316", section_id="001", instructor="Smith",
                 location="EB2 1025", meetings=None, description=""):
    """
    meetings: {weekday index: (start, end)} for a single meeting block
    """
    days = [WeeklyTimeSlot() for _ in range(WEEKDAYS)]
    for day, (start, end) in (meetings or {}).items():
        days[day] = WeeklyTimeSlot(start_time=start, end_time=end, active=True)
    return Section(
        code=code,
        name=name,
        description=description,
        blocks=[MeetingBlock(section_id=section_id, location=location, instructor=instructor, days=days)],
    )


class FakeSource:
    """Section source backed by a dict of course key -> sections."""

    def __init__(self, catalog):
        self.catalog = catalog
        self.calls = []

    def fetch_sections(self, requests, options):
        self.calls.append([r.course_key for r in requests])
        return [list(self.catalog.get(r.course_key, [])) for r in requests]


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    app.state.section_source = None


@pytest.fixture()
def install_source():
    def _install(catalog):
        source = FakeSource(catalog)
        app.state.section_source = source
        return source

    yield _install
    app.state.section_source = None
