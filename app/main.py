# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.models import app_data, course, course_param, event, favorite, schedule  # noqa: F401  registers tables
from app.routers import courses, events, favorites, schedules

import time
import logging
from fastapi import Request
from app.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("app")


# create tables if missing
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Course Schedule Planner", version="1.0.0")

# installed by the desktop shell that drives the portal; None = cached courses only
app.state.section_source = None


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, _elapsed_ms(start))
        raise

    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    logger.log(level, "%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, _elapsed_ms(start))
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (courses, schedules, favorites, events):
    app.include_router(module.router)


@app.get("/")
def root():
    return {"message": "Schedule planner backend is running!"}
