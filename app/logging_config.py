import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from app.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# third-party loggers that drown out generation logs at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "multipart")


def setup_logging(level: Optional[str] = None):
    """
    Console + <LOG_DIR>/scheduler.log, rotated by size.
    Calling it again only adjusts the level.
    """
    level = (level or settings.LOG_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if level == "DEBUG" else logging.WARNING)

    if root.handlers:
        return

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(
            log_dir / "scheduler.log",
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        ),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
