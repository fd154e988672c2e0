import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from course_search.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None):
    """
    - Console + rotating file (<LOG_DIR>/app.log, 5 MB x 5)
    - Safe to call more than once: handlers are only attached the first time
    - SQL echo stays at WARNING unless LOG_SQL is set
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_path = Path(log_dir or settings.LOG_DIR)

    root = logging.getLogger()
    root.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.LOG_SQL else logging.WARNING)

    # Prevent duplicate handlers
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_path.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
