import logging
import time
from pathlib import Path

from sqlalchemy.orm import sessionmaker

from lifetrack import models  # Import all models to register them with Base
from lifetrack.constants import (
    DB_URL,
    DEFAULT_LOG_DIRECTORY,
    DEFAULT_LOG_DIRECTORY_FALLBACK,
    DEFAULT_LOG_FILE,
)
from lifetrack.database import Base, make_engine
from lifetrack.services.scheduler_service import start_scheduler, stop_scheduler
from lifetrack.storage import SqlDocumentStore
from lifetrack.tracker import LifeTracker

logger = logging.getLogger("lifetrack")


def configure_logging(log_dir: str = DEFAULT_LOG_DIRECTORY, log_file: str = DEFAULT_LOG_FILE) -> Path:
    """Log to a file and the console; returns the log file path"""
    # Create log directory if it doesn't exist
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / log_file
    except PermissionError:
        # Fallback to local directory if no permissions
        log_dir = DEFAULT_LOG_DIRECTORY_FALLBACK
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / log_file

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler()  # Also log to console
        ]
    )
    return log_path


def create_store(db_url: str = DB_URL, **engine_kwargs) -> SqlDocumentStore:
    """Create tables if needed and return a store over them"""
    engine = make_engine(db_url, **engine_kwargs)
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return SqlDocumentStore(session_factory)


def create_tracker(db_url: str = DB_URL) -> LifeTracker:
    return LifeTracker(create_store(db_url))


def main() -> None:
    configure_logging()
    tracker = create_tracker()

    summary = tracker.refresh_today()
    logger.info(f"Today's score: {summary.score:.1f}")

    start_scheduler(tracker)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        stop_scheduler()


if __name__ == "__main__":
    main()
