"""
Background scheduler for periodic refresh.
Recomputes today's summary and rewrites the widget snapshot every
LIFETRACK_REFRESH_MINUTES.
"""

import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from lifetrack.constants import REFRESH_INTERVAL_MINUTES

logger = logging.getLogger("lifetrack.scheduler")

# Create scheduler instance
scheduler = BackgroundScheduler()

REFRESH_JOB_ID = "refresh_today"


def run_refresh(tracker) -> None:
    """Job: recompute today's summary and widget snapshot"""
    try:
        summary = tracker.refresh_today()
        logger.info(f"Refreshed {summary.date}: score {summary.score:.1f}")
    except Exception as e:
        logger.error(f"Scheduler Error (Refresh): {e}")


def start_scheduler(tracker, interval_minutes: int = REFRESH_INTERVAL_MINUTES) -> None:
    """Start the periodic refresh (no-op if already running)"""
    if not scheduler.running:
        scheduler.add_job(
            run_refresh,
            IntervalTrigger(minutes=interval_minutes),
            args=[tracker],
            id=REFRESH_JOB_ID,
            replace_existing=True
        )

        scheduler.start()
        logger.info(">>> APScheduler STARTED <<<")
        logger.info(f"Scheduled jobs: {[job.id for job in scheduler.get_jobs()]}")


def stop_scheduler() -> None:
    """Stop the scheduler and drop its jobs"""
    if scheduler.running:
        scheduler.remove_all_jobs()
        scheduler.shutdown(wait=False)
        logger.info("APScheduler stopped")
