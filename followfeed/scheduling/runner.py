"""Process-level drivers for the schedule: one tick, or a tick every minute."""
import logging
from typing import List

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.blocking import BlockingScheduler

from followfeed.db.session import SessionLocal
from followfeed.scheduling.schedule import schedule
import followfeed.scheduling.tasks  # noqa: F401  registers the built-in tasks

logger = logging.getLogger(__name__)

TICK_JOB_ID = "followfeed_schedule_tick"


def run_schedule_tick() -> List[str]:
    db = SessionLocal()
    try:
        return schedule.run_due(db)
    finally:
        db.close()


def _add_tick_job(scheduler) -> None:
    # second=0 so each tick lands at the top of the minute it evaluates
    scheduler.add_job(run_schedule_tick, "cron", second=0, id=TICK_JOB_ID, max_instances=1, coalesce=True)


def start_background_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    _add_tick_job(scheduler)
    scheduler.start()
    logger.info("In-process scheduler started")
    return scheduler


def run_blocking_scheduler() -> None:
    scheduler = BlockingScheduler()
    _add_tick_job(scheduler)
    logger.info("Scheduler worker started, ticking every minute")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler worker stopped")
