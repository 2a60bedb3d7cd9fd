import logging
import os
import socket
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from followfeed.core.config import settings
from followfeed.scheduling import lease
from followfeed.scheduling.cron import CronExpression

logger = logging.getLogger(__name__)


def default_owner() -> str:
    return f"{socket.gethostname()}:{os.getpid()}"


@dataclass
class ScheduledTask:
    name: str
    expression: CronExpression
    callback: Callable[[Session], object]
    on_one_server: bool = False
    description: str = ""

    def is_due(self, now: datetime) -> bool:
        return self.expression.matches(now)

    def lease_name(self, now: datetime) -> str:
        return f"{self.name}:{now:%Y%m%d%H%M}"


class Schedule:
    def __init__(self, lease_ttl_seconds: Optional[int] = None):
        self._tasks: Dict[str, ScheduledTask] = {}
        self.lease_ttl_seconds = lease_ttl_seconds

    @property
    def tasks(self) -> List[ScheduledTask]:
        return list(self._tasks.values())

    def add(self, name: str, cron: str, callback: Callable[[Session], object],
            on_one_server: bool = False, description: str = "") -> ScheduledTask:
        if name in self._tasks:
            raise ValueError(f"Task {name!r} is already scheduled")
        task = ScheduledTask(name, CronExpression(cron), callback, on_one_server, description)
        self._tasks[name] = task
        return task

    def task(self, name: str, cron: str, on_one_server: bool = False, description: str = ""):
        """Decorator form of add()."""
        def decorator(func):
            self.add(name, cron, func, on_one_server=on_one_server, description=description or (func.__doc__ or "").strip())
            return func
        return decorator

    def due(self, now: datetime) -> List[ScheduledTask]:
        return [task for task in self._tasks.values() if task.is_due(now)]

    def run_due(self, db: Session, now: Optional[datetime] = None, owner: Optional[str] = None) -> List[str]:
        """Run every task due in now's minute; returns the names that ran."""
        now = (now or datetime.utcnow()).replace(second=0, microsecond=0)
        owner = owner or default_owner()
        ttl = self.lease_ttl_seconds or settings.SCHEDULE_LEASE_TTL_SECONDS

        lease.prune(db, now)
        ran = []
        for task in self.due(now):
            if task.on_one_server and not lease.acquire(db, task.lease_name(now), owner, ttl, now=now):
                logger.info("Skipping %s: another server holds its lease", task.name)
                continue
            logger.info("Running scheduled task %s", task.name)
            try:
                task.callback(db)
            except Exception:
                logger.exception("Scheduled task %s failed", task.name)
                db.rollback()
                continue
            ran.append(task.name)
        return ran


schedule = Schedule()
