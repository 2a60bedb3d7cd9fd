"""
Acquire-with-TTL leases on the shared database.

Every replica runs the scheduler; a task flagged ``on_one_server`` only runs
on the replica that wins its lease. Acquisition is a single INSERT, or a
conditional UPDATE that only succeeds on an expired row, so two replicas can
never both win.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from followfeed.models.scheduler_lease import SchedulerLease

logger = logging.getLogger(__name__)


def acquire(db: Session, name: str, owner: str, ttl_seconds: int, now: Optional[datetime] = None) -> bool:
    now = now or datetime.utcnow()
    expires_at = now + timedelta(seconds=ttl_seconds)

    try:
        db.execute(insert(SchedulerLease).values(name=name, owner=owner, expires_at=expires_at))
        db.commit()
        logger.debug("Lease %s acquired by %s", name, owner)
        return True
    except IntegrityError:
        db.rollback()

    # Take over only if the holder's lease has run out
    result = db.execute(
        update(SchedulerLease)
        .where(SchedulerLease.name == name, SchedulerLease.expires_at <= now)
        .values(owner=owner, expires_at=expires_at)
    )
    db.commit()
    acquired = result.rowcount == 1
    if acquired:
        logger.debug("Lease %s taken over by %s", name, owner)
    return acquired


def release(db: Session, name: str, owner: str) -> bool:
    result = db.execute(
        delete(SchedulerLease).where(SchedulerLease.name == name, SchedulerLease.owner == owner)
    )
    db.commit()
    return result.rowcount == 1


def prune(db: Session, now: Optional[datetime] = None) -> int:
    """Delete expired leases; returns how many were removed."""
    now = now or datetime.utcnow()
    result = db.execute(delete(SchedulerLease).where(SchedulerLease.expires_at <= now))
    db.commit()
    return result.rowcount
