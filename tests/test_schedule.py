"""Tests for the schedule registry, single-server leases and built-in tasks."""

from datetime import datetime, timedelta

import pytest

from followfeed.models.notification import Notification
from followfeed.models.scheduler_lease import SchedulerLease
from followfeed.scheduling import lease
from followfeed.scheduling.schedule import Schedule
from followfeed.scheduling.tasks import unread_summary

NOON = datetime(2026, 10, 18, 12, 0, 27)


class TestLease:

    def test_only_one_owner_wins(self, db_session):
        assert lease.acquire(db_session, "job:202610181200", "web-1", 60, now=NOON)
        assert not lease.acquire(db_session, "job:202610181200", "web-2", 60, now=NOON)
        assert db_session.get(SchedulerLease, "job:202610181200").owner == "web-1"

    def test_expired_lease_can_be_taken_over(self, db_session):
        lease.acquire(db_session, "job", "web-1", 60, now=NOON)
        later = NOON + timedelta(seconds=61)
        assert lease.acquire(db_session, "job", "web-2", 60, now=later)
        db_session.expire_all()
        assert db_session.get(SchedulerLease, "job").owner == "web-2"

    def test_release_only_by_owner(self, db_session):
        lease.acquire(db_session, "job", "web-1", 60, now=NOON)
        assert not lease.release(db_session, "job", "web-2")
        assert lease.release(db_session, "job", "web-1")
        assert lease.acquire(db_session, "job", "web-2", 60, now=NOON)

    def test_prune(self, db_session):
        lease.acquire(db_session, "old", "web-1", 10, now=NOON)
        lease.acquire(db_session, "new", "web-1", 3600, now=NOON)
        assert lease.prune(db_session, now=NOON + timedelta(minutes=1)) == 1
        assert [row.name for row in db_session.query(SchedulerLease).all()] == ["new"]


class TestSchedule:

    def test_runs_only_due_tasks(self, db_session):
        schedule = Schedule(lease_ttl_seconds=60)
        calls = []
        schedule.add("every-minute", "* * * * *", lambda db: calls.append("every-minute"))
        schedule.add("midnight", "@daily", lambda db: calls.append("midnight"))

        assert schedule.run_due(db_session, now=NOON, owner="web-1") == ["every-minute"]
        assert calls == ["every-minute"]

    def test_duplicate_name_rejected(self):
        schedule = Schedule()
        schedule.add("task", "* * * * *", lambda db: None)
        with pytest.raises(ValueError):
            schedule.add("task", "* * * * *", lambda db: None)

    def test_decorator_registers_task(self):
        schedule = Schedule()

        @schedule.task("report", "0 9 * * mon-fri")
        def report(db):
            """Weekday report."""

        [task] = schedule.tasks
        assert task.name == "report"
        assert task.description == "Weekday report."
        assert task.is_due(datetime(2026, 10, 19, 9, 0))

    def test_on_one_server_runs_once_per_minute(self, db_session):
        schedule = Schedule(lease_ttl_seconds=3600)
        calls = []
        schedule.add("cleanup", "* * * * *", lambda db: calls.append(1), on_one_server=True)

        assert schedule.run_due(db_session, now=NOON, owner="web-1") == ["cleanup"]
        assert schedule.run_due(db_session, now=NOON.replace(second=50), owner="web-2") == []
        assert schedule.run_due(db_session, now=NOON + timedelta(minutes=1), owner="web-2") == ["cleanup"]
        assert len(calls) == 2

    def test_plain_tasks_run_on_every_server(self, db_session):
        schedule = Schedule()
        calls = []
        schedule.add("local", "* * * * *", lambda db: calls.append(1))

        schedule.run_due(db_session, now=NOON, owner="web-1")
        schedule.run_due(db_session, now=NOON, owner="web-2")
        assert len(calls) == 2

    def test_failing_task_does_not_stop_others(self, db_session, caplog):
        schedule = Schedule()
        calls = []

        def broken(db):
            raise RuntimeError("boom")

        schedule.add("broken", "* * * * *", broken)
        schedule.add("fine", "* * * * *", lambda db: calls.append(1))

        assert schedule.run_due(db_session, now=NOON, owner="web-1") == ["fine"]
        assert calls == [1]
        assert "Scheduled task broken failed" in caplog.text


class TestBuiltInTasks:

    def test_unread_summary(self, db_session, make_user):
        a = make_user("A")
        b = make_user("B")
        db_session.add_all([
            Notification(user_id=a.id, type="follow", data={"follower_id": b.id, "follower_name": "B"}),
            Notification(user_id=a.id, type="follow", data={"follower_id": b.id, "follower_name": "B"},
                         read_at=datetime.utcnow()),
            Notification(user_id=b.id, type="follow", data={"follower_id": a.id, "follower_name": "A"}),
        ])
        db_session.commit()

        assert unread_summary(db_session) == {a.id: 1, b.id: 1}

    def test_unread_summary_is_on_the_default_schedule(self):
        from followfeed.scheduling.runner import schedule
        task = next(t for t in schedule.tasks if t.name == "notifications:unread-summary")
        assert task.on_one_server
        assert task.is_due(datetime(2026, 10, 18, 13, 0))
        assert not task.is_due(datetime(2026, 10, 18, 13, 1))
