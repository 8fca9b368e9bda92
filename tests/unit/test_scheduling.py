"""Reminder scheduling: triggers, per-job guard, runner and scheduler."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import pytest

from app.application.use_cases.reminders import EmailMessage, JobReport
from app.infrastructure.scheduling import (
    JOB_NAMES,
    JobGuard,
    JobTrigger,
    ReminderRunner,
    ReminderScheduler,
    ScheduledJob,
    default_jobs,
)
from app.infrastructure.scheduling import triggers

JAKARTA = ZoneInfo("Asia/Jakarta")


class FakeSession:
    """Async context manager standing in for an AsyncSession."""

    def __init__(self) -> None:
        self.add = MagicMock()
        self.flush = AsyncMock()
        self.refresh = AsyncMock()
        self.commit = AsyncMock()
        self.rollback = AsyncMock()

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None


class FakeSessionFactory:
    def __init__(self) -> None:
        self.sessions: list[FakeSession] = []

    def __call__(self) -> FakeSession:
        session = FakeSession()
        self.sessions.append(session)
        return session


def test_daily_trigger_later_today() -> None:
    now = datetime(2024, 1, 10, 0, 30, tzinfo=UTC)  # 07:30 Jakarta
    assert triggers.UPCOMING_EVENTS.next_run(now, "Asia/Jakarta") == datetime(
        2024, 1, 10, 9, 0, tzinfo=JAKARTA
    )


def test_daily_trigger_rolls_to_tomorrow_after_slot() -> None:
    now = datetime(2024, 1, 10, 2, 0, tzinfo=UTC)  # exactly 09:00 Jakarta
    assert triggers.UPCOMING_EVENTS.next_run(now, "Asia/Jakarta") == datetime(
        2024, 1, 11, 9, 0, tzinfo=JAKARTA
    )


def test_weekly_trigger_fires_next_monday() -> None:
    now = datetime(2024, 1, 10, 3, 0, tzinfo=UTC)  # Wednesday
    assert triggers.WEEKLY_SUMMARY.next_run(now, "Asia/Jakarta") == datetime(
        2024, 1, 15, 8, 0, tzinfo=JAKARTA
    )


def test_weekly_trigger_on_monday_after_slot_waits_a_week() -> None:
    now = datetime(2024, 1, 8, 2, 0, tzinfo=UTC)  # Monday 09:00 Jakarta
    assert triggers.WEEKLY_SUMMARY.next_run(now, "Asia/Jakarta") == datetime(
        2024, 1, 15, 8, 0, tzinfo=JAKARTA
    )


def test_trigger_describe() -> None:
    assert JobTrigger(hour=18).describe() == "daily at 18:00"
    assert JobTrigger(hour=8, weekday=0).describe() == "weekday 0 at 08:00"


async def test_guard_skips_overlapping_run() -> None:
    guard = JobGuard()
    release = asyncio.Event()
    calls: list[str] = []

    async def slow_job() -> None:
        calls.append("run")
        await release.wait()

    first = asyncio.create_task(guard.run("upcoming_events", slow_job))
    await asyncio.sleep(0)
    assert guard.is_running("upcoming_events")
    assert await guard.run("upcoming_events", slow_job) is False
    release.set()
    assert await first is True
    assert calls == ["run"]


async def test_guard_contains_job_failure() -> None:
    guard = JobGuard()

    async def broken() -> None:
        raise RuntimeError("boom")

    assert await guard.run("weekly_summary", broken) is True
    assert not guard.is_running("weekly_summary")


async def test_runner_commits_then_sends_email() -> None:
    factory = FakeSessionFactory()
    mailer = AsyncMock()
    report = JobReport(
        job="upcoming_events",
        notifications=1,
        emails=[EmailMessage("staff@arsana.go.id", "Pengingat Acara Besok", "<p>x</p>")],
    )
    jobs = MagicMock()
    jobs.check_upcoming_events = AsyncMock(return_value=report)
    runner = ReminderRunner(factory, mailer, jobs_factory=lambda session, tz: jobs)

    assert await runner.run("upcoming_events") is report

    factory.sessions[0].commit.assert_awaited_once()
    mailer.send.assert_awaited_once_with("staff@arsana.go.id", "Pengingat Acara Besok", "<p>x</p>")


async def test_runner_failure_rolls_back_and_sends_nothing() -> None:
    factory = FakeSessionFactory()
    mailer = AsyncMock()
    jobs = MagicMock()
    jobs.check_overdue_invitations = AsyncMock(side_effect=RuntimeError("db"))
    runner = ReminderRunner(factory, mailer, jobs_factory=lambda session, tz: jobs)

    assert await runner.run("overdue_invitations") is None

    assert len(factory.sessions) == 1
    factory.sessions[0].rollback.assert_awaited_once()
    factory.sessions[0].commit.assert_not_awaited()
    mailer.send.assert_not_awaited()


async def test_upcoming_failure_writes_error_broadcast() -> None:
    factory = FakeSessionFactory()
    jobs = MagicMock()
    jobs.check_upcoming_events = AsyncMock(side_effect=RuntimeError("db"))
    runner = ReminderRunner(factory, AsyncMock(), jobs_factory=lambda session, tz: jobs)

    assert await runner.run("upcoming_events") is None

    assert len(factory.sessions) == 2
    failure_session = factory.sessions[1]
    (row,) = failure_session.add.call_args.args
    assert row.title == "System Error"
    assert row.user_id is None
    failure_session.commit.assert_awaited_once()


async def test_runner_unknown_job_rejected() -> None:
    runner = ReminderRunner(FakeSessionFactory(), AsyncMock())
    with pytest.raises(ValueError):
        runner.job("cleanup")


def test_default_jobs_cover_every_job_name() -> None:
    runner = ReminderRunner(FakeSessionFactory(), AsyncMock())
    jobs = default_jobs(runner)
    assert tuple(j.name for j in jobs) == JOB_NAMES
    assert {j.name: j.trigger for j in jobs}["overdue_invitations"] == JobTrigger(hour=18)


async def test_scheduler_run_once_and_unknown_name() -> None:
    job = AsyncMock()
    scheduler = ReminderScheduler([ScheduledJob("weekly_summary", triggers.WEEKLY_SUMMARY, job)])
    assert await scheduler.run_once("weekly_summary") is True
    job.assert_awaited_once()
    with pytest.raises(ValueError):
        await scheduler.run_once("nope")


async def test_scheduler_start_and_stop() -> None:
    job = AsyncMock()
    scheduler = ReminderScheduler(
        [ScheduledJob("upcoming_events", triggers.UPCOMING_EVENTS, job)],
        clock=lambda: datetime(2024, 1, 10, tzinfo=UTC),
    )
    scheduler.start()
    assert scheduler.running
    await scheduler.stop()
    assert not scheduler.running
    job.assert_not_awaited()
