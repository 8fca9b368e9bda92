"""In-process reminder scheduling: triggers, guarded job loops, job runner."""

from app.infrastructure.scheduling.runner import JOB_NAMES, ReminderRunner
from app.infrastructure.scheduling.scheduler import (
    JobGuard,
    ReminderScheduler,
    ScheduledJob,
    default_jobs,
)
from app.infrastructure.scheduling.triggers import JobTrigger

__all__ = [
    "JOB_NAMES",
    "JobGuard",
    "JobTrigger",
    "ReminderRunner",
    "ReminderScheduler",
    "ScheduledJob",
    "default_jobs",
]
