"""Fixed daily/weekly triggers evaluated in the office timezone."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class JobTrigger:
    """Fire at hour:minute local time every day, or only on weekday (0 = Monday)."""

    hour: int
    minute: int = 0
    weekday: int | None = None

    def next_run(self, now: datetime, timezone: str) -> datetime:
        """First firing time strictly after now (timezone-aware, in the given zone)."""
        tz = ZoneInfo(timezone)
        local_now = now.astimezone(tz)
        candidate = datetime.combine(
            local_now.date(), time(self.hour, self.minute), tzinfo=tz
        )
        if self.weekday is not None:
            candidate += timedelta(days=(self.weekday - local_now.weekday()) % 7)
        if candidate <= local_now:
            candidate += timedelta(days=7 if self.weekday is not None else 1)
        return candidate

    def describe(self) -> str:
        days = "daily" if self.weekday is None else f"weekday {self.weekday}"
        return f"{days} at {self.hour:02d}:{self.minute:02d}"


UPCOMING_EVENTS = JobTrigger(hour=9)
OVERDUE_INVITATIONS = JobTrigger(hour=18)
WEEKLY_SUMMARY = JobTrigger(hour=8, weekday=0)
FOLLOW_UP_DEADLINES = JobTrigger(hour=8)
