"""Run one reminder job once, outside the in-process scheduler.

Usage:
    python -m scripts.run_reminders <job>
Jobs: upcoming_events, overdue_invitations, weekly_summary, follow_up_deadlines.
Exit status is 1 when the job failed (details in the log).
"""

import asyncio
import sys

from app.core.config import get_settings
from app.infrastructure.external.email import create_mailer
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.scheduling import JOB_NAMES, ReminderRunner
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] not in JOB_NAMES:
        print(
            f"Usage: python -m scripts.run_reminders <{'|'.join(JOB_NAMES)}>",
            file=sys.stderr,
        )
        sys.exit(2)
    setup_logging()
    settings = get_settings()
    runner = ReminderRunner(
        get_session_factory(),
        create_mailer(settings),
        timezone=settings.scheduler_timezone,
    )
    try:
        report = await runner.run(sys.argv[1])
    finally:
        await dispose_engine()
    if report is None:
        sys.exit(1)
    print(
        f"{report.job}: {report.notifications} notification(s), {len(report.emails)} email(s)"
    )


if __name__ == "__main__":
    asyncio.run(main())
