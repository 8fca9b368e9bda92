"""Create the initial administrator account if it does not exist.

Usage:
    python -m scripts.seed_admin [password]
If password is omitted, ADMIN_PASSWORD is used, else a random one is printed.
Requires DATABASE_URL and a migrated schema (alembic upgrade head).
"""

import asyncio
import os
import secrets
import sys

from app.domain.enums import UserRole
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import UserRepository
from app.shared.telemetry.logging import setup_logging

ADMIN_EMAIL = "admin@arsana.com"
ADMIN_NAME = "Administrator"


async def main() -> None:
    """Create admin@arsana.com with role ADMIN; no-op when it already exists."""
    setup_logging()
    password = sys.argv[1] if len(sys.argv) > 1 else os.environ.get("ADMIN_PASSWORD")
    generated = not password
    if not password:
        password = secrets.token_urlsafe(12)

    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                user_repo = UserRepository(session)
                if await user_repo.get_by_email(ADMIN_EMAIL) is not None:
                    print(f"Admin already exists: {ADMIN_EMAIL}")
                    return
                user = await user_repo.create_user(
                    email=ADMIN_EMAIL,
                    name=ADMIN_NAME,
                    password=password,
                    role=UserRole.ADMIN,
                )
        print(f"Created admin: {user.id} ({user.email})")
        if generated:
            print(f"Password: {password}")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
