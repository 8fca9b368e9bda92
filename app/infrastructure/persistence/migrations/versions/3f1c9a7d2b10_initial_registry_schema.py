"""initial_registry_schema

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LETTER_NATURES = ("BIASA", "TERBATAS", "RAHASIA", "SANGAT_RAHASIA", "PENTING")
DISPOSITION_METHODS = ("MANUAL", "SRIKANDI")
DEPARTMENTS = (
    "UMPEG",
    "PERENCANAAN",
    "KAUR_KEUANGAN",
    "KABID",
    "BIDANG1",
    "BIDANG2",
    "BIDANG3",
    "BIDANG4",
    "BIDANG5",
)


def _enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=32)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _letter_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        ),
        sa.Column("letter_number", sa.String(50), nullable=False),
        sa.Column("letter_date", sa.DateTime(timezone=True)),
        sa.Column(
            "letter_nature",
            _enum("letter_nature", *LETTER_NATURES),
            nullable=False,
            server_default="BIASA",
            index=True,
        ),
        sa.Column("subject", sa.String(200), nullable=False),
        sa.Column("sender", sa.String(100), nullable=False),
        sa.Column("recipient", sa.String(100), nullable=False),
        sa.Column("processor", sa.String(100), nullable=False),
        sa.Column("note", sa.Text()),
        sa.Column("is_invitation", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("event_date", sa.DateTime(timezone=True)),
        sa.Column("event_time", sa.String(20)),
        sa.Column("event_location", sa.String(200)),
        sa.Column("event_notes", sa.Text()),
        sa.Column(
            "disposition_method",
            _enum("disposition_method", *DISPOSITION_METHODS),
            nullable=False,
            server_default="MANUAL",
        ),
        sa.Column("srikandi_disposition_number", sa.String(100)),
        sa.Column("file_name", sa.String(255)),
        sa.Column("file_path", sa.String(500)),
        *_timestamps(),
    ]


def upgrade() -> None:
    """Upgrade schema - users, letter registers, dispositions, calendar events, notifications."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column(
            "role",
            _enum("user_role", "ADMIN", "STAFF"),
            nullable=False,
            server_default="STAFF",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )

    op.create_table(
        "incoming_letter",
        *_letter_columns(),
        sa.Column("received_date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("disposition_target", _enum("disposition_target", *DEPARTMENTS)),
        sa.Column("needs_follow_up", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("follow_up_deadline", sa.DateTime(timezone=True)),
        sa.Column("overdue_notified_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint("letter_number", name="uq_incoming_letter_number"),
    )

    op.create_table(
        "outgoing_letter",
        *_letter_columns(),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("execution_date", sa.DateTime(timezone=True)),
        sa.Column("classification_code", sa.String(50)),
        sa.Column("serial_number", sa.Integer()),
        sa.Column(
            "security_class",
            _enum("security_class", "BIASA"),
            nullable=False,
            server_default="BIASA",
        ),
        sa.UniqueConstraint("letter_number", name="uq_outgoing_letter_number"),
    )

    op.create_table(
        "disposition",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "incoming_letter_id",
            sa.String(),
            sa.ForeignKey("incoming_letter.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("disposition_to", _enum("disposition_to", *DEPARTMENTS), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column(
            "created_by_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="SET NULL"),
            index=True,
        ),
        *_timestamps(),
    )

    op.create_table(
        "calendar_event",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("time", sa.String(20)),
        sa.Column("location", sa.String(200)),
        sa.Column(
            "type",
            _enum("event_type", "MEETING", "APPOINTMENT", "DEADLINE", "OTHER"),
            nullable=False,
            server_default="MEETING",
        ),
        sa.Column("notified_3_days", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("notified_1_day", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "incoming_letter_id",
            sa.String(),
            sa.ForeignKey("incoming_letter.id", ondelete="CASCADE"),
            unique=True,
        ),
        sa.Column(
            "outgoing_letter_id",
            sa.String(),
            sa.ForeignKey("outgoing_letter.id", ondelete="CASCADE"),
            unique=True,
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "(incoming_letter_id IS NULL) <> (outgoing_letter_id IS NULL)",
            name="ck_calendar_event_one_letter",
        ),
    )

    op.create_table(
        "notification",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "type",
            _enum("notification_type", "INFO", "WARNING", "SUCCESS", "ERROR"),
            nullable=False,
            server_default="INFO",
        ),
        sa.Column("user_id", sa.String(), sa.ForeignKey("app_user.id", ondelete="CASCADE")),
        sa.Column(
            "calendar_event_id",
            sa.String(),
            sa.ForeignKey("calendar_event.id", ondelete="SET NULL"),
            index=True,
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_notification_user_id_is_read", "notification", ["user_id", "is_read"])


def downgrade() -> None:
    """Downgrade schema - drop every registry table."""
    op.drop_index("ix_notification_user_id_is_read", "notification")
    op.drop_table("notification")
    op.drop_table("calendar_event")
    op.drop_table("disposition")
    op.drop_table("outgoing_letter")
    op.drop_table("incoming_letter")
    op.drop_table("app_user")
