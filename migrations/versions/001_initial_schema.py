"""Create families, babies, activity logs, medicines and notification ledger.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _family_fk() -> sa.Column:
    return sa.Column(
        "family_id",
        sa.Uuid(),
        sa.ForeignKey("families.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "families",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_families_slug", "families", ["slug"], unique=True)

    op.create_table(
        "family_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "family_id",
            sa.Uuid(),
            sa.ForeignKey("families.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("feed_warning_time", sa.String(5), nullable=False, server_default="02:00"),
        sa.Column("diaper_warning_time", sa.String(5), nullable=False, server_default="03:00"),
        sa.Column(
            "notification_enabled", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "notification_provider", sa.String(50), nullable=False, server_default="HERMES"
        ),
        sa.Column("hermes_api_endpoint", sa.String(500), nullable=True),
        sa.Column("hermes_api_key", sa.Text(), nullable=True),
        sa.Column("notification_title", sa.String(200), nullable=False),
        sa.Column("notification_feed_subtitle", sa.String(200), nullable=True),
        sa.Column("notification_feed_body", sa.Text(), nullable=False),
        sa.Column("notification_diaper_subtitle", sa.String(200), nullable=True),
        sa.Column("notification_diaper_body", sa.Text(), nullable=False),
        sa.Column("notification_feed_advance_minutes", sa.Integer(), nullable=True),
        sa.Column("notification_diaper_advance_minutes", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_family_settings_family_id", "family_settings", ["family_id"])

    op.create_table(
        "babies",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _family_fk(),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("inactive", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("feed_warning_time", sa.String(5), nullable=True),
        sa.Column("diaper_warning_time", sa.String(5), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_babies_family_id", "babies", ["family_id"])
    op.create_index("ix_babies_inactive", "babies", ["inactive"])

    op.create_table(
        "feed_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _family_fk(),
        sa.Column(
            "baby_id",
            sa.Uuid(),
            sa.ForeignKey("babies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("caretaker_id", sa.Uuid(), nullable=True),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("feed_type", sa.String(20), nullable=False),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("unit_abbr", sa.String(20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_feed_logs_family_id", "feed_logs", ["family_id"])
    op.create_index("ix_feed_logs_baby_id_time", "feed_logs", ["baby_id", "time"])

    op.create_table(
        "diaper_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _family_fk(),
        sa.Column(
            "baby_id",
            sa.Uuid(),
            sa.ForeignKey("babies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("caretaker_id", sa.Uuid(), nullable=True),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("diaper_type", sa.String(20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_diaper_logs_family_id", "diaper_logs", ["family_id"])
    op.create_index("ix_diaper_logs_baby_id_time", "diaper_logs", ["baby_id", "time"])

    op.create_table(
        "contacts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _family_fk(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(100), nullable=False, server_default=""),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_contacts_family_id", "contacts", ["family_id"])

    op.create_table(
        "medicines",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _family_fk(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("typical_dose_size", sa.Float(), nullable=True),
        sa.Column("unit_abbr", sa.String(20), nullable=True),
        sa.Column("dose_min_time", sa.String(20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_medicines_family_id", "medicines", ["family_id"])
    op.create_index("ix_medicines_name", "medicines", ["name"])
    op.create_index("ix_medicines_active", "medicines", ["active"])

    op.create_table(
        "contact_medicines",
        sa.Column(
            "contact_id",
            sa.Uuid(),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "medicine_id",
            sa.Uuid(),
            sa.ForeignKey("medicines.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "medicine_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _family_fk(),
        sa.Column(
            "medicine_id",
            sa.Uuid(),
            sa.ForeignKey("medicines.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "baby_id",
            sa.Uuid(),
            sa.ForeignKey("babies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("caretaker_id", sa.Uuid(), nullable=True),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("dose_amount", sa.Float(), nullable=False),
        sa.Column("unit_abbr", sa.String(20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_medicine_logs_family_id", "medicine_logs", ["family_id"])
    op.create_index("ix_medicine_logs_time", "medicine_logs", ["time"])
    op.create_index(
        "ix_medicine_logs_baby_id_medicine_id_time",
        "medicine_logs",
        ["baby_id", "medicine_id", "time"],
    )

    op.create_table(
        "notification_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "baby_id",
            sa.Uuid(),
            sa.ForeignKey("babies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column(
            "family_id",
            sa.Uuid(),
            sa.ForeignKey("families.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "sent_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_notification_logs_family_id", "notification_logs", ["family_id"])
    op.create_index(
        "ix_notification_logs_baby_id_type_sent_at",
        "notification_logs",
        ["baby_id", "type", "sent_at"],
    )


def downgrade() -> None:
    op.drop_table("notification_logs")
    op.drop_table("medicine_logs")
    op.drop_table("contact_medicines")
    op.drop_table("medicines")
    op.drop_table("contacts")
    op.drop_table("diaper_logs")
    op.drop_table("feed_logs")
    op.drop_table("babies")
    op.drop_table("family_settings")
    op.drop_table("families")
