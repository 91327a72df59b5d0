"""create event and volunteer tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EVENT_CONTENT_TABLES = (
    "event_agenda_items",
    "event_gallery_images",
    "event_impact_metrics",
    "event_testimonials",
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _event_id_column() -> sa.Column:
    return sa.Column(
        "event_id",
        sa.UUID(),
        sa.ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    # --- events ---
    op.create_table(
        "events",
        _id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("full_description", sa.Text(), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event_time", sa.String(50), nullable=True),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("event_type", sa.String(20), nullable=False, server_default="community"),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("registered_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="upcoming"),
        sa.Column("impact", sa.Text(), nullable=True),
        sa.Column("is_past", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "category IN ('fundraiser', 'community', 'education', 'conference', "
            "'workshop', 'other')",
            name="ck_events_category",
        ),
        sa.CheckConstraint(
            "event_type IN ('fundraiser', 'volunteer', 'community', 'conference')",
            name="ck_events_event_type",
        ),
        sa.CheckConstraint(
            "status IN ('upcoming', 'ongoing', 'completed', 'cancelled')",
            name="ck_events_status",
        ),
        sa.CheckConstraint("registered_count >= 0", name="ck_events_registered_count"),
    )

    # --- event_registrations ---
    op.create_table(
        "event_registrations",
        _id_column(),
        _event_id_column(),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("participant_name", sa.String(255), nullable=False),
        sa.Column("participant_email", sa.String(320), nullable=False),
        sa.Column("participant_phone", sa.String(50), nullable=False),
        sa.Column("number_of_guests", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("special_requirements", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        *_timestamp_columns(),
        sa.UniqueConstraint(
            "event_id", "participant_email", name="uq_event_registrations_event_email"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'attended')",
            name="ck_event_registrations_status",
        ),
        sa.CheckConstraint("number_of_guests >= 1", name="ck_event_registrations_guests"),
    )

    # --- event page content ---
    op.create_table(
        "event_agenda_items",
        _id_column(),
        _event_id_column(),
        sa.Column("time", sa.String(50), nullable=False),
        sa.Column("activity", sa.String(255), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamp_columns(),
    )
    op.create_table(
        "event_gallery_images",
        _id_column(),
        _event_id_column(),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("caption", sa.String(255), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamp_columns(),
    )
    op.create_table(
        "event_impact_metrics",
        _id_column(),
        _event_id_column(),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("value", sa.String(100), nullable=False),
        sa.Column("icon_type", sa.String(20), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "icon_type IS NULL OR icon_type IN "
            "('Award', 'Users', 'TrendingUp', 'MapPin', 'Heart', 'DollarSign')",
            name="ck_event_impact_metrics_icon_type",
        ),
    )
    op.create_table(
        "event_testimonials",
        _id_column(),
        _event_id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(30), nullable=True),
        sa.Column("quote", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "role IS NULL OR role IN "
            "('Event Coordinator', 'Volunteer', 'Beneficiary', 'Attendee')",
            name="ck_event_testimonials_role",
        ),
    )

    # --- volunteers ---
    op.create_table(
        "volunteers",
        _id_column(),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("country", sa.String(255), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("interests", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("availability", sa.String(20), nullable=False),
        sa.Column("experience", sa.Text(), nullable=True),
        sa.Column("motivation", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("hours_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("projects_joined", sa.Integer(), nullable=False, server_default="0"),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'inactive', 'rejected')",
            name="ck_volunteers_status",
        ),
        sa.CheckConstraint(
            "availability IN ('weekdays', 'weekends', 'flexible', 'remote')",
            name="ck_volunteers_availability",
        ),
    )

    # --- Indexes ---
    op.create_index("ix_event_registrations_event_id", "event_registrations", ["event_id"])
    op.create_index(
        "ix_event_registrations_participant_email", "event_registrations", ["participant_email"]
    )
    for table in EVENT_CONTENT_TABLES:
        op.create_index(f"ix_{table}_event_id", table, ["event_id"])
    op.create_index("ix_volunteers_user_id", "volunteers", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_volunteers_user_id", table_name="volunteers")
    for table in EVENT_CONTENT_TABLES:
        op.drop_index(f"ix_{table}_event_id", table_name=table)
    op.drop_index("ix_event_registrations_participant_email", table_name="event_registrations")
    op.drop_index("ix_event_registrations_event_id", table_name="event_registrations")
    op.drop_table("volunteers")
    for table in reversed(EVENT_CONTENT_TABLES):
        op.drop_table(table)
    op.drop_table("event_registrations")
    op.drop_table("events")
