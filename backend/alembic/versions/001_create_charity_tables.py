"""create charity tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


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


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        _id_column(),
        sa.Column("auth_sub", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamp_columns(),
        sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    # --- projects ---
    op.create_table(
        "projects",
        _id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("full_description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("target_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("amount_raised", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("beneficiaries", sa.String(255), nullable=True),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "category IN ('education', 'healthcare', 'water', 'shelter', "
            "'environment', 'community')",
            name="ck_projects_category",
        ),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'completed', 'cancelled')",
            name="ck_projects_status",
        ),
        sa.CheckConstraint("target_amount >= 0", name="ck_projects_target_amount"),
    )

    # --- donations ---
    op.create_table(
        "donations",
        _id_column(),
        sa.Column("transaction_id", sa.String(64), nullable=False, unique=True),
        sa.Column(
            "project_id",
            sa.UUID(),
            sa.ForeignKey("projects.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("donor_name", sa.String(255), nullable=False),
        sa.Column("donor_email", sa.String(320), nullable=False),
        sa.Column("donor_phone", sa.String(50), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False, server_default="razorpay"),
        sa.Column("donation_type", sa.String(20), nullable=False, server_default="one-time"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("pan_number", sa.String(10), nullable=True),
        sa.Column("razorpay_order_id", sa.String(64), nullable=True),
        sa.Column("razorpay_payment_id", sa.String(64), nullable=True),
        sa.Column("razorpay_signature", sa.String(128), nullable=True),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "status IN ('pending', 'completed', 'failed', 'refunded')",
            name="ck_donations_status",
        ),
        sa.CheckConstraint(
            "donation_type IN ('one-time', 'monthly')",
            name="ck_donations_donation_type",
        ),
        sa.CheckConstraint(
            "payment_method IN ('razorpay', 'bank-transfer', 'cash', 'other')",
            name="ck_donations_payment_method",
        ),
        sa.CheckConstraint("amount > 0", name="ck_donations_amount"),
    )

    # --- media_assets ---
    op.create_table(
        "media_assets",
        _id_column(),
        sa.Column(
            "project_id",
            sa.UUID(),
            sa.ForeignKey("projects.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("s3_key", sa.Text(), nullable=False),
        sa.Column("file_name", sa.Text(), nullable=False),
        sa.Column("content_type", sa.Text(), nullable=False),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamp_columns(),
    )

    # --- contact_submissions ---
    op.create_table(
        "contact_submissions",
        _id_column(),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "status IN ('new', 'read', 'replied', 'archived')",
            name="ck_contact_submissions_status",
        ),
    )

    # --- newsletter_subscriptions ---
    op.create_table(
        "newsletter_subscriptions",
        _id_column(),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column(
            "subscribed_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "status IN ('active', 'unsubscribed', 'bounced')",
            name="ck_newsletter_subscriptions_status",
        ),
    )

    # --- Indexes ---
    op.create_index("ix_donations_project_id", "donations", ["project_id"])
    op.create_index("ix_donations_donor_email", "donations", ["donor_email"])
    op.create_index("ix_donations_razorpay_order_id", "donations", ["razorpay_order_id"])
    op.create_index("ix_media_assets_project_id", "media_assets", ["project_id"])


def downgrade() -> None:
    op.drop_index("ix_media_assets_project_id", table_name="media_assets")
    op.drop_index("ix_donations_razorpay_order_id", table_name="donations")
    op.drop_index("ix_donations_donor_email", table_name="donations")
    op.drop_index("ix_donations_project_id", table_name="donations")
    op.drop_table("newsletter_subscriptions")
    op.drop_table("contact_submissions")
    op.drop_table("media_assets")
    op.drop_table("donations")
    op.drop_table("projects")
    op.drop_table("users")
