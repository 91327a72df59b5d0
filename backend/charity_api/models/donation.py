import uuid
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from charity_api.db.base import TimestampedBase

DONATION_STATUSES = ("pending", "completed", "failed", "refunded")
DONATION_TYPES = ("one-time", "monthly")
PAYMENT_METHODS = ("razorpay", "bank-transfer", "cash", "other")


class Donation(TimestampedBase):
    __tablename__ = "donations"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed', 'failed', 'refunded')",
            name="ck_donations_status",
        ),
        CheckConstraint(
            "donation_type IN ('one-time', 'monthly')",
            name="ck_donations_donation_type",
        ),
        CheckConstraint(
            "payment_method IN ('razorpay', 'bank-transfer', 'cash', 'other')",
            name="ck_donations_payment_method",
        ),
        CheckConstraint("amount > 0", name="ck_donations_amount"),
    )

    transaction_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True
    )
    donor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    donor_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    donor_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False, default="razorpay")
    donation_type: Mapped[str] = mapped_column(String(20), nullable=False, default="one-time")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    razorpay_order_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    razorpay_payment_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    razorpay_signature: Mapped[str | None] = mapped_column(String(128), nullable=True)

    project: Mapped["Project | None"] = relationship()  # noqa: F821
