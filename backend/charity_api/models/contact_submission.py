from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

CONTACT_STATUSES = ("new", "read", "replied", "archived")


class ContactSubmission(TimestampedBase):
    __tablename__ = "contact_submissions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('new', 'read', 'replied', 'archived')",
            name="ck_contact_submissions_status",
        ),
    )

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")
