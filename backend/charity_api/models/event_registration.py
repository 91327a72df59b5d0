import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

REGISTRATION_STATUSES = ("pending", "confirmed", "cancelled", "attended")


class EventRegistration(TimestampedBase):
    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint(
            "event_id", "participant_email", name="uq_event_registrations_event_email"
        ),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'attended')",
            name="ck_event_registrations_status",
        ),
        CheckConstraint("number_of_guests >= 1", name="ck_event_registrations_guests"),
    )

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    participant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    participant_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    participant_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    special_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
