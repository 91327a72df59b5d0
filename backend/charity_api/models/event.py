from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

EVENT_CATEGORIES = ("fundraiser", "community", "education", "conference", "workshop", "other")
EVENT_TYPES = ("fundraiser", "volunteer", "community", "conference")
EVENT_STATUSES = ("upcoming", "ongoing", "completed", "cancelled")


class Event(TimestampedBase):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "category IN ('fundraiser', 'community', 'education', 'conference', "
            "'workshop', 'other')",
            name="ck_events_category",
        ),
        CheckConstraint(
            "event_type IN ('fundraiser', 'volunteer', 'community', 'conference')",
            name="ck_events_event_type",
        ),
        CheckConstraint(
            "status IN ('upcoming', 'ongoing', 'completed', 'cancelled')",
            name="ck_events_status",
        ),
        CheckConstraint("registered_count >= 0", name="ck_events_registered_count"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    full_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    event_type: Mapped[str] = mapped_column(String(20), nullable=False, default="community")
    max_participants: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Only ever changed by the guarded increment in api.events
    registered_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="upcoming")
    impact: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_past: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def spots_left(self) -> int | None:
        if self.max_participants is None:
            return None
        return max(self.max_participants - (self.registered_count or 0), 0)
