import uuid

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

VOLUNTEER_STATUSES = ("pending", "active", "inactive", "rejected")
VOLUNTEER_AVAILABILITY = ("weekdays", "weekends", "flexible", "remote")
VOLUNTEER_INTERESTS = (
    "Education",
    "Healthcare",
    "Environment",
    "Community Development",
    "Event Support",
    "Remote Work",
)


class Volunteer(TimestampedBase):
    __tablename__ = "volunteers"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'active', 'inactive', 'rejected')",
            name="ck_volunteers_status",
        ),
        CheckConstraint(
            "availability IN ('weekdays', 'weekends', 'flexible', 'remote')",
            name="ck_volunteers_availability",
        ),
    )

    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    interests: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    availability: Mapped[str] = mapped_column(String(20), nullable=False)
    experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    motivation: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    hours_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    projects_joined: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
