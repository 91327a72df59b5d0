"""Ordered content blocks shown on an event page."""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

METRIC_ICONS = ("Award", "Users", "TrendingUp", "MapPin", "Heart", "DollarSign")
TESTIMONIAL_ROLES = ("Event Coordinator", "Volunteer", "Beneficiary", "Attendee")


def _event_fk() -> Mapped[uuid.UUID]:
    return mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )


class EventAgendaItem(TimestampedBase):
    __tablename__ = "event_agenda_items"

    event_id: Mapped[uuid.UUID] = _event_fk()
    time: Mapped[str] = mapped_column(String(50), nullable=False)
    activity: Mapped[str] = mapped_column(String(255), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class EventGalleryImage(TimestampedBase):
    __tablename__ = "event_gallery_images"

    event_id: Mapped[uuid.UUID] = _event_fk()
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class EventImpactMetric(TimestampedBase):
    __tablename__ = "event_impact_metrics"
    __table_args__ = (
        CheckConstraint(
            "icon_type IS NULL OR icon_type IN "
            "('Award', 'Users', 'TrendingUp', 'MapPin', 'Heart', 'DollarSign')",
            name="ck_event_impact_metrics_icon_type",
        ),
    )

    event_id: Mapped[uuid.UUID] = _event_fk()
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(String(100), nullable=False)
    icon_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class EventTestimonial(TimestampedBase):
    __tablename__ = "event_testimonials"
    __table_args__ = (
        CheckConstraint(
            "role IS NULL OR role IN "
            "('Event Coordinator', 'Volunteer', 'Beneficiary', 'Attendee')",
            name="ck_event_testimonials_role",
        ),
    )

    event_id: Mapped[uuid.UUID] = _event_fk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(30), nullable=True)
    quote: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
