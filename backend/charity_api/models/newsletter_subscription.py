from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

NEWSLETTER_STATUSES = ("active", "unsubscribed", "bounced")


class NewsletterSubscription(TimestampedBase):
    __tablename__ = "newsletter_subscriptions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'unsubscribed', 'bounced')",
            name="ck_newsletter_subscriptions_status",
        ),
    )

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
