from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from charity_api.db.base import TimestampedBase

PROJECT_CATEGORIES = ("education", "healthcare", "water", "shelter", "environment", "community")
PROJECT_STATUSES = ("draft", "active", "completed", "cancelled")


class Project(TimestampedBase):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(
            "category IN ('education', 'healthcare', 'water', 'shelter', "
            "'environment', 'community')",
            name="ck_projects_category",
        ),
        CheckConstraint(
            "status IN ('draft', 'active', 'completed', 'cancelled')",
            name="ck_projects_status",
        ),
        CheckConstraint("target_amount >= 0", name="ck_projects_target_amount"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    full_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    # Only ever changed by the atomic increment in services.donations
    amount_raised: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    beneficiaries: Mapped[str | None] = mapped_column(String(255), nullable=True)

    @property
    def progress(self) -> float:
        target = self.target_amount or Decimal("0")
        if target == 0:
            return 0.0
        raised = self.amount_raised or Decimal("0")
        return min(float(raised / target * 100), 100.0)
