"""Admin dashboard: aggregate stats, donor summaries, recent transactions."""

from collections import defaultdict
from datetime import UTC, datetime
from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from charity_api.core.dependencies import get_admin_user, get_db
from charity_api.models.contact_submission import ContactSubmission
from charity_api.models.donation import Donation
from charity_api.models.event import Event
from charity_api.models.newsletter_subscription import NewsletterSubscription
from charity_api.models.project import Project
from charity_api.models.user import User
from charity_api.models.volunteer import Volunteer
from charity_api.schemas.admin import CategoryCount, DashboardStats, DonorSummary, MonthlyDonation
from charity_api.schemas.donation import DonationResponse

router = APIRouter()

CHART_MONTHS = 6
TRANSACTIONS_LIMIT = 100


def _month_keys(now: datetime, months: int) -> list[str]:
    """``["YYYY-MM", ...]`` for the last ``months`` calendar months, oldest first."""
    year, month = now.year, now.month
    keys = []
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


async def _count(db: AsyncSession, stmt) -> int:
    return (await db.execute(stmt)).scalar_one()


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> DashboardStats:
    completed = Donation.status == "completed"

    totals = await db.execute(
        select(func.coalesce(func.sum(Donation.amount), 0), func.count(Donation.id)).where(
            completed
        )
    )
    total_amount, total_count = totals.one()

    active_projects = await _count(
        db, select(func.count(Project.id)).where(Project.status == "active")
    )
    total_projects = await _count(db, select(func.count(Project.id)))
    new_contacts = await _count(
        db, select(func.count(ContactSubmission.id)).where(ContactSubmission.status == "new")
    )
    total_newsletters = await _count(
        db,
        select(func.count(NewsletterSubscription.id)).where(
            NewsletterSubscription.status == "active"
        ),
    )
    total_volunteers = await _count(db, select(func.count(Volunteer.id)))
    active_volunteers = await _count(
        db, select(func.count(Volunteer.id)).where(Volunteer.status == "active")
    )
    total_events = await _count(db, select(func.count(Event.id)))
    upcoming_events = await _count(
        db, select(func.count(Event.id)).where(Event.status == "upcoming")
    )

    # Bucket per month in Python so the query stays dialect-neutral
    month_keys = _month_keys(datetime.now(UTC), CHART_MONTHS)
    oldest_year, oldest_month = (int(part) for part in month_keys[0].split("-"))
    since = datetime(oldest_year, oldest_month, 1, tzinfo=UTC)
    rows = await db.execute(
        select(Donation.created_at, Donation.amount).where(
            completed, Donation.created_at >= since
        )
    )
    monthly: dict[str, Decimal] = defaultdict(Decimal)
    for created_at, amount in rows.all():
        monthly[created_at.strftime("%Y-%m")] += amount

    distribution = await db.execute(
        select(Project.category, func.count(Project.id))
        .group_by(Project.category)
        .order_by(Project.category)
    )

    return DashboardStats(
        total_donations=Decimal(str(total_amount)),
        total_donations_count=total_count,
        active_projects=active_projects,
        total_projects=total_projects,
        new_contacts=new_contacts,
        total_newsletters=total_newsletters,
        total_volunteers=total_volunteers,
        active_volunteers=active_volunteers,
        total_events=total_events,
        upcoming_events=upcoming_events,
        monthly_donations=[
            MonthlyDonation(month=key, amount=monthly.get(key, Decimal("0")))
            for key in month_keys
        ],
        project_distribution=[
            CategoryCount(name=category, value=count) for category, count in distribution.all()
        ],
    )


@router.get("/donors", response_model=list[DonorSummary])
async def get_donors(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[DonorSummary]:
    total = func.sum(Donation.amount)
    result = await db.execute(
        select(Donation.donor_email, Donation.donor_name, total, func.count(Donation.id))
        .where(Donation.status == "completed")
        .group_by(Donation.donor_email, Donation.donor_name)
        .order_by(total.desc())
    )
    return [
        DonorSummary(
            email=email,
            name=name,
            total_donated=Decimal(str(total_donated or 0)),
            donation_count=count,
        )
        for email, name, total_donated, count in result.all()
    ]


@router.get("/transactions", response_model=list[DonationResponse])
async def get_transactions(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[DonationResponse]:
    result = await db.execute(
        select(Donation)
        .options(selectinload(Donation.project))
        .order_by(Donation.created_at.desc(), Donation.id)
        .limit(TRANSACTIONS_LIMIT)
    )
    return [DonationResponse.model_validate(d) for d in result.scalars().all()]
