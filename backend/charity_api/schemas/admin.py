"""Admin dashboard response schemas."""

from decimal import Decimal

from pydantic import BaseModel


class MonthlyDonation(BaseModel):
    month: str  # "YYYY-MM"
    amount: Decimal


class CategoryCount(BaseModel):
    name: str
    value: int


class DashboardStats(BaseModel):
    total_donations: Decimal
    total_donations_count: int
    active_projects: int
    total_projects: int
    new_contacts: int
    total_newsletters: int
    total_volunteers: int
    active_volunteers: int
    total_events: int
    upcoming_events: int
    monthly_donations: list[MonthlyDonation]
    project_distribution: list[CategoryCount]


class DonorSummary(BaseModel):
    email: str
    name: str
    total_donated: Decimal
    donation_count: int
