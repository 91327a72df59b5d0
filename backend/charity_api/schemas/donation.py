"""Donation request/response schemas."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from charity_api.schemas.validators import validate_pan, validate_phone

DonationStatus = Literal["pending", "completed", "failed", "refunded"]
DonationType = Literal["one-time", "monthly"]


class DonationCreateRequest(BaseModel):
    amount: Decimal = Field(..., ge=1, max_digits=12, decimal_places=2)
    donation_type: DonationType = "one-time"
    project_id: uuid.UUID | None = None
    donor_name: str = Field(..., min_length=1, max_length=255)
    donor_email: EmailStr
    donor_phone: str | None = Field(None, max_length=50)
    pan_number: str | None = None
    is_anonymous: bool = False
    message: str | None = Field(None, max_length=2000)

    @field_validator("donor_name")
    @classmethod
    def strip_donor_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Donor name is required")
        return v

    @field_validator("donor_email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("donor_phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("pan_number")
    @classmethod
    def check_pan(cls, v: str | None) -> str | None:
        return validate_pan(v)


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str = Field(..., min_length=1, max_length=64)
    razorpay_payment_id: str = Field(..., min_length=1, max_length=64)
    razorpay_signature: str = Field(..., min_length=1, max_length=128)


class DonationAdminUpdate(BaseModel):
    """Admin corrections: only status and message are writable."""

    model_config = ConfigDict(extra="forbid")

    status: DonationStatus | None = None
    message: str | None = Field(None, max_length=2000)

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("status cannot be null")
        return v


class ProjectSummary(BaseModel):
    id: uuid.UUID
    title: str

    model_config = {"from_attributes": True}


class DonationResponse(BaseModel):
    id: uuid.UUID
    transaction_id: str
    amount: Decimal
    donation_type: str
    project_id: uuid.UUID | None
    project: ProjectSummary | None = None
    donor_name: str
    donor_email: str
    donor_phone: str | None
    pan_number: str | None
    is_anonymous: bool
    message: str | None
    payment_method: str
    status: str
    razorpay_order_id: str | None
    razorpay_payment_id: str | None
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class DonationCreateResponse(BaseModel):
    donation: DonationResponse
    order: dict[str, Any]


class DonationDocumentResponse(BaseModel):
    message: str
    donation: DonationResponse
