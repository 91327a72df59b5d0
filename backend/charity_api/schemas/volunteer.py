"""Volunteer sign-up and management schemas."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from charity_api.schemas.validators import validate_phone

VolunteerStatus = Literal["pending", "active", "inactive", "rejected"]
VolunteerAvailability = Literal["weekdays", "weekends", "flexible", "remote"]
VolunteerInterest = Literal[
    "Education",
    "Healthcare",
    "Environment",
    "Community Development",
    "Event Support",
    "Remote Work",
]


class VolunteerCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=255)
    country: str | None = Field(None, max_length=255)
    skills: list[str] = Field(default_factory=list, max_length=50)
    interests: list[VolunteerInterest] = Field(default_factory=list)
    availability: VolunteerAvailability
    experience: str | None = Field(None, max_length=5000)
    motivation: str = Field(..., min_length=1, max_length=5000)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone(v)

    @field_validator("skills")
    @classmethod
    def strip_skills(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s.strip()]

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class VolunteerStatusUpdate(BaseModel):
    status: VolunteerStatus


class VolunteerResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str | None
    city: str | None
    country: str | None
    skills: list[str]
    interests: list[str]
    availability: str
    experience: str | None
    motivation: str
    status: str
    hours_completed: int
    projects_joined: int
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class VolunteerRegistrationResult(BaseModel):
    message: str
    volunteer: VolunteerResponse


class VolunteerCertificateResponse(BaseModel):
    message: str
    volunteer: VolunteerResponse
