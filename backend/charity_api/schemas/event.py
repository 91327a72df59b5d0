"""Event, registration and event page content schemas."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from charity_api.schemas.validators import validate_image_url, validate_phone

EventCategory = Literal["fundraiser", "community", "education", "conference", "workshop", "other"]
EventType = Literal["fundraiser", "volunteer", "community", "conference"]
EventStatus = Literal["upcoming", "ongoing", "completed", "cancelled"]
RegistrationStatus = Literal["pending", "confirmed", "cancelled", "attended"]
MetricIcon = Literal["Award", "Users", "TrendingUp", "MapPin", "Heart", "DollarSign"]
TestimonialRole = Literal["Event Coordinator", "Volunteer", "Beneficiary", "Attendee"]


class EventCreate(BaseModel):
    # no registered_count: only registrations move it
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    full_description: str | None = None
    event_date: datetime
    event_time: str | None = Field(None, max_length=50)
    location: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    image_url: str | None = Field(None, max_length=2000)
    category: EventCategory
    event_type: EventType = "community"
    max_participants: int | None = Field(None, ge=1)
    status: EventStatus = "upcoming"
    impact: str | None = None
    is_past: bool = False

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return validate_image_url(v)


class EventUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    full_description: str | None = None
    event_date: datetime | None = None
    event_time: str | None = Field(None, max_length=50)
    location: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = None
    image_url: str | None = Field(None, max_length=2000)
    category: EventCategory | None = None
    event_type: EventType | None = None
    max_participants: int | None = Field(None, ge=1)
    status: EventStatus | None = None
    impact: str | None = None
    is_past: bool | None = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return validate_image_url(v)

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "EventUpdate":
        required = (
            "title",
            "description",
            "event_date",
            "location",
            "category",
            "event_type",
            "status",
            "is_past",
        )
        for name in required:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class AgendaItemCreate(BaseModel):
    time: str = Field(..., min_length=1, max_length=50)
    activity: str = Field(..., min_length=1, max_length=255)
    display_order: int = 0


class AgendaItemResponse(AgendaItemCreate):
    id: uuid.UUID
    event_id: uuid.UUID

    model_config = {"from_attributes": True}


class GalleryImageCreate(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=2000)
    caption: str | None = Field(None, max_length=255)
    display_order: int = 0

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        return validate_image_url(v)


class GalleryImageResponse(BaseModel):
    id: uuid.UUID
    event_id: uuid.UUID
    image_url: str
    caption: str | None
    display_order: int

    model_config = {"from_attributes": True}


class ImpactMetricCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=255)
    value: str = Field(..., min_length=1, max_length=100)
    icon_type: MetricIcon | None = None
    display_order: int = 0


class ImpactMetricResponse(ImpactMetricCreate):
    id: uuid.UUID
    event_id: uuid.UUID

    model_config = {"from_attributes": True}


class TestimonialCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: TestimonialRole | None = None
    quote: str = Field(..., min_length=1, max_length=2000)
    display_order: int = 0


class TestimonialResponse(TestimonialCreate):
    id: uuid.UUID
    event_id: uuid.UUID

    model_config = {"from_attributes": True}


class EventResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    full_description: str | None
    event_date: datetime
    event_time: str | None
    location: str
    address: str | None
    image_url: str | None
    category: str
    event_type: str
    max_participants: int | None
    registered_count: int
    spots_left: int | None
    status: str
    impact: str | None
    is_past: bool
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class EventDetailResponse(EventResponse):
    """Event page payload; registrations are never included."""

    agenda: list[AgendaItemResponse] = []
    gallery: list[GalleryImageResponse] = []
    impact_metrics: list[ImpactMetricResponse] = []
    testimonials: list[TestimonialResponse] = []


class EventRegistrationCreate(BaseModel):
    participant_name: str = Field(..., min_length=1, max_length=255)
    participant_email: EmailStr
    participant_phone: str = Field(..., min_length=1, max_length=50)
    number_of_guests: int = Field(1, ge=1, le=50)
    special_requirements: str | None = Field(None, max_length=1000)

    @field_validator("participant_email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("participant_phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone(v)


class EventRegistrationStatusUpdate(BaseModel):
    status: RegistrationStatus


class EventRegistrationResponse(BaseModel):
    id: uuid.UUID
    event_id: uuid.UUID
    user_id: uuid.UUID | None
    participant_name: str
    participant_email: str
    participant_phone: str
    number_of_guests: int
    special_requirements: str | None
    status: str
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class EventRegistrationResult(BaseModel):
    message: str
    registration: EventRegistrationResponse
