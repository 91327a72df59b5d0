"""Project request/response schemas."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ProjectCategory = Literal[
    "education", "healthcare", "water", "shelter", "environment", "community"
]
ProjectStatus = Literal["draft", "active", "completed", "cancelled"]


class _DateRangeMixin(BaseModel):
    @model_validator(mode="after")
    def _end_not_before_start(self):
        start = getattr(self, "start_date", None)
        end = getattr(self, "end_date", None)
        if start is not None and end is not None and end < start:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectCreate(_DateRangeMixin):
    # no amount_raised: only verified donations move it
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    full_description: str | None = None
    category: ProjectCategory
    location: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=2000)
    target_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    status: ProjectStatus = "draft"
    start_date: date | None = None
    end_date: date | None = None
    beneficiaries: str | None = Field(None, max_length=255)


class ProjectUpdate(_DateRangeMixin):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    full_description: str | None = None
    category: ProjectCategory | None = None
    location: str | None = Field(None, min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=2000)
    target_amount: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    status: ProjectStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    beneficiaries: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "ProjectUpdate":
        for name in ("title", "description", "category", "location", "target_amount", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ProjectResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    full_description: str | None
    category: str
    location: str
    image_url: str | None
    target_amount: Decimal
    amount_raised: Decimal
    progress: float
    status: str
    start_date: date | None
    end_date: date | None
    beneficiaries: str | None
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class GalleryItemResponse(BaseModel):
    id: uuid.UUID
    file_name: str
    content_type: str
    caption: str | None
    sort_order: int
    url: str
