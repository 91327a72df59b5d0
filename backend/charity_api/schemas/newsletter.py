"""Newsletter subscription schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, field_validator


class NewsletterEmailRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class NewsletterSubscriptionResponse(BaseModel):
    id: uuid.UUID
    email: str
    status: str
    subscribed_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class NewsletterActionResponse(BaseModel):
    message: str
    subscription: NewsletterSubscriptionResponse | None = None
