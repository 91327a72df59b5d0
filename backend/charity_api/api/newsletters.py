"""Newsletter subscribe/unsubscribe (public) and subscriber management (admin)."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.dependencies import get_admin_user, get_db
from charity_api.models.newsletter_subscription import NewsletterSubscription
from charity_api.models.user import User
from charity_api.schemas.newsletter import (
    NewsletterActionResponse,
    NewsletterEmailRequest,
    NewsletterSubscriptionResponse,
)

router = APIRouter()


async def _find_by_email(db: AsyncSession, email: str) -> NewsletterSubscription | None:
    result = await db.execute(
        select(NewsletterSubscription).where(NewsletterSubscription.email == email)
    )
    return result.scalar_one_or_none()


@router.post("/subscribe", response_model=NewsletterActionResponse, status_code=201)
async def subscribe(
    body: NewsletterEmailRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> NewsletterActionResponse:
    """Subscribe an email. 201 when new, 200 when an inactive one is reactivated."""
    subscription = await _find_by_email(db, body.email)

    if subscription is not None:
        if subscription.status == "active":
            raise HTTPException(
                status_code=400, detail="Email is already subscribed to the newsletter"
            )
        subscription.status = "active"
        await db.flush()
        await db.refresh(subscription)
        response.status_code = 200
        return NewsletterActionResponse(
            message="Successfully resubscribed to newsletter",
            subscription=NewsletterSubscriptionResponse.model_validate(subscription),
        )

    subscription = NewsletterSubscription(email=body.email, status="active")
    db.add(subscription)
    await db.flush()
    await db.refresh(subscription)
    return NewsletterActionResponse(
        message="Successfully subscribed to newsletter",
        subscription=NewsletterSubscriptionResponse.model_validate(subscription),
    )


@router.post("/unsubscribe", response_model=NewsletterActionResponse)
async def unsubscribe(
    body: NewsletterEmailRequest,
    db: AsyncSession = Depends(get_db),
) -> NewsletterActionResponse:
    subscription = await _find_by_email(db, body.email)
    if subscription is None:
        raise HTTPException(
            status_code=404, detail="Email not found in newsletter subscriptions"
        )

    subscription.status = "unsubscribed"
    await db.flush()
    return NewsletterActionResponse(message="Successfully unsubscribed from newsletter")


@router.get("", response_model=list[NewsletterSubscriptionResponse])
async def list_subscriptions(
    status: str | None = Query(None, pattern=r"^(active|unsubscribed|bounced)$"),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[NewsletterSubscriptionResponse]:
    stmt = select(NewsletterSubscription).order_by(
        NewsletterSubscription.subscribed_at.desc(), NewsletterSubscription.id
    )
    if status:
        stmt = stmt.where(NewsletterSubscription.status == status)
    result = await db.execute(stmt)
    return [NewsletterSubscriptionResponse.model_validate(s) for s in result.scalars().all()]


@router.get("/{subscription_id}", response_model=NewsletterSubscriptionResponse)
async def get_subscription(
    subscription_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> NewsletterSubscriptionResponse:
    subscription = await db.get(NewsletterSubscription, subscription_id)
    if subscription is None:
        raise HTTPException(status_code=404, detail="Newsletter subscription not found")
    return NewsletterSubscriptionResponse.model_validate(subscription)


@router.delete("/{subscription_id}", status_code=204)
async def delete_subscription(
    subscription_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    subscription = await db.get(NewsletterSubscription, subscription_id)
    if subscription is None:
        raise HTTPException(status_code=404, detail="Newsletter subscription not found")
    await db.delete(subscription)
    await db.flush()
