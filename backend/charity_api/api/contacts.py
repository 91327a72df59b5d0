"""Contact form: public submission, admin triage."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.dependencies import get_admin_user, get_db
from charity_api.models.contact_submission import ContactSubmission
from charity_api.models.user import User
from charity_api.schemas.contact import (
    ContactCreate,
    ContactResponse,
    ContactStatus,
    ContactStatusUpdate,
)

router = APIRouter()


async def _get_submission_or_404(db: AsyncSession, submission_id: uuid.UUID) -> ContactSubmission:
    submission = await db.get(ContactSubmission, submission_id)
    if submission is None:
        raise HTTPException(status_code=404, detail="Contact submission not found")
    return submission


@router.post("", response_model=ContactResponse, status_code=201)
async def create_submission(
    body: ContactCreate,
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    submission = ContactSubmission(**body.model_dump(), status="new")
    db.add(submission)
    await db.flush()
    await db.refresh(submission)
    return ContactResponse.model_validate(submission)


@router.get("", response_model=list[ContactResponse])
async def list_submissions(
    status: ContactStatus | None = Query(None),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[ContactResponse]:
    stmt = select(ContactSubmission).order_by(
        ContactSubmission.created_at.desc(), ContactSubmission.id
    )
    if status:
        stmt = stmt.where(ContactSubmission.status == status)
    result = await db.execute(stmt)
    return [ContactResponse.model_validate(s) for s in result.scalars().all()]


@router.get("/{submission_id}", response_model=ContactResponse)
async def get_submission(
    submission_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    return ContactResponse.model_validate(await _get_submission_or_404(db, submission_id))


@router.put("/{submission_id}", response_model=ContactResponse)
async def update_submission_status(
    submission_id: uuid.UUID,
    body: ContactStatusUpdate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    submission = await _get_submission_or_404(db, submission_id)
    submission.status = body.status
    await db.flush()
    await db.refresh(submission)
    return ContactResponse.model_validate(submission)


@router.delete("/{submission_id}", status_code=204)
async def delete_submission(
    submission_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    submission = await _get_submission_or_404(db, submission_id)
    await db.delete(submission)
    await db.flush()
