"""Volunteer sign-up (public), self-service profile and admin review."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.dependencies import ROLE_HIERARCHY, get_admin_user, get_current_user, get_db
from charity_api.models.user import User
from charity_api.models.volunteer import Volunteer
from charity_api.schemas.volunteer import (
    VolunteerCertificateResponse,
    VolunteerCreate,
    VolunteerRegistrationResult,
    VolunteerResponse,
    VolunteerStatus,
    VolunteerStatusUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_volunteer_or_404(db: AsyncSession, volunteer_id: uuid.UUID) -> Volunteer:
    volunteer = await db.get(Volunteer, volunteer_id)
    if volunteer is None:
        raise HTTPException(status_code=404, detail="Volunteer not found")
    return volunteer


def _owned_by(volunteer: Volunteer, user: User) -> bool:
    return volunteer.user_id == user.id or volunteer.email == user.email.lower()


async def _get_visible_volunteer(
    db: AsyncSession, volunteer_id: uuid.UUID, user: User
) -> Volunteer:
    """The volunteer, if the caller is an admin or the volunteer themselves."""
    volunteer = await _get_volunteer_or_404(db, volunteer_id)
    if ROLE_HIERARCHY.get(user.role, 0) < ROLE_HIERARCHY["admin"] and not _owned_by(
        volunteer, user
    ):
        raise HTTPException(status_code=403, detail="Not allowed to view this volunteer")
    return volunteer


@router.post("/register", response_model=VolunteerRegistrationResult, status_code=201)
async def register_volunteer(
    body: VolunteerCreate,
    db: AsyncSession = Depends(get_db),
) -> VolunteerRegistrationResult:
    existing = await db.execute(select(Volunteer.id).where(Volunteer.email == body.email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="Volunteer with this email already exists")

    # Link to an account that already uses this email
    account = await db.execute(select(User.id).where(User.email == body.email))
    volunteer = Volunteer(
        **body.model_dump(),
        user_id=account.scalar_one_or_none(),
        status="pending",
        hours_completed=0,
        projects_joined=0,
    )
    db.add(volunteer)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise HTTPException(
            status_code=400, detail="Volunteer with this email already exists"
        ) from exc
    await db.refresh(volunteer)

    logger.info("Volunteer %s registered (linked account: %s)", volunteer.id, volunteer.user_id)
    return VolunteerRegistrationResult(
        message="Volunteer registration successful",
        volunteer=VolunteerResponse.model_validate(volunteer),
    )


@router.get("", response_model=list[VolunteerResponse])
async def list_volunteers(
    status: VolunteerStatus | None = Query(None),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[VolunteerResponse]:
    stmt = select(Volunteer).order_by(Volunteer.created_at.desc(), Volunteer.id)
    if status:
        stmt = stmt.where(Volunteer.status == status)
    result = await db.execute(stmt)
    return [VolunteerResponse.model_validate(v) for v in result.scalars().all()]


@router.get("/my-profile", response_model=VolunteerResponse)
async def get_my_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> VolunteerResponse:
    result = await db.execute(
        select(Volunteer).where(
            or_(Volunteer.user_id == user.id, Volunteer.email == user.email.lower())
        )
    )
    volunteer = result.scalars().first()
    if volunteer is None:
        raise HTTPException(status_code=404, detail="Volunteer profile not found")
    return VolunteerResponse.model_validate(volunteer)


@router.get("/{volunteer_id}", response_model=VolunteerResponse)
async def get_volunteer(
    volunteer_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> VolunteerResponse:
    return VolunteerResponse.model_validate(
        await _get_visible_volunteer(db, volunteer_id, user)
    )


@router.put("/{volunteer_id}/status", response_model=VolunteerResponse)
async def update_volunteer_status(
    volunteer_id: uuid.UUID,
    body: VolunteerStatusUpdate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> VolunteerResponse:
    volunteer = await _get_volunteer_or_404(db, volunteer_id)
    if body.status != volunteer.status:
        logger.info(
            "Admin %s changed volunteer %s status %s -> %s",
            admin.email,
            volunteer.id,
            volunteer.status,
            body.status,
        )
    volunteer.status = body.status
    await db.flush()
    await db.refresh(volunteer)
    return VolunteerResponse.model_validate(volunteer)


@router.get("/{volunteer_id}/certificate", response_model=VolunteerCertificateResponse)
async def get_certificate(
    volunteer_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> VolunteerCertificateResponse:
    volunteer = await _get_visible_volunteer(db, volunteer_id, user)
    return VolunteerCertificateResponse(
        message="Certificate generation is not implemented yet",
        volunteer=VolunteerResponse.model_validate(volunteer),
    )
