"""Donation endpoints.

POST /donations                      create donation + Razorpay order (public)
POST /donations/verify-payment       verify callback signature (public)
GET  /donations                      completed donations by default, max 100 (public)
GET  /donations/admin                all donations, unlimited (admin)
GET  /donations/my-donations         caller's donations by email (authenticated)
GET  /donations/{id}                 single donation (public)
PUT  /donations/{id}                 status/message correction (admin)
GET  /donations/{id}/receipt         placeholder (authenticated)
GET  /donations/{id}/tax-certificate placeholder (authenticated)
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from charity_api.core.dependencies import (
    get_admin_user,
    get_current_user,
    get_db,
    require_payment_gateway,
)
from charity_api.core.exceptions import DonationNotFoundError
from charity_api.models.donation import Donation
from charity_api.models.project import Project
from charity_api.models.user import User
from charity_api.schemas.donation import (
    DonationAdminUpdate,
    DonationCreateRequest,
    DonationCreateResponse,
    DonationDocumentResponse,
    DonationResponse,
    DonationStatus,
    VerifyPaymentRequest,
)
from charity_api.services.donations import create_donation, load_donation, verify_payment
from charity_api.services.payments import RazorpayGateway

logger = logging.getLogger(__name__)

router = APIRouter()

PUBLIC_LIST_LIMIT = 100


def _list_stmt(status: str | None, project_id: uuid.UUID | None):
    stmt = (
        select(Donation)
        .options(selectinload(Donation.project))
        .order_by(Donation.created_at.desc(), Donation.id)
    )
    if status:
        stmt = stmt.where(Donation.status == status)
    if project_id is not None:
        stmt = stmt.where(Donation.project_id == project_id)
    return stmt


async def _get_or_404(db: AsyncSession, donation_id: uuid.UUID) -> Donation:
    donation = await load_donation(db, donation_id)
    if donation is None:
        raise DonationNotFoundError()
    return donation


@router.post("", response_model=DonationCreateResponse, status_code=201)
async def create(
    body: DonationCreateRequest,
    gateway: RazorpayGateway = Depends(require_payment_gateway),
    db: AsyncSession = Depends(get_db),
) -> DonationCreateResponse:
    if body.project_id is not None and await db.get(Project, body.project_id) is None:
        raise HTTPException(status_code=404, detail="Project not found")

    donation, order = await create_donation(db, gateway, body)
    return DonationCreateResponse(donation=DonationResponse.model_validate(donation), order=order)


@router.post("/verify-payment", response_model=DonationResponse)
async def verify(
    body: VerifyPaymentRequest,
    gateway: RazorpayGateway = Depends(require_payment_gateway),
    db: AsyncSession = Depends(get_db),
) -> DonationResponse:
    donation = await verify_payment(db, gateway, body)
    return DonationResponse.model_validate(donation)


@router.get("", response_model=list[DonationResponse])
async def list_donations(
    status: DonationStatus = Query("completed"),
    project_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[DonationResponse]:
    stmt = _list_stmt(status, project_id).limit(PUBLIC_LIST_LIMIT)
    result = await db.execute(stmt)
    return [DonationResponse.model_validate(d) for d in result.scalars().all()]


@router.get("/admin", response_model=list[DonationResponse])
async def list_donations_admin(
    status: DonationStatus | None = Query(None),
    project_id: uuid.UUID | None = Query(None),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[DonationResponse]:
    result = await db.execute(_list_stmt(status, project_id))
    return [DonationResponse.model_validate(d) for d in result.scalars().all()]


@router.get("/my-donations", response_model=list[DonationResponse])
async def list_my_donations(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[DonationResponse]:
    stmt = (
        select(Donation)
        .options(selectinload(Donation.project))
        .where(Donation.donor_email == user.email.lower())
        .order_by(Donation.created_at.desc(), Donation.id)
    )
    result = await db.execute(stmt)
    return [DonationResponse.model_validate(d) for d in result.scalars().all()]


@router.get("/{donation_id}", response_model=DonationResponse)
async def get_donation(
    donation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> DonationResponse:
    return DonationResponse.model_validate(await _get_or_404(db, donation_id))


@router.put("/{donation_id}", response_model=DonationResponse)
async def update_donation(
    donation_id: uuid.UUID,
    body: DonationAdminUpdate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> DonationResponse:
    donation = await _get_or_404(db, donation_id)

    update_data = body.model_dump(exclude_unset=True)
    if update_data.get("status") == "pending" and donation.status != "pending":
        raise HTTPException(
            status_code=409,
            detail=f"Cannot move a {donation.status} donation back to pending",
        )
    if "status" in update_data and update_data["status"] != donation.status:
        logger.info(
            "Admin %s changed donation %s status %s -> %s",
            admin.email,
            donation.transaction_id,
            donation.status,
            update_data["status"],
        )
    for field, value in update_data.items():
        setattr(donation, field, value)

    await db.flush()
    return DonationResponse.model_validate(await load_donation(db, donation_id))


@router.get("/{donation_id}/receipt", response_model=DonationDocumentResponse)
async def get_receipt(
    donation_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DonationDocumentResponse:
    donation = await _get_or_404(db, donation_id)
    # TODO: render a PDF receipt once a document template exists
    return DonationDocumentResponse(
        message="Receipt generation is not implemented yet",
        donation=DonationResponse.model_validate(donation),
    )


@router.get("/{donation_id}/tax-certificate", response_model=DonationDocumentResponse)
async def get_tax_certificate(
    donation_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DonationDocumentResponse:
    donation = await _get_or_404(db, donation_id)
    if not donation.pan_number:
        raise HTTPException(status_code=400, detail="PAN number is required for tax certificate")
    return DonationDocumentResponse(
        message="Tax certificate generation is not implemented yet",
        donation=DonationResponse.model_validate(donation),
    )
