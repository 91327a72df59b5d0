"""Donation creation and payment verification.

Verification finalises a donation at most once: the status UPDATE is guarded
by ``status = 'pending'`` and an empty payment id, and the project increment
only runs when that UPDATE matched a row. Both statements share the caller's transaction
(``get_db`` commits or rolls back as a unit).
"""

import logging
import secrets
import string
import time
import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from charity_api.core.exceptions import DonationNotFoundError, VerificationFailedError
from charity_api.models.donation import Donation
from charity_api.models.project import Project
from charity_api.schemas.donation import DonationCreateRequest, VerifyPaymentRequest
from charity_api.services.payments import PAYMENT_METHOD, RazorpayGateway

logger = logging.getLogger(__name__)

_TXN_ALPHABET = string.digits + string.ascii_uppercase


def generate_transaction_id() -> str:
    """``TXN<epoch millis><9 random base-36 chars>``, e.g. ``TXN1718000000000K3J9QZ0AB``."""
    suffix = "".join(secrets.choice(_TXN_ALPHABET) for _ in range(9))
    return f"TXN{int(time.time() * 1000)}{suffix}"


async def load_donation(db: AsyncSession, donation_id: uuid.UUID) -> Donation | None:
    """Fetch a donation with its project summary loaded, bypassing stale identity state."""
    result = await db.execute(
        select(Donation)
        .options(selectinload(Donation.project))
        .where(Donation.id == donation_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_donation(
    db: AsyncSession,
    gateway: RazorpayGateway,
    body: DonationCreateRequest,
) -> tuple[Donation, dict]:
    """Create the gateway order, then persist a pending donation referencing it."""
    transaction_id = generate_transaction_id()

    # Razorpay notes only accept string values
    notes = {
        "email": body.donor_email,
        "name": body.donor_name,
        "donation_type": body.donation_type,
        "project_id": str(body.project_id) if body.project_id else "",
    }
    # No row is written if this raises
    order = await gateway.create_order(body.amount, receipt=transaction_id, notes=notes)

    donation = Donation(
        transaction_id=transaction_id,
        amount=body.amount,
        donation_type=body.donation_type,
        project_id=body.project_id,
        donor_name=body.donor_name,
        donor_email=body.donor_email,
        donor_phone=body.donor_phone,
        pan_number=body.pan_number,
        is_anonymous=body.is_anonymous,
        message=body.message,
        razorpay_order_id=order["id"],
        status="pending",
        payment_method=PAYMENT_METHOD,
    )
    db.add(donation)
    await db.flush()

    logger.info(
        "Donation %s created (order %s, amount %s)",
        transaction_id,
        donation.razorpay_order_id,
        donation.amount,
    )
    return await load_donation(db, donation.id), order


async def verify_payment(
    db: AsyncSession,
    gateway: RazorpayGateway,
    body: VerifyPaymentRequest,
) -> Donation:
    """Check the callback signature and finalise the matching donation.

    Raises VerificationFailedError on a signature mismatch (row untouched) and
    DonationNotFoundError when no donation carries the order id. Re-verifying
    a completed donation returns it without crediting the project again.
    """
    if not gateway.verify_signature(
        body.razorpay_order_id, body.razorpay_payment_id, body.razorpay_signature
    ):
        logger.warning("Signature mismatch for order %s", body.razorpay_order_id)
        raise VerificationFailedError()

    result = await db.execute(
        select(Donation).where(Donation.razorpay_order_id == body.razorpay_order_id)
    )
    donation = result.scalar_one_or_none()
    if donation is None:
        raise DonationNotFoundError()

    transition = await db.execute(
        update(Donation)
        .where(
            Donation.id == donation.id,
            Donation.status == "pending",
            Donation.razorpay_payment_id.is_(None),
        )
        .values(
            razorpay_payment_id=body.razorpay_payment_id,
            razorpay_signature=body.razorpay_signature,
            status="completed",
        )
        .execution_options(synchronize_session=False)
    )

    if transition.rowcount == 1:
        if donation.project_id is not None:
            await db.execute(
                update(Project)
                .where(Project.id == donation.project_id)
                .values(amount_raised=Project.amount_raised + donation.amount)
                .execution_options(synchronize_session=False)
            )
        logger.info(
            "Donation %s completed (payment %s)",
            donation.transaction_id,
            body.razorpay_payment_id,
        )
    else:
        logger.info(
            "Donation %s already %s; verification is a no-op",
            donation.transaction_id,
            donation.status,
        )

    await db.flush()
    return await load_donation(db, donation.id)
