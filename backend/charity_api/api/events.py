"""Event endpoints.

Public reads return the event page (agenda, gallery, impact metrics,
testimonials) but never registrations. Registering takes seats with a guarded
``UPDATE events SET registered_count = registered_count + n`` so concurrent
sign-ups cannot overfill an event; cancelling a registration gives the seats
back.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.dependencies import get_admin_user, get_current_user, get_db
from charity_api.models.event import Event
from charity_api.models.event_content import (
    EventAgendaItem,
    EventGalleryImage,
    EventImpactMetric,
    EventTestimonial,
)
from charity_api.models.event_registration import EventRegistration
from charity_api.models.user import User
from charity_api.schemas.event import (
    AgendaItemCreate,
    AgendaItemResponse,
    EventCategory,
    EventCreate,
    EventDetailResponse,
    EventRegistrationCreate,
    EventRegistrationResponse,
    EventRegistrationResult,
    EventRegistrationStatusUpdate,
    EventResponse,
    EventStatus,
    EventType,
    EventUpdate,
    GalleryImageCreate,
    GalleryImageResponse,
    ImpactMetricCreate,
    ImpactMetricResponse,
    TestimonialCreate,
    TestimonialResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CLOSED_STATUSES = ("completed", "cancelled")
CONTENT_MODELS = (EventAgendaItem, EventGalleryImage, EventImpactMetric, EventTestimonial)


async def _get_event_or_404(db: AsyncSession, event_id: uuid.UUID) -> Event:
    event = await db.get(Event, event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


async def _content(db: AsyncSession, model, event_id: uuid.UUID) -> list:
    result = await db.execute(
        select(model)
        .where(model.event_id == event_id)
        .order_by(model.display_order, model.created_at, model.id)
    )
    return list(result.scalars().all())


async def _add_content(db: AsyncSession, model, event_id: uuid.UUID, body):
    await _get_event_or_404(db, event_id)
    row = model(event_id=event_id, **body.model_dump())
    db.add(row)
    await db.flush()
    await db.refresh(row)
    return row


async def _delete_content(
    db: AsyncSession, model, event_id: uuid.UUID, row_id: uuid.UUID, label: str
) -> None:
    row = await db.get(model, row_id)
    if row is None or row.event_id != event_id:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    await db.delete(row)
    await db.flush()


async def _take_seats(db: AsyncSession, event_id: uuid.UUID, seats: int) -> bool:
    """Add ``seats`` to registered_count unless that would pass max_participants."""
    result = await db.execute(
        update(Event)
        .where(
            Event.id == event_id,
            or_(
                Event.max_participants.is_(None),
                Event.registered_count + seats <= Event.max_participants,
            ),
        )
        .values(registered_count=Event.registered_count + seats)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def _release_seats(db: AsyncSession, event_id: uuid.UUID, seats: int) -> None:
    await db.execute(
        update(Event)
        .where(Event.id == event_id, Event.registered_count >= seats)
        .values(registered_count=Event.registered_count - seats)
        .execution_options(synchronize_session=False)
    )


# --- Public reads ---


@router.get("", response_model=list[EventResponse])
async def list_events(
    status: EventStatus | None = Query(None),
    event_type: EventType | None = Query(None),
    category: EventCategory | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[EventResponse]:
    stmt = select(Event).order_by(Event.event_date.desc(), Event.id)
    if status:
        stmt = stmt.where(Event.status == status)
    if event_type:
        stmt = stmt.where(Event.event_type == event_type)
    if category:
        stmt = stmt.where(Event.category == category)
    result = await db.execute(stmt)
    return [EventResponse.model_validate(e) for e in result.scalars().all()]


@router.get("/my-events", response_model=list[EventResponse])
async def list_my_events(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[EventResponse]:
    """Events the caller registered for, matched by account or by email."""
    registered = select(EventRegistration.event_id).where(
        EventRegistration.status != "cancelled",
        or_(
            EventRegistration.user_id == user.id,
            EventRegistration.participant_email == user.email.lower(),
        ),
    )
    result = await db.execute(
        select(Event).where(Event.id.in_(registered)).order_by(Event.event_date.desc(), Event.id)
    )
    return [EventResponse.model_validate(e) for e in result.scalars().all()]


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(
    event_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> EventDetailResponse:
    event = await _get_event_or_404(db, event_id)
    detail = EventDetailResponse.model_validate(event)
    detail.agenda = [
        AgendaItemResponse.model_validate(r) for r in await _content(db, EventAgendaItem, event_id)
    ]
    detail.gallery = [
        GalleryImageResponse.model_validate(r)
        for r in await _content(db, EventGalleryImage, event_id)
    ]
    detail.impact_metrics = [
        ImpactMetricResponse.model_validate(r)
        for r in await _content(db, EventImpactMetric, event_id)
    ]
    detail.testimonials = [
        TestimonialResponse.model_validate(r)
        for r in await _content(db, EventTestimonial, event_id)
    ]
    return detail


@router.get("/{event_id}/agenda", response_model=list[AgendaItemResponse])
async def list_agenda(event_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await _get_event_or_404(db, event_id)
    return [
        AgendaItemResponse.model_validate(r) for r in await _content(db, EventAgendaItem, event_id)
    ]


@router.get("/{event_id}/gallery", response_model=list[GalleryImageResponse])
async def list_gallery(event_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await _get_event_or_404(db, event_id)
    return [
        GalleryImageResponse.model_validate(r)
        for r in await _content(db, EventGalleryImage, event_id)
    ]


@router.get("/{event_id}/impact-metrics", response_model=list[ImpactMetricResponse])
async def list_impact_metrics(event_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await _get_event_or_404(db, event_id)
    return [
        ImpactMetricResponse.model_validate(r)
        for r in await _content(db, EventImpactMetric, event_id)
    ]


@router.get("/{event_id}/testimonials", response_model=list[TestimonialResponse])
async def list_testimonials(event_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await _get_event_or_404(db, event_id)
    return [
        TestimonialResponse.model_validate(r)
        for r in await _content(db, EventTestimonial, event_id)
    ]


# --- Registration ---


@router.post(
    "/{event_id}/register", response_model=EventRegistrationResult, status_code=201
)
async def register_for_event(
    event_id: uuid.UUID,
    body: EventRegistrationCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EventRegistrationResult:
    event = await _get_event_or_404(db, event_id)
    if event.status in CLOSED_STATUSES or event.is_past:
        raise HTTPException(status_code=400, detail="Event is not open for registration")

    existing = await db.execute(
        select(EventRegistration.id).where(
            EventRegistration.event_id == event_id,
            EventRegistration.participant_email == body.participant_email,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="Already registered for this event")

    if not await _take_seats(db, event_id, body.number_of_guests):
        raise HTTPException(status_code=400, detail="Event is full")

    registration = EventRegistration(
        event_id=event_id, user_id=user.id, status="pending", **body.model_dump()
    )
    db.add(registration)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Already registered for this event") from exc
    await db.refresh(registration)

    logger.info(
        "Registration %s for event %s (%d seats)",
        registration.id,
        event_id,
        registration.number_of_guests,
    )
    return EventRegistrationResult(
        message="Successfully registered for event",
        registration=EventRegistrationResponse.model_validate(registration),
    )


@router.get("/{event_id}/registrations", response_model=list[EventRegistrationResponse])
async def list_registrations(
    event_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> list[EventRegistrationResponse]:
    await _get_event_or_404(db, event_id)
    result = await db.execute(
        select(EventRegistration)
        .where(EventRegistration.event_id == event_id)
        .order_by(EventRegistration.created_at, EventRegistration.id)
    )
    return [EventRegistrationResponse.model_validate(r) for r in result.scalars().all()]


@router.put(
    "/{event_id}/registrations/{registration_id}", response_model=EventRegistrationResponse
)
async def update_registration_status(
    event_id: uuid.UUID,
    registration_id: uuid.UUID,
    body: EventRegistrationStatusUpdate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> EventRegistrationResponse:
    registration = await db.get(EventRegistration, registration_id)
    if registration is None or registration.event_id != event_id:
        raise HTTPException(status_code=404, detail="Registration not found")

    was_cancelled = registration.status == "cancelled"
    now_cancelled = body.status == "cancelled"
    # Cancelled registrations hold no seats
    if now_cancelled and not was_cancelled:
        await _release_seats(db, event_id, registration.number_of_guests)
    elif was_cancelled and not now_cancelled:
        if not await _take_seats(db, event_id, registration.number_of_guests):
            raise HTTPException(status_code=400, detail="Event is full")

    registration.status = body.status
    await db.flush()
    await db.refresh(registration)
    return EventRegistrationResponse.model_validate(registration)


# --- Admin management ---


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    body: EventCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> EventResponse:
    event = Event(**body.model_dump(), registered_count=0)
    db.add(event)
    await db.flush()
    await db.refresh(event)
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: uuid.UUID,
    body: EventUpdate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> EventResponse:
    event = await _get_event_or_404(db, event_id)

    update_data = body.model_dump(exclude_unset=True)
    capacity = update_data.get("max_participants")
    if capacity is not None and capacity < event.registered_count:
        raise HTTPException(
            status_code=400,
            detail=f"max_participants cannot be below the {event.registered_count} seats taken",
        )
    for field, value in update_data.items():
        setattr(event, field, value)

    await db.flush()
    await db.refresh(event)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    event = await _get_event_or_404(db, event_id)

    for model in (*CONTENT_MODELS, EventRegistration):
        await db.execute(
            delete(model)
            .where(model.event_id == event_id)
            .execution_options(synchronize_session=False)
        )
    await db.delete(event)
    await db.flush()
    logger.info("Admin %s deleted event %s", admin.email, event_id)


@router.post("/{event_id}/agenda", response_model=AgendaItemResponse, status_code=201)
async def add_agenda_item(
    event_id: uuid.UUID,
    body: AgendaItemCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> AgendaItemResponse:
    row = await _add_content(db, EventAgendaItem, event_id, body)
    return AgendaItemResponse.model_validate(row)


@router.delete("/{event_id}/agenda/{item_id}", status_code=204)
async def delete_agenda_item(
    event_id: uuid.UUID,
    item_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await _delete_content(db, EventAgendaItem, event_id, item_id, "Agenda item")


@router.post("/{event_id}/gallery", response_model=GalleryImageResponse, status_code=201)
async def add_gallery_image(
    event_id: uuid.UUID,
    body: GalleryImageCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> GalleryImageResponse:
    row = await _add_content(db, EventGalleryImage, event_id, body)
    return GalleryImageResponse.model_validate(row)


@router.delete("/{event_id}/gallery/{image_id}", status_code=204)
async def delete_gallery_image(
    event_id: uuid.UUID,
    image_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await _delete_content(db, EventGalleryImage, event_id, image_id, "Gallery image")


@router.post(
    "/{event_id}/impact-metrics", response_model=ImpactMetricResponse, status_code=201
)
async def add_impact_metric(
    event_id: uuid.UUID,
    body: ImpactMetricCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ImpactMetricResponse:
    row = await _add_content(db, EventImpactMetric, event_id, body)
    return ImpactMetricResponse.model_validate(row)


@router.delete("/{event_id}/impact-metrics/{metric_id}", status_code=204)
async def delete_impact_metric(
    event_id: uuid.UUID,
    metric_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await _delete_content(db, EventImpactMetric, event_id, metric_id, "Impact metric")


@router.post("/{event_id}/testimonials", response_model=TestimonialResponse, status_code=201)
async def add_testimonial(
    event_id: uuid.UUID,
    body: TestimonialCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> TestimonialResponse:
    row = await _add_content(db, EventTestimonial, event_id, body)
    return TestimonialResponse.model_validate(row)


@router.delete("/{event_id}/testimonials/{testimonial_id}", status_code=204)
async def delete_testimonial(
    event_id: uuid.UUID,
    testimonial_id: uuid.UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await _delete_content(db, EventTestimonial, event_id, testimonial_id, "Testimonial")
