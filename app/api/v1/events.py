"""
Event API endpoints.

Startups host events; individuals with a completed profile register for them.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, individual_required, startup_required
from app.api.v1.jobs import startup_summary
from app.core.errors import Forbidden, NotFound
from app.db.session import get_db
from app.models import Event, EventRegistration, StartupProfile, User
from app.schemas.base import SuccessResponse
from app.schemas.event import (
    EventIdRequest,
    EventIn,
    EventRegistrationDetail,
    EventRegistrationResponse,
    EventResponse,
    MyRegistration,
    RegisteredEvent,
    RegistrantSummary,
)
from app.services.registration import register_for_event, unregister_from_event

logger = logging.getLogger("satas.events")

router = APIRouter()


def get_owned_event(db: Session, event_id: str, owner: User) -> Event:
    event = db.query(Event).filter(Event.id == event_id, Event.startup_id == owner.id).first()
    if event is None:
        raise Forbidden("Event not found or not authorized")
    return event


def _registrations_of(db: Session, user: User) -> list[EventRegistration]:
    return (
        db.query(EventRegistration)
        .filter(EventRegistration.registrant_id == user.id)
        .order_by(EventRegistration.created_at.desc())
        .all()
    )


# ============== API Endpoints ==============


@router.get("", response_model=list[EventResponse])
def list_events(
    startup_id: Optional[str] = Query(None, alias="startupId"),
    db: Session = Depends(get_db),
):
    """All events, latest date first, optionally for one startup."""
    query = db.query(Event)
    if startup_id:
        query = query.filter(Event.startup_id == startup_id)
    return query.order_by(Event.date.desc()).all()


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventIn,
    current_user: User = Depends(startup_required),
    db: Session = Depends(get_db),
):
    profile = db.query(StartupProfile.user_id).filter(StartupProfile.user_id == current_user.id).first()
    if profile is None:
        raise Forbidden("Complete your startup profile before hosting events")

    now = datetime.utcnow()
    event = Event(
        id=str(uuid4()),
        startup_id=current_user.id,
        created_at=now,
        updated_at=now,
        **payload.model_dump(),
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info("Event created: %s by startup %s", event.id, current_user.id)
    return event


@router.post("/register", response_model=EventRegistrationResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: EventIdRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Register for an event. Individuals with a completed profile only, once per event."""
    return register_for_event(db, current_user, payload.event_id)


@router.post("/unregister", response_model=SuccessResponse)
def unregister(
    payload: EventIdRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    unregister_from_event(db, current_user, payload.event_id)
    return SuccessResponse()


@router.get("/my-registrations", response_model=list[MyRegistration])
def get_my_registrations(
    current_user: User = Depends(individual_required),
    db: Session = Depends(get_db),
):
    """The caller's registrations with event and host summaries."""
    return [
        MyRegistration(
            id=r.id,
            event_id=r.event_id,
            created_at=r.created_at,
            event=EventResponse.model_validate(r.event),
            startup=startup_summary(r.event.startup),
        )
        for r in _registrations_of(db, current_user)
    ]


@router.get("/user", response_model=list[RegisteredEvent])
def get_user_events(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Events the caller is registered for."""
    events = []
    for registration in _registrations_of(db, current_user):
        event = registration.event
        events.append(
            RegisteredEvent(
                **EventResponse.model_validate(event).model_dump(),
                startup=startup_summary(event.startup),
            )
        )
    return events


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, db: Session = Depends(get_db)):
    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None:
        raise NotFound("Event not found")
    return event


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    payload: EventIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event = get_owned_event(db, event_id, current_user)
    for field, value in payload.model_dump().items():
        setattr(event, field, value)
    event.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(event)
    return event


@router.delete("/{event_id}", response_model=SuccessResponse)
def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete an event and its registrations."""
    event = get_owned_event(db, event_id, current_user)
    db.delete(event)
    db.commit()

    logger.info("Event deleted: %s", event_id)
    return SuccessResponse()


@router.get("/{event_id}/registrations", response_model=list[EventRegistrationDetail])
def get_event_registrations(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Who registered for one of the caller's events."""
    event = get_owned_event(db, event_id, current_user)

    registrations = (
        db.query(EventRegistration)
        .filter(EventRegistration.event_id == event.id)
        .order_by(EventRegistration.created_at.desc())
        .all()
    )
    return [
        EventRegistrationDetail(
            id=r.id,
            event_id=r.event_id,
            registrant_id=r.registrant_id,
            created_at=r.created_at,
            user=RegistrantSummary(
                name=r.registrant.name,
                email=r.registrant.email,
                profile_picture=r.registrant.profile_picture,
            ),
        )
        for r in registrations
    ]
