"""
Job applications and event registrations.

Both are join rows between an individual and a startup-owned target with at
most one row per pair. The pair is protected by a unique constraint; the
integrity error raised by a duplicate insert is translated into
``AlreadyApplied`` / ``AlreadyRegistered``, so concurrent duplicates are
rejected by the store rather than slipping through a read-then-write gap.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    AlreadyApplied,
    AlreadyExists,
    AlreadyRegistered,
    BadRequest,
    Forbidden,
    NotFound,
)
from app.models import (
    APPLICATION_STATUSES,
    Event,
    EventRegistration,
    IndividualProfile,
    Job,
    JobApplication,
    User,
)

logger = logging.getLogger("satas.registration")


def ensure_user_type(user: User, expected: str, message: str) -> None:
    """Raise ``Forbidden`` unless ``user`` has the ``expected`` role."""
    if user.user_type != expected:
        raise Forbidden(message)


def insert_unique(db: Session, row, conflict: AlreadyExists):
    """
    Insert ``row`` and commit, translating a uniqueness violation.

    Args:
        db: Database session
        row: New ORM instance
        conflict: Error raised when the store rejects the row as a duplicate

    Returns:
        The refreshed row
    """
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise conflict from e
    db.refresh(row)
    return row


def _require_applicant_profile(db: Session, user: User, action: str) -> None:
    profile = db.query(IndividualProfile.user_id).filter(IndividualProfile.user_id == user.id).first()
    if profile is None:
        raise Forbidden(f"Complete your individual profile before {action}")


def apply_to_job(db: Session, user: User, job_id: str) -> JobApplication:
    """Submit ``user``'s application to ``job_id`` with status ``pending``."""
    if not job_id:
        raise BadRequest("Job ID is required")

    ensure_user_type(user, "individual", "Only individuals can apply for jobs")

    job = db.query(Job).filter(Job.id == job_id).first()
    if job is None:
        raise NotFound("Job not found")

    _require_applicant_profile(db, user, "applying")

    now = datetime.utcnow()
    application = insert_unique(
        db,
        JobApplication(
            id=str(uuid4()),
            job_id=job.id,
            applicant_id=user.id,
            status="pending",
            created_at=now,
            updated_at=now,
        ),
        AlreadyApplied(),
    )

    logger.info("Application %s: user=%s job=%s", application.id, user.id, job.id)
    return application


def set_application_status(
    db: Session,
    owner: User,
    job_id: str,
    application_id: str,
    new_status: str,
) -> JobApplication:
    """Move an application on one of ``owner``'s jobs to ``new_status``."""
    if not application_id or not new_status:
        raise BadRequest("Application ID and status are required")
    if new_status not in APPLICATION_STATUSES:
        raise BadRequest("Invalid status. Must be pending, accepted, or rejected")

    job = db.query(Job).filter(Job.id == job_id, Job.startup_id == owner.id).first()
    if job is None:
        raise Forbidden("Job not found or unauthorized")

    application = (
        db.query(JobApplication)
        .filter(JobApplication.id == application_id, JobApplication.job_id == job_id)
        .first()
    )
    if application is None:
        raise NotFound("Application not found or does not belong to this job")

    application.status = new_status
    application.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(application)

    logger.info("Application %s -> %s", application.id, new_status)
    return application


def register_for_event(db: Session, user: User, event_id: str) -> EventRegistration:
    """Register ``user`` for ``event_id``."""
    if not event_id:
        raise BadRequest("Event ID is required")

    ensure_user_type(user, "individual", "Only individuals can register for events")

    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None:
        raise NotFound("Event not found")

    _require_applicant_profile(db, user, "registering")

    now = datetime.utcnow()
    registration = insert_unique(
        db,
        EventRegistration(
            id=str(uuid4()),
            event_id=event.id,
            registrant_id=user.id,
            created_at=now,
            updated_at=now,
        ),
        AlreadyRegistered(),
    )

    logger.info("Registration %s: user=%s event=%s", registration.id, user.id, event.id)
    return registration


def unregister_from_event(db: Session, user: User, event_id: Optional[str]) -> None:
    """Delete ``user``'s registration for ``event_id``."""
    if not event_id:
        raise BadRequest("Event ID is required")

    deleted = (
        db.query(EventRegistration)
        .filter(
            EventRegistration.event_id == event_id,
            EventRegistration.registrant_id == user.id,
        )
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise BadRequest("You are not registered for this event")

    db.commit()
    logger.info("Unregistered: user=%s event=%s", user.id, event_id)
