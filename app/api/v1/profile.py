"""
Profile API endpoints.

Individual and startup profiles (one per user, in the table matching the
user's role), public profile pages, account deletion and file uploads.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.config import settings
from app.core.errors import AlreadyExists, BadRequest, Forbidden, NotFound
from app.core.identity import IdentityProvider, get_identity_provider
from app.db.session import get_db
from app.models import Event, IndividualProfile, Job, StartupProfile, User
from app.schemas.base import SuccessResponse
from app.schemas.event import EventResponse
from app.schemas.job import JobWithApplications
from app.schemas.profile import (
    IndividualProfileIn,
    IndividualProfileResponse,
    StartupProfileIn,
    StartupProfileResponse,
    UploadResponse,
)
from app.services.registration import ensure_user_type, insert_unique
from app.services.storage import build_object_path, get_storage
from app.services.users import delete_account

logger = logging.getLogger("satas.profile")

router = APIRouter()


# ============== Helper Functions ==============


def _create_profile(db: Session, user: User, model, user_type: str, data: dict):
    ensure_user_type(
        user,
        user_type,
        f"Only {user_type} accounts can create a {user_type} profile",
    )
    profile = insert_unique(
        db,
        model(user_id=user.id, **data),
        AlreadyExists("Profile already exists"),
    )
    logger.info("Created %s profile for user %s", user_type, user.id)
    return profile


def _get_profile(db: Session, model, user_id: str):
    profile = db.query(model).filter(model.user_id == user_id).first()
    if profile is None:
        raise NotFound("Profile not found")
    return profile


def _update_profile(db: Session, model, user_id: str, data: dict):
    profile = _get_profile(db, model, user_id)
    for field, value in data.items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile


def _delete_own_account(
    db: Session,
    provider: IdentityProvider,
    user: User,
    user_id: str,
    user_type: str,
) -> None:
    if user_id != user.id or user.user_type != user_type:
        raise Forbidden("You can only delete your own profile")
    delete_account(db, provider, user)


# ============== Individual Profiles ==============


@router.post(
    "/individual",
    response_model=IndividualProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_individual_profile(
    payload: IndividualProfileIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Complete onboarding for an individual."""
    return _create_profile(db, current_user, IndividualProfile, "individual", payload.model_dump())


@router.get("/individual", response_model=IndividualProfileResponse)
@router.get("/individual/get", response_model=IndividualProfileResponse)
def get_own_individual_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _get_profile(db, IndividualProfile, current_user.id)


@router.put("/individual/update", response_model=IndividualProfileResponse)
def update_individual_profile(
    payload: IndividualProfileIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _update_profile(db, IndividualProfile, current_user.id, payload.model_dump())


@router.get("/individual/{user_id}", response_model=IndividualProfileResponse)
def get_individual_profile(user_id: str, db: Session = Depends(get_db)):
    """Public individual profile."""
    return _get_profile(db, IndividualProfile, user_id)


@router.delete("/individual/{user_id}", response_model=SuccessResponse)
def delete_individual_profile(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Delete the caller's account, profile, applications and registrations."""
    _delete_own_account(db, provider, current_user, user_id, "individual")
    return SuccessResponse()


# ============== Startup Profiles ==============


@router.post(
    "/startup",
    response_model=StartupProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_startup_profile(
    payload: StartupProfileIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Complete onboarding for a startup."""
    return _create_profile(db, current_user, StartupProfile, "startup", payload.model_dump())


@router.get("/startup", response_model=StartupProfileResponse)
@router.get("/startup/get", response_model=StartupProfileResponse)
def get_own_startup_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _get_profile(db, StartupProfile, current_user.id)


@router.put("/startup/update", response_model=StartupProfileResponse)
def update_startup_profile(
    payload: StartupProfileIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _update_profile(db, StartupProfile, current_user.id, payload.model_dump())


@router.get("/startup/{user_id}", response_model=StartupProfileResponse)
def get_startup_profile(user_id: str, db: Session = Depends(get_db)):
    """Public startup profile."""
    return _get_profile(db, StartupProfile, user_id)


@router.get("/startup/{user_id}/jobs", response_model=list[JobWithApplications])
def get_startup_jobs(user_id: str, db: Session = Depends(get_db)):
    """A startup's jobs, newest first, each with its applications."""
    return (
        db.query(Job)
        .filter(Job.startup_id == user_id)
        .order_by(Job.created_at.desc())
        .all()
    )


@router.get("/startup/{user_id}/events", response_model=list[EventResponse])
def get_startup_events(user_id: str, db: Session = Depends(get_db)):
    """A startup's events, latest date first."""
    return (
        db.query(Event)
        .filter(Event.startup_id == user_id)
        .order_by(Event.date.desc())
        .all()
    )


@router.delete("/startup/{user_id}", response_model=SuccessResponse)
def delete_startup_profile(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Delete the caller's account, profile, jobs and events."""
    _delete_own_account(db, provider, current_user, user_id, "startup")
    return SuccessResponse()


# ============== File Uploads ==============


@router.post("/upload-file", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    bucket: Optional[str] = Form(None),
    file_name: Optional[str] = Form(None, alias="fileName"),
    current_user: User = Depends(get_current_user),
    storage=Depends(get_storage),
):
    """
    Upload an avatar, cover, CV, logo or banner.

    Stored at ``<user_id>/<fileName>`` in ``bucket``, replacing any previous
    object at that path. Returns the public URL.
    """
    if file is None or not bucket or not file_name:
        raise BadRequest("Missing required fields")

    if bucket not in settings.storage_buckets:
        raise BadRequest(f"Unknown bucket: {bucket}")

    # Read at most one byte past the limit
    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise BadRequest("File exceeds the maximum upload size")

    path = build_object_path(current_user.id, file_name)
    url = storage.upload(bucket, path, content, file.content_type)

    return UploadResponse(url=url)
