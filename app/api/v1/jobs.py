"""
Job API endpoints.

Startups post and manage jobs and review applications; individuals browse
and apply.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, individual_required, startup_required
from app.core.errors import Forbidden, NotFound
from app.db.session import get_db
from app.models import IndividualProfile, Job, JobApplication, StartupProfile, User
from app.schemas.base import SuccessResponse
from app.schemas.job import (
    ApplicantSummary,
    ApplicationStatusUpdate,
    ApplyRequest,
    JobApplicationDetail,
    JobApplicationResponse,
    JobIn,
    JobResponse,
    JobSummary,
    MyApplication,
    StartupSummary,
)
from app.services.registration import apply_to_job, set_application_status

logger = logging.getLogger("satas.jobs")

router = APIRouter()


# ============== Helper Functions ==============


def get_owned_job(db: Session, job_id: str, owner: User) -> Job:
    job = db.query(Job).filter(Job.id == job_id, Job.startup_id == owner.id).first()
    if job is None:
        raise Forbidden("Job not found or not authorized")
    return job


def startup_summary(profile: Optional[StartupProfile]) -> Optional[StartupSummary]:
    if profile is None:
        return None
    return StartupSummary(id=profile.user_id, name=profile.name, logo=profile.logo)


def my_application(application: JobApplication) -> MyApplication:
    job = application.job
    return MyApplication(
        id=application.id,
        job_id=application.job_id,
        status=application.status,
        created_at=application.created_at,
        job=JobSummary.model_validate(job) if job else None,
        startup=startup_summary(job.startup if job else None),
    )


def list_my_applications(db: Session, user: User) -> list[MyApplication]:
    applications = (
        db.query(JobApplication)
        .filter(JobApplication.applicant_id == user.id)
        .order_by(JobApplication.created_at.desc())
        .all()
    )
    return [my_application(a) for a in applications]


# ============== API Endpoints ==============


@router.get("", response_model=list[JobResponse])
def list_jobs(
    startup_id: Optional[str] = Query(None, alias="startupId"),
    db: Session = Depends(get_db),
):
    """All jobs, newest first, optionally for one startup."""
    query = db.query(Job)
    if startup_id:
        query = query.filter(Job.startup_id == startup_id)
    return query.order_by(Job.created_at.desc()).all()


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobIn,
    current_user: User = Depends(startup_required),
    db: Session = Depends(get_db),
):
    """Post a job. The startup must have completed its profile."""
    profile = db.query(StartupProfile.user_id).filter(StartupProfile.user_id == current_user.id).first()
    if profile is None:
        raise Forbidden("Complete your startup profile before posting jobs")

    now = datetime.utcnow()
    job = Job(
        id=str(uuid4()),
        startup_id=current_user.id,
        created_at=now,
        updated_at=now,
        **payload.model_dump(),
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info("Job posted: %s by startup %s", job.id, current_user.id)
    return job


@router.post("/apply", response_model=JobApplicationResponse, status_code=status.HTTP_201_CREATED)
def apply_for_job(
    payload: ApplyRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Apply to a job. Individuals with a completed profile only, once per job."""
    return apply_to_job(db, current_user, payload.job_id)


@router.get("/applications", response_model=list[MyApplication])
def get_my_applications(
    current_user: User = Depends(individual_required),
    db: Session = Depends(get_db),
):
    return list_my_applications(db, current_user)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = db.query(Job).filter(Job.id == job_id).first()
    if job is None:
        raise NotFound("Job not found")
    return job


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    payload: JobIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    job = get_owned_job(db, job_id, current_user)
    for field, value in payload.model_dump().items():
        setattr(job, field, value)
    job.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(job)
    return job


@router.delete("/{job_id}", response_model=SuccessResponse)
def delete_job(
    job_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a job and its applications."""
    job = get_owned_job(db, job_id, current_user)
    db.delete(job)
    db.commit()

    logger.info("Job deleted: %s", job_id)
    return SuccessResponse()


@router.get("/{job_id}/applications", response_model=list[JobApplicationDetail])
def get_job_applications(
    job_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Applications to one of the caller's jobs, newest first.

    ``status`` filters by application status; ``search`` matches applicant
    name, email or location (case-insensitive).
    """
    get_owned_job(db, job_id, current_user)

    query = (
        db.query(JobApplication)
        .join(IndividualProfile, JobApplication.applicant_id == IndividualProfile.user_id)
        .filter(JobApplication.job_id == job_id)
    )
    if status_filter and status_filter != "all":
        query = query.filter(JobApplication.status == status_filter)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                IndividualProfile.name.ilike(pattern),
                IndividualProfile.email.ilike(pattern),
                IndividualProfile.location.ilike(pattern),
            )
        )

    results = []
    for application in query.order_by(JobApplication.created_at.desc()).all():
        applicant = application.applicant
        results.append(
            JobApplicationDetail(
                id=application.id,
                job_id=application.job_id,
                status=application.status,
                created_at=application.created_at,
                updated_at=application.updated_at,
                applicant=ApplicantSummary(
                    id=applicant.user_id,
                    name=applicant.name,
                    email=applicant.email,
                    location=applicant.location,
                    image=applicant.profile_picture,
                ),
            )
        )
    return results


@router.patch("/{job_id}/applications", response_model=JobApplicationResponse)
def update_application_status(
    job_id: str,
    payload: ApplicationStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept, reject or reset an application to one of the caller's jobs."""
    return set_application_status(
        db, current_user, job_id, payload.application_id, payload.status
    )
