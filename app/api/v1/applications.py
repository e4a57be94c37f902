"""
Application overview endpoints for both sides of the marketplace.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import individual_required, startup_required
from app.api.v1.jobs import list_my_applications
from app.db.session import get_db
from app.models import Job, JobApplication, User
from app.schemas.job import JobSummary, MyApplication, ReceivedApplicant, ReceivedApplication

router = APIRouter()


@router.get("/user", response_model=list[MyApplication])
def get_user_applications(
    current_user: User = Depends(individual_required),
    db: Session = Depends(get_db),
):
    """The caller's applications with job and startup summaries."""
    return list_my_applications(db, current_user)


@router.get("/startup", response_model=list[ReceivedApplication])
def get_startup_applications(
    current_user: User = Depends(startup_required),
    db: Session = Depends(get_db),
):
    """Applications received across all of the caller's jobs, newest first."""
    applications = (
        db.query(JobApplication)
        .join(Job, JobApplication.job_id == Job.id)
        .filter(Job.startup_id == current_user.id)
        .order_by(JobApplication.created_at.desc())
        .all()
    )

    return [
        ReceivedApplication(
            id=a.id,
            status=a.status,
            created_at=a.created_at,
            job=JobSummary.model_validate(a.job),
            applicant=ReceivedApplicant(
                id=a.applicant.user_id,
                name=a.applicant.name,
                profile_picture=a.applicant.profile_picture,
            ),
        )
        for a in applications
    ]
