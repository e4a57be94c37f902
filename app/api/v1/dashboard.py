"""
Dashboard API endpoints.

Per-role overview counters and profile completion for the signed-in user.
"""

import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.db.session import get_db
from app.models import (
    EventRegistration,
    Event,
    IndividualProfile,
    Job,
    JobApplication,
    StartupProfile,
    User,
)
from app.schemas.base import CamelModel

logger = logging.getLogger("satas.dashboard")

router = APIRouter()

ACTIVE_JOB_WINDOW = timedelta(days=30)

STARTUP_COMPLETION_FIELDS = (
    "name",
    "description",
    "logo",
    "location",
    "industry",
    "stage",
    "team_size",
    "founded_year",
    "linkedin",
    "website",
)

INDIVIDUAL_COMPLETION_FIELDS = (
    "name",
    "email",
    "phone",
    "location",
    "industry",
    "role",
    "description",
    "linkedin",
    "profile_picture",
    "cv_path",
)


# ============== Pydantic Schemas ==============


class DashboardStats(CamelModel):
    """Overview counters. Counters that do not apply to the role stay 0."""

    profile_completion: int = 0
    jobs_posted: int = 0
    active_jobs: int = 0
    jobs_applied: int = 0
    pending_applications: int = 0
    received_applications: int = 0
    accepted_applications: int = 0
    events: int = 0
    profile_views_count: int = 0


# ============== Helper Functions ==============


def profile_completion(profile, fields) -> int:
    """Percentage (rounded) of ``fields`` on ``profile`` that are filled in."""
    if profile is None or not fields:
        return 0
    filled = [f for f in fields if getattr(profile, f, None) not in (None, "")]
    return round(len(filled) * 100 / len(fields))


def _startup_stats(db: Session, user: User) -> DashboardStats:
    stats = DashboardStats()
    profile = db.query(StartupProfile).filter(StartupProfile.user_id == user.id).first()
    if profile is None:
        return stats

    jobs = db.query(Job).filter(Job.startup_id == user.id).all()
    since = datetime.utcnow() - ACTIVE_JOB_WINDOW
    stats.jobs_posted = len(jobs)
    stats.active_jobs = sum(1 for job in jobs if job.created_at >= since)

    applications = (
        db.query(JobApplication.status)
        .join(Job, JobApplication.job_id == Job.id)
        .filter(Job.startup_id == user.id)
        .all()
    )
    stats.received_applications = len(applications)
    stats.accepted_applications = sum(1 for (s,) in applications if s == "accepted")

    stats.events = db.query(Event).filter(Event.startup_id == user.id).count()
    stats.profile_completion = profile_completion(profile, STARTUP_COMPLETION_FIELDS)
    return stats


def _individual_stats(db: Session, user: User) -> DashboardStats:
    stats = DashboardStats()

    statuses = [
        s for (s,) in db.query(JobApplication.status).filter(JobApplication.applicant_id == user.id)
    ]
    stats.jobs_applied = len(statuses)
    stats.pending_applications = statuses.count("pending")
    stats.accepted_applications = statuses.count("accepted")

    stats.events = (
        db.query(EventRegistration)
        .filter(EventRegistration.registrant_id == user.id)
        .count()
    )

    profile = db.query(IndividualProfile).filter(IndividualProfile.user_id == user.id).first()
    stats.profile_completion = profile_completion(profile, INDIVIDUAL_COMPLETION_FIELDS)
    return stats


# ============== API Endpoints ==============


@router.get("", response_model=DashboardStats)
def get_dashboard_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Overview counters for the caller's role; all zero before a role is chosen."""
    if current_user.user_type == "startup":
        return _startup_stats(db, current_user)
    if current_user.user_type == "individual":
        return _individual_stats(db, current_user)
    return DashboardStats()
