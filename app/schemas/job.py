from datetime import datetime
from typing import Optional

from pydantic import field_validator

from app.schemas.base import CamelModel


class JobIn(CamelModel):
    title: str
    description: str
    location: str
    type: str
    salary: Optional[int] = None

    @field_validator("salary", mode="before")
    @classmethod
    def blank_salary(cls, v):
        if v == "" or v == 0:
            return None
        return v


class JobResponse(JobIn):
    id: str
    startup_id: str
    created_at: datetime
    updated_at: datetime


class JobApplicationResponse(CamelModel):
    id: str
    job_id: str
    applicant_id: str
    status: str
    created_at: datetime
    updated_at: datetime


class JobWithApplications(JobResponse):
    applications: list[JobApplicationResponse] = []


class ApplyRequest(CamelModel):
    job_id: Optional[str] = None


class ApplicationStatusUpdate(CamelModel):
    application_id: Optional[str] = None
    status: Optional[str] = None


class ApplicantSummary(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None


class JobApplicationDetail(CamelModel):
    """An application to one of the caller's jobs, with the applicant."""

    id: str
    job_id: str
    status: str
    created_at: datetime
    updated_at: datetime
    applicant: Optional[ApplicantSummary] = None


class JobSummary(CamelModel):
    id: str
    title: str
    location: Optional[str] = None
    type: Optional[str] = None
    startup_id: str


class StartupSummary(CamelModel):
    id: str
    name: str
    logo: Optional[str] = None


class MyApplication(CamelModel):
    """An application made by the caller, with job and startup summaries."""

    id: str
    job_id: str
    status: str
    created_at: datetime
    job: Optional[JobSummary] = None
    startup: Optional[StartupSummary] = None


class ReceivedApplicant(CamelModel):
    id: str
    name: str
    profile_picture: Optional[str] = None


class ReceivedApplication(CamelModel):
    """An application received by the caller's startup."""

    id: str
    status: str
    created_at: datetime
    job: Optional[JobSummary] = None
    applicant: Optional[ReceivedApplicant] = None
