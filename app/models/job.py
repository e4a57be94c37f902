from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base

APPLICATION_STATUSES = ("pending", "accepted", "rejected")


class Job(Base):
    """Job posting owned by a startup."""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, index=True)
    startup_id = Column(
        String(36),
        ForeignKey("startup_profiles.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    type = Column(String, nullable=False)  # "Full-time", "Internship", ...
    salary = Column(Integer)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    startup = relationship("StartupProfile", back_populates="jobs")
    applications = relationship(
        "JobApplication",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class JobApplication(Base):
    """
    An individual's application to a job.

    One row per (job, applicant); the unique constraint is what rejects
    duplicates, including concurrent ones.
    """

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_job_applications_job_applicant"),
    )

    id = Column(String(36), primary_key=True, index=True)
    job_id = Column(String(36), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = Column(
        String(36),
        ForeignKey("individual_profiles.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String, nullable=False, default="pending")  # see APPLICATION_STATUSES

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    job = relationship("Job", back_populates="applications")
    applicant = relationship("IndividualProfile", back_populates="applications")
