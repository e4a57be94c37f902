from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class IndividualProfile(Base):
    """Profile of a job/event seeker. Exists iff onboarding is complete."""

    __tablename__ = "individual_profiles"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String)
    location = Column(String)
    industry = Column(String)
    role = Column(String)
    description = Column(Text)

    # Social links
    linkedin = Column(String)
    twitter = Column(String)
    github = Column(String)
    website = Column(String)

    # Object storage URLs
    profile_picture = Column(String)
    cover_picture = Column(String)
    cv_path = Column(String)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="individual_profile")
    applications = relationship(
        "JobApplication",
        back_populates="applicant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    registrations = relationship(
        "EventRegistration",
        back_populates="registrant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class StartupProfile(Base):
    """Profile of a startup. Owns jobs and events."""

    __tablename__ = "startup_profiles"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    name = Column(String, nullable=False)
    description = Column(Text)
    location = Column(String)
    industry = Column(String)
    stage = Column(String)  # "Idea", "Seed", "Series A", ...
    team_size = Column(Integer)
    founded_year = Column(Integer)
    linkedin = Column(String)
    website = Column(String)

    # Object storage URLs
    logo = Column(String)
    banner = Column(String)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="startup_profile")
    jobs = relationship(
        "Job",
        back_populates="startup",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    events = relationship(
        "Event",
        back_populates="startup",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
