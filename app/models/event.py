from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


class Event(Base):
    """Event hosted by a startup."""

    __tablename__ = "events"

    id = Column(String(36), primary_key=True, index=True)
    startup_id = Column(
        String(36),
        ForeignKey("startup_profiles.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String, nullable=False)
    description = Column(Text)
    location = Column(String, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    start_time = Column(DateTime)
    end_time = Column(DateTime)
    event_image_path = Column(String)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    startup = relationship("StartupProfile", back_populates="events")
    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EventRegistration(Base):
    """An individual's registration for an event, unique per (event, registrant)."""

    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "registrant_id", name="uq_event_registrations_event_registrant"),
    )

    id = Column(String(36), primary_key=True, index=True)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    registrant_id = Column(
        String(36),
        ForeignKey("individual_profiles.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    event = relationship("Event", back_populates="registrations")
    registrant = relationship("IndividualProfile", back_populates="registrations")
