from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.db.base import Base

USER_TYPES = ("individual", "startup")


class User(Base):
    """Local mirror of an identity provider account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True)  # Provider-issued UUID
    email = Column(String, unique=True, index=True, nullable=True)  # None for phone/anonymous sign-ins
    name = Column(String, nullable=False, default="")
    user_type = Column(String, nullable=True)  # 'individual' | 'startup' | None until chosen

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    individual_profile = relationship(
        "IndividualProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    startup_profile = relationship(
        "StartupProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
