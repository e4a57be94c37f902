import re
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from app.schemas.base import CamelModel

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class IndividualProfileIn(CamelModel):
    """Body for creating or updating an individual profile."""

    name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    role: Optional[str] = None
    description: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    profile_picture: Optional[str] = None
    cover_picture: Optional[str] = None
    cv_path: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        if not re.match(EMAIL_PATTERN, v or ""):
            raise ValueError("Invalid email format")
        return v.lower()

    @field_validator(
        "phone", "location", "industry", "role", "description", "linkedin",
        "twitter", "github", "website", "profile_picture", "cover_picture", "cv_path",
        mode="before",
    )
    @classmethod
    def blank_as_null(cls, v):
        return _blank_to_none(v)


class IndividualProfileResponse(IndividualProfileIn):
    user_id: str
    created_at: datetime
    updated_at: datetime


class StartupProfileIn(CamelModel):
    """Body for creating or updating a startup profile."""

    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    stage: Optional[str] = None
    team_size: Optional[int] = None
    founded_year: Optional[int] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    banner: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator(
        "description", "location", "industry", "stage", "team_size", "founded_year",
        "linkedin", "website", "logo", "banner",
        mode="before",
    )
    @classmethod
    def blank_as_null(cls, v):
        return _blank_to_none(v)


class StartupProfileResponse(StartupProfileIn):
    user_id: str
    created_at: datetime
    updated_at: datetime


class UploadResponse(CamelModel):
    url: str
