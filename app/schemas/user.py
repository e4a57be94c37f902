from typing import Optional

from app.schemas.base import CamelModel


class UpdateUserTypeRequest(CamelModel):
    user_type: str


class ProfileStatusResponse(CamelModel):
    """Onboarding state as seen by the profile-setup screens."""

    has_user_type: bool
    user_type: Optional[str] = None
    has_profile: bool
    destination: str
    redirect_to: str


class MeResponse(CamelModel):
    id: str
    email: Optional[str] = None
    name: str
    user_type: Optional[str] = None
    has_profile: bool
    destination: str
