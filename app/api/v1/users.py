"""
User API endpoints.

Role selection and onboarding status. Both read endpoints go through the
shared onboarding resolver and are never cached.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.identity import IdentityProvider, get_identity_provider
from app.db.session import get_db
from app.models import User
from app.schemas.base import SuccessResponse
from app.schemas.user import MeResponse, ProfileStatusResponse, UpdateUserTypeRequest
from app.services.onboarding import check_onboarding
from app.services.users import assign_user_type

router = APIRouter()


def _no_store(response: Response) -> None:
    response.headers["Cache-Control"] = "no-store, max-age=0"
    response.headers["Pragma"] = "no-cache"


@router.get("/me", response_model=MeResponse)
def get_me(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Current user with onboarding state."""
    _no_store(response)
    onboarding = check_onboarding(db, current_user)

    return MeResponse(
        id=current_user.id,
        email=current_user.email,
        name=current_user.name or "",
        user_type=onboarding.user_type,
        has_profile=onboarding.has_profile,
        destination=onboarding.destination.value,
    )


@router.get("/profile-status", response_model=ProfileStatusResponse)
def get_profile_status(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Where the profile-setup flow should send the user next."""
    _no_store(response)
    onboarding = check_onboarding(db, current_user)

    return ProfileStatusResponse(
        has_user_type=onboarding.has_user_type,
        user_type=onboarding.user_type,
        has_profile=onboarding.has_profile,
        destination=onboarding.destination.value,
        redirect_to=onboarding.redirect_path,
    )


@router.post("/update-type", response_model=SuccessResponse)
def update_user_type(
    payload: UpdateUserTypeRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Choose the account role ('individual' or 'startup')."""
    assign_user_type(db, provider, current_user, payload.user_type)
    return SuccessResponse()
