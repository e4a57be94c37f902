"""
Onboarding resolver.

Decides where a signed-in user goes next from two facts: the ``user_type``
recorded for the session and whether a profile row exists in the table that
type points to. The OAuth callback, the profile-status endpoint and the
``/user/me`` endpoint all call ``resolve_onboarding`` so they cannot disagree.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreUnavailable, Unauthenticated
from app.models import IndividualProfile, StartupProfile, USER_TYPES

logger = logging.getLogger("satas.onboarding")

PROFILE_MODELS = {
    "individual": IndividualProfile,
    "startup": StartupProfile,
}

ProfileLookup = Callable[[str, str], bool]


class OnboardingSubject(Protocol):
    id: str
    user_type: Optional[str]


class Destination(str, enum.Enum):
    SELECT_USER_TYPE = "select-user-type"
    CREATE_INDIVIDUAL_PROFILE = "create-individual-profile"
    CREATE_STARTUP_PROFILE = "create-startup-profile"
    READY = "enter-application"


# Frontend screens for each destination
DESTINATION_PATHS = {
    Destination.SELECT_USER_TYPE: "/menu/profile-setup",
    Destination.CREATE_INDIVIDUAL_PROFILE: "/menu/individual-profile",
    Destination.CREATE_STARTUP_PROFILE: "/menu/startup-profile",
    Destination.READY: "/menu",
}


@dataclass(frozen=True)
class OnboardingStatus:
    destination: Destination
    user_type: Optional[str] = None

    @property
    def has_user_type(self) -> bool:
        return self.user_type is not None

    @property
    def has_profile(self) -> bool:
        return self.destination is Destination.READY

    @property
    def is_ready(self) -> bool:
        return self.destination is Destination.READY

    @property
    def redirect_path(self) -> str:
        return DESTINATION_PATHS[self.destination]


def normalize_user_type(value: Optional[str]) -> Optional[str]:
    """Return a known user type, or None for unset/unrecognized values."""
    if not value:
        return None
    value = value.strip().lower()
    return value if value in USER_TYPES else None


def resolve_onboarding(
    subject: Optional[OnboardingSubject],
    profile_exists: ProfileLookup,
) -> OnboardingStatus:
    """
    Resolve the onboarding destination for a session.

    Args:
        subject: The signed-in user (anything with ``id`` and ``user_type``),
            or None when there is no session
        profile_exists: ``(user_type, user_id) -> bool`` lookup against the
            profile table for ``user_type``

    Returns:
        The destination together with the effective user type

    Raises:
        Unauthenticated: no session
        StoreUnavailable: the profile lookup failed
    """
    if subject is None:
        raise Unauthenticated()

    user_type = normalize_user_type(subject.user_type)
    if user_type is None:
        return OnboardingStatus(Destination.SELECT_USER_TYPE)

    try:
        found = profile_exists(user_type, subject.id)
    except SQLAlchemyError as e:
        logger.error("Profile lookup failed for user %s: %s", subject.id, e)
        raise StoreUnavailable("Failed to check user profile status") from e

    if not found:
        if user_type == "startup":
            return OnboardingStatus(Destination.CREATE_STARTUP_PROFILE, user_type)
        return OnboardingStatus(Destination.CREATE_INDIVIDUAL_PROFILE, user_type)

    return OnboardingStatus(Destination.READY, user_type)


def profile_lookup(db: Session) -> ProfileLookup:
    """Bind a profile-existence lookup to a database session."""

    def _exists(user_type: str, user_id: str) -> bool:
        model = PROFILE_MODELS[user_type]
        return db.query(model.user_id).filter(model.user_id == user_id).first() is not None

    return _exists


def check_onboarding(db: Session, subject: Optional[OnboardingSubject]) -> OnboardingStatus:
    """Resolve ``subject`` against the profile tables in ``db``."""
    return resolve_onboarding(subject, profile_lookup(db))
