"""
Authentication API endpoints.

Sessions are issued by the identity provider. This module completes the OAuth
redirect and exposes the ``get_current_user`` dependency used by every
protected endpoint.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import Forbidden
from app.core.identity import IdentityProvider, ProviderSession, get_identity_provider
from app.db.session import get_db
from app.models import User
from app.services.onboarding import check_onboarding
from app.services.users import sync_user

logger = logging.getLogger("satas.auth")

router = APIRouter()

# Bearer token from the Authorization header; the session cookie is the fallback
bearer_scheme = HTTPBearer(auto_error=False)


# ============== Helper Functions ==============


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Return the access token from the Authorization header or session cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from the session token.

    Raises Unauthenticated if the token is missing, invalid or expired.
    """
    session = ProviderSession.from_token(extract_token(request, credentials))
    return sync_user(db, session)


def startup_required(current_user: User = Depends(get_current_user)) -> User:
    if current_user.user_type != "startup":
        raise Forbidden("Startup access required")
    return current_user


def individual_required(current_user: User = Depends(get_current_user)) -> User:
    if current_user.user_type != "individual":
        raise Forbidden("Individual access required")
    return current_user


def extract_code_verifier(request: Request, code_verifier: Optional[str]) -> Optional[str]:
    """Return the PKCE verifier from the client's cookie or the query string."""
    value = request.cookies.get(settings.CODE_VERIFIER_COOKIE_NAME) or code_verifier
    if not value:
        return None
    # supabase-js stores the verifier JSON-encoded
    return value.strip().strip('"') or None


def safe_redirect_path(path: Optional[str]) -> Optional[str]:
    """Accept only same-origin absolute paths."""
    if not path or not path.startswith("/") or path.startswith("//"):
        return None
    return path


# ============== API Endpoints ==============


@router.get("/callback")
def auth_callback(
    request: Request,
    code: Optional[str] = None,
    redirect_to: Optional[str] = None,
    code_verifier: Optional[str] = None,
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """
    Complete the OAuth sign-in redirect.

    Exchanges the provider code and the client's PKCE verifier (cookie, or the
    ``code_verifier`` query parameter) for a session, stores the access token
    in an HttpOnly cookie and redirects to the next onboarding screen, or to
    ``redirect_to`` (default ``/menu``) once onboarding is complete.
    """
    origin = settings.FRONTEND_URL.rstrip("/")
    target = safe_redirect_path(redirect_to) or "/menu"

    if not code:
        return RedirectResponse(f"{origin}{target}", status_code=status.HTTP_303_SEE_OTHER)

    provider_session = provider.exchange_code_for_session(
        code, extract_code_verifier(request, code_verifier)
    )
    access_token = provider_session["access_token"]

    user = sync_user(db, ProviderSession.from_token(access_token))
    onboarding = check_onboarding(db, user)
    if not onboarding.is_ready:
        target = onboarding.redirect_path

    logger.info("Sign-in: user=%s destination=%s", user.id, onboarding.destination.value)

    response = RedirectResponse(f"{origin}{target}", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        access_token,
        max_age=provider_session.get("expires_in"),
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
    )
    response.delete_cookie(settings.CODE_VERIFIER_COOKIE_NAME)
    return response


@router.post("/logout")
def logout():
    """Clear the session cookie."""
    response = RedirectResponse(
        f"{settings.FRONTEND_URL.rstrip('/')}/sign-in",
        status_code=status.HTTP_303_SEE_OTHER,
    )
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
