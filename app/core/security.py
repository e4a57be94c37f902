"""
Security utilities for identity provider sessions.

Access tokens are issued by the identity provider (Supabase Auth) and signed
with the project's shared JWT secret. This module verifies them with PyJWT and
can mint equivalent tokens for local development and seeding.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError

from app.core.config import settings

DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


def create_access_token(
    user_id: str,
    email: str,
    user_metadata: Optional[dict] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a provider-style JWT access token.

    Args:
        user_id: The identity provider user id (becomes the "sub" claim)
        email: The user's email address
        user_metadata: Free-form metadata, e.g. {"user_type": "startup"}
        expires_delta: Optional custom expiration time

    Returns:
        The encoded JWT token string
    """
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)

    to_encode = {
        "sub": user_id,
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "user_metadata": user_metadata or {},
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.SUPABASE_JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a provider access token.

    Args:
        token: The JWT token string to decode

    Returns:
        The decoded token payload, or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
        return payload
    except InvalidTokenError:
        return None
