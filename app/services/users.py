"""
User accounts: first sign-in, role selection and account deletion.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequest, Forbidden, ProviderError
from app.core.identity import IdentityProvider, ProviderSession
from app.models import USER_TYPES, User
from app.services.onboarding import normalize_user_type, profile_lookup

logger = logging.getLogger("satas.users")


def sync_user(db: Session, session: ProviderSession) -> User:
    """
    Return the local user for ``session``, creating it on first sign-in.

    A user type present in provider metadata fills in a local row that has
    none; once the local row has a type it is authoritative.
    """
    user = db.query(User).filter(User.id == session.user_id).first()
    metadata_type = normalize_user_type(session.user_type)

    if user is None:
        return create_user(db, session, metadata_type)

    if user.user_type is None and metadata_type is not None:
        user.user_type = metadata_type
        db.commit()
        db.refresh(user)

    return user


def create_user(db: Session, session: ProviderSession, user_type=None) -> User:
    """
    Insert the local row for a first sign-in.

    A concurrent first request for the same account may insert the row first;
    the losing insert rolls back and returns the row that won.
    """
    user = User(
        id=session.user_id,
        email=session.email or None,
        name=session.full_name,
        user_type=user_type,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = db.query(User).filter(User.id == session.user_id).first()
        if existing is None:
            raise
        return existing

    db.refresh(user)
    logger.info("First sign-in: user=%s user_type=%s", user.id, user.user_type)
    return user


def assign_user_type(
    db: Session,
    provider: IdentityProvider,
    user: User,
    user_type: str,
) -> User:
    """
    Set the user's role.

    The role may be changed freely until a profile exists; afterwards only
    re-sending the current role is accepted.

    Raises:
        BadRequest: ``user_type`` is not a known role
        Forbidden: the user already completed a profile under another role
    """
    requested = (user_type or "").strip().lower()
    if requested not in USER_TYPES:
        raise BadRequest("User type must be 'individual' or 'startup'")

    current = normalize_user_type(user.user_type)
    if current == requested:
        return user

    if current is not None and profile_lookup(db)(current, user.id):
        raise Forbidden("User type cannot be changed after profile creation")

    provider.set_user_type(user.id, requested)

    user.user_type = requested
    db.commit()
    db.refresh(user)

    logger.info("User type set: user=%s %s -> %s", user.id, current, requested)
    return user


def delete_account(db: Session, provider: IdentityProvider, user: User) -> None:
    """
    Delete the user and everything they own together with the provider account.

    Local deletes are flushed but only committed once the provider has removed
    the account; a provider failure rolls them back.
    """
    user_id = user.id
    db.delete(user)
    db.flush()

    try:
        provider.delete_user(user_id)
    except ProviderError:
        db.rollback()
        logger.warning("Account deletion aborted, provider refused: user=%s", user_id)
        raise

    db.commit()
    logger.info("Account deleted: user=%s", user_id)
