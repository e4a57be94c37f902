from types import SimpleNamespace

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StoreUnavailable, Unauthenticated
from app.models import StartupProfile, User
from app.services.onboarding import (
    Destination,
    check_onboarding,
    normalize_user_type,
    resolve_onboarding,
)


def subject(user_type=None, user_id="user-1"):
    return SimpleNamespace(id=user_id, user_type=user_type)


def lookup_returning(found, calls=None):
    def _lookup(user_type, user_id):
        if calls is not None:
            calls.append((user_type, user_id))
        return found

    return _lookup


def test_no_session_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        resolve_onboarding(None, lookup_returning(True))


@pytest.mark.parametrize("user_type", [None, "", "admin", "recruiter"])
def test_missing_or_unknown_type_selects_type_without_lookup(user_type):
    calls = []
    status = resolve_onboarding(subject(user_type), lookup_returning(True, calls))

    assert status.destination is Destination.SELECT_USER_TYPE
    assert status.user_type is None
    assert not status.has_user_type
    assert status.redirect_path == "/menu/profile-setup"
    assert calls == []


@pytest.mark.parametrize(
    "user_type, destination, path",
    [
        ("individual", Destination.CREATE_INDIVIDUAL_PROFILE, "/menu/individual-profile"),
        ("startup", Destination.CREATE_STARTUP_PROFILE, "/menu/startup-profile"),
    ],
)
def test_type_without_profile_goes_to_matching_form(user_type, destination, path):
    status = resolve_onboarding(subject(user_type), lookup_returning(False))

    assert status.destination is destination
    assert status.user_type == user_type
    assert status.has_user_type
    assert not status.has_profile
    assert status.redirect_path == path


@pytest.mark.parametrize("user_type", ["individual", "startup"])
def test_profile_present_enters_application(user_type):
    status = resolve_onboarding(subject(user_type), lookup_returning(True))

    assert status.destination is Destination.READY
    assert status.destination.value == "enter-application"
    assert status.has_profile
    assert status.is_ready


def test_lookup_uses_table_of_recorded_type_only():
    calls = []
    resolve_onboarding(subject("startup", "u-42"), lookup_returning(False, calls))

    assert calls == [("startup", "u-42")]


def test_recorded_type_is_normalized():
    status = resolve_onboarding(subject(" Startup "), lookup_returning(False))

    assert status.destination is Destination.CREATE_STARTUP_PROFILE
    assert normalize_user_type("INDIVIDUAL") == "individual"
    assert normalize_user_type("founder") is None


def test_failed_lookup_is_store_unavailable():
    def broken(user_type, user_id):
        raise SQLAlchemyError("connection refused")

    with pytest.raises(StoreUnavailable) as exc_info:
        resolve_onboarding(subject("individual"), broken)

    assert exc_info.value.status_code == 500


def test_same_inputs_same_destination():
    first = resolve_onboarding(subject("individual"), lookup_returning(True))
    second = resolve_onboarding(subject("individual"), lookup_returning(True))

    assert first == second


def test_check_onboarding_reads_profile_tables(db):
    user = User(id="s-1", email="s@example.com", name="S", user_type="startup")
    db.add(user)
    db.commit()

    assert check_onboarding(db, user).destination is Destination.CREATE_STARTUP_PROFILE

    db.add(StartupProfile(user_id="s-1", name="Acme"))
    db.commit()

    assert check_onboarding(db, user).destination is Destination.READY
