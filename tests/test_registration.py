from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import AlreadyApplied, AlreadyRegistered
from app.models import (
    Event,
    EventRegistration,
    IndividualProfile,
    Job,
    JobApplication,
    StartupProfile,
    User,
)
from app.services.registration import apply_to_job, register_for_event


@pytest.fixture
def marketplace(db):
    db.add_all([
        User(id="s", email="s@example.com", user_type="startup"),
        User(id="p", email="p@example.com", user_type="individual"),
    ])
    db.flush()
    db.add_all([
        StartupProfile(user_id="s", name="Acme"),
        IndividualProfile(user_id="p", name="Lena", email="p@example.com"),
    ])
    db.flush()
    db.add_all([
        Job(id="j", startup_id="s", title="T", description="D", location="L", type="Full-time"),
        Event(id="e", startup_id="s", title="T", location="L", date=datetime(2030, 1, 1)),
    ])
    db.commit()
    return db.query(User).filter(User.id == "p").one()


def test_store_rejects_duplicate_application(db, marketplace):
    db.add(JobApplication(id="a1", job_id="j", applicant_id="p", status="pending"))
    db.commit()

    db.add(JobApplication(id="a2", job_id="j", applicant_id="p", status="pending"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_duplicate_application_from_second_session(db, session_factory, marketplace):
    apply_to_job(db, marketplace, "j")

    other = session_factory()
    try:
        user = other.query(User).filter(User.id == "p").one()
        with pytest.raises(AlreadyApplied):
            apply_to_job(other, user, "j")
    finally:
        other.close()

    assert db.query(JobApplication).count() == 1


def test_duplicate_registration_is_translated(db, marketplace):
    register_for_event(db, marketplace, "e")

    with pytest.raises(AlreadyRegistered) as exc_info:
        register_for_event(db, marketplace, "e")

    assert exc_info.value.status_code == 400
    assert db.query(EventRegistration).count() == 1
