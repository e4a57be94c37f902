import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.config import settings
from app.core.errors import ProviderError, Unauthenticated
from app.core.identity import get_identity_provider
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.services.storage import LocalStorage, get_storage


class FakeIdentityProvider:
    """Records provider calls instead of talking to the network."""

    enabled = True

    def __init__(self):
        self.sessions = {}
        self.verifiers = []
        self.user_types = {}
        self.deleted = []
        self.fail_deletes = False

    def exchange_code_for_session(self, code, code_verifier):
        if not code_verifier:
            raise Unauthenticated("Missing PKCE code verifier")
        self.verifiers.append(code_verifier)
        if code not in self.sessions:
            raise ProviderError("Invalid authorization code")
        return self.sessions[code]

    def set_user_type(self, user_id, user_type):
        self.user_types[user_id] = user_type

    def delete_user(self, user_id):
        if self.fail_deletes:
            raise ProviderError("Identity provider request failed")
        self.deleted.append(user_id)


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def provider():
    return FakeIdentityProvider()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(
        root=str(tmp_path / "uploads"),
        public_url="http://testserver/files",
        buckets=settings.storage_buckets,
    )


@pytest.fixture
def client(session_factory, provider, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: provider
    app.dependency_overrides[get_storage] = lambda: storage

    yield TestClient(app)

    app.dependency_overrides.clear()


def make_token(user_id, email=None, user_type=None, name="Test User"):
    metadata = {"full_name": name}
    if user_type:
        metadata["user_type"] = user_type
    return create_access_token(user_id, email or f"{user_id}@example.com", user_metadata=metadata)


@pytest.fixture
def auth_headers():
    """Build bearer headers for a provider user: ``auth_headers(id, user_type=...)``."""

    def _headers(user_id, email=None, user_type=None, name="Test User"):
        return {"Authorization": f"Bearer {make_token(user_id, email, user_type, name)}"}

    return _headers


@pytest.fixture
def startup(client, auth_headers):
    """A startup account with a completed profile."""
    headers = auth_headers("startup-1", "founder@acme.dev", user_type="startup", name="Maya")
    response = client.post(
        "/api/v1/profile/startup",
        json={"name": "Acme Robotics", "location": "Berlin", "industry": "Robotics"},
        headers=headers,
    )
    assert response.status_code == 201
    return headers


@pytest.fixture
def individual(client, auth_headers):
    """An individual account with a completed profile."""
    headers = auth_headers("person-1", "lena@example.com", user_type="individual", name="Lena")
    response = client.post(
        "/api/v1/profile/individual",
        json={"name": "Lena Schmidt", "email": "lena@example.com", "location": "Munich"},
        headers=headers,
    )
    assert response.status_code == 201
    return headers


@pytest.fixture
def job(client, startup):
    response = client.post(
        "/api/v1/jobs",
        json={
            "title": "Embedded Intern",
            "description": "Ship firmware",
            "location": "Berlin",
            "type": "Internship",
            "salary": 1800,
        },
        headers=startup,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def event(client, startup):
    response = client.post(
        "/api/v1/events",
        json={
            "title": "Open Lab",
            "description": "Drive a robot",
            "location": "Berlin HQ",
            "date": "2030-05-01T00:00:00",
            "startTime": "2030-05-01T18:00:00",
            "endTime": "2030-05-01T21:00:00",
        },
        headers=startup,
    )
    assert response.status_code == 201
    return response.json()
