import os
from dataclasses import dataclass, field

# Settings are read at import time; give tests a throwaway DB and key before app import.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.database import Database, get_db
from app.dependencies import get_current_user, get_optional_user
from app.main import app
from app.models.user import User


@dataclass
class StubUser:
    id: str = "a" * 24
    email: str = "user@example.com"
    user_type: str | None = "individual"
    first_name: str | None = "Amina"
    last_name: str | None = "Haddad"
    company_details: dict | None = field(default=None)

    @property
    def is_company(self) -> bool:
        return self.user_type == "company"

    @property
    def is_individual(self) -> bool:
        return self.user_type == "individual"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def company_name(self) -> str | None:
        return (self.company_details or {}).get("companyName")


@pytest.fixture
def individual_user() -> StubUser:
    return StubUser()


@pytest.fixture
def company_user() -> StubUser:
    return StubUser(
        id="c" * 24,
        email="hr@acme.example",
        user_type="company",
        first_name=None,
        last_name=None,
        company_details={"companyName": "ACME"},
    )


def _client_for(user):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_optional_user] = lambda: user
    return TestClient(app)


@pytest.fixture
def client(individual_user: StubUser):
    yield _client_for(individual_user)
    app.dependency_overrides.clear()


@pytest.fixture
def company_client(company_user: StubUser):
    yield _client_for(company_user)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_optional_user] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---- real database (in-memory SQLite) ----


@pytest.fixture
def database():
    database = Database("sqlite:///:memory:")
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def live_client(database, monkeypatch):
    """Full stack: real routing, real token auth, in-memory database."""
    monkeypatch.setattr(app.state, "database", database)
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(email)}"}


def make_user(db, email, user_type, **fields) -> User:
    from app.core.security import generate_id

    user = User(id=generate_id(), email=email, user_type=user_type, is_profile_complete=True, **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def company(db_session) -> User:
    return make_user(db_session, "hr@acme.example", "company", company_details={"companyName": "ACME"})


@pytest.fixture
def other_company(db_session) -> User:
    return make_user(db_session, "jobs@globex.example", "company", company_details={"companyName": "Globex"})


@pytest.fixture
def candidate(db_session) -> User:
    return make_user(db_session, "amina@example.com", "individual", first_name="Amina", last_name="Haddad")


@pytest.fixture
def offer(db_session, company):
    from app.repos import job_offer_repo

    return job_offer_repo.create(
        db_session,
        company.id,
        "ACME",
        [
            {"title": "Dev", "requiredExperience": "2 years", "availablePositions": 2},
            {"title": "QA", "requiredExperience": "1 year", "availablePositions": 1},
        ],
        company_location={"state": "Alger", "municipality": "Hydra", "address": "12 rue Didouche"},
        description="Backend team",
    )
