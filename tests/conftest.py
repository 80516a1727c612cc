"""Shared fixtures: a throwaway SQLite database, users per role, one property."""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="househub-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["MAILGUN_API_KEY"] = ""
os.environ["MAILGUN_DOMAIN"] = ""
os.environ["RETRY_DELAY_SECONDS"] = "0"

import pytest
from fastapi.testclient import TestClient

from househub.database import Base, SessionLocal, engine
from househub.main import app
from househub.models.property import Property
from househub.models.user import User
from househub.seed import seed_default_staples
from househub.services.auth import create_access_token, get_password_hash


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    """make_user("admin") -> (user, auth headers)."""

    def _make(role: str | None, email: str | None = None, full_name: str | None = None):
        email = email or f"{role or 'norole'}-{db.query(User).count() + 1}@example.com"
        user = User(
            email=email,
            hashed_password=get_password_hash("password123"),
            full_name=full_name or email.split("@")[0],
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        token = create_access_token(user.id, user.email, user.role)
        return user, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def prop(db):
    p = Property(name="Lake House", address="1 Shore Rd")
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@pytest.fixture
def staples(db):
    seed_default_staples(db)
