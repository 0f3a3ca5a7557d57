import os
import sys
from pathlib import Path

os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")
os.environ.setdefault("NOTIFICATION_BACKEND", "inline")
os.environ.setdefault("BOOKING_TIMEZONE", "UTC")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).resolve().parents[1]))

from consultations.core.rate_limiter import login_throttle
from consultations.core.security import get_password_hash
from consultations.db.base import Base
from consultations.db.models import Admin
from consultations.db.session import get_db
from consultations.main import app

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "StrongPass123"


@pytest.fixture(autouse=True)
def reset_database() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    login_throttle.reset()


@pytest.fixture()
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> TestClient:
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_account() -> Admin:
    session = TestingSessionLocal()
    admin = Admin(
        username=ADMIN_USERNAME,
        email=ADMIN_EMAIL,
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role="admin",
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    session.expunge(admin)
    session.close()
    return admin


@pytest.fixture()
def admin_headers(client, admin_account) -> dict[str, str]:
    response = client.post("/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
