import os
import tempfile
import uuid

# must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite:///./test_taskmaster.db"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="task-uploads-")
os.environ["FIREBASE_CREDENTIALS"] = ""

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.database import SessionLocal, Base, engine


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
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
def make_user(client):
    """Register and log in a user; returns (user data, auth headers)."""

    def _make(name: str, fcm_token: str | None = None):
        email = f"{name.lower()}_{uuid.uuid4().hex[:8]}@example.com"
        body = {"name": name, "email": email, "password": "Pass123!"}
        if fcm_token:
            body["fcmToken"] = fcm_token
        r = client.post("/auth/register", json=body)
        assert r.status_code == 201, r.text
        user = r.json()["data"]

        r = client.post("/auth/login", json={"email": email, "password": "Pass123!"})
        assert r.status_code == 200
        headers = {"Authorization": f"Bearer {r.json()['token']}"}
        return user, headers

    return _make
