import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ALLOW_REGISTRATION"] = "true"
os.environ.pop("PUBLIC_OWNER_USERNAME", None)

import pytest
from fastapi.testclient import TestClient

from salon.database import Base, SessionLocal, engine
from salon.main import app
from salon.models import User
from salon.security_utils import create_access_token, hash_password

# 2030-06-03 is a Monday
MONDAY = "2030-06-03"
SUNDAY = "2030-06-02"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def create_admin(username: str = "admin", password: str = "secret123") -> User:
    db = SessionLocal()
    try:
        user = User(
            username=username,
            password_hash=hash_password(password),
            name=username.title(),
            role="admin",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        db.expunge(user)
        return user
    finally:
        db.close()


def auth_headers(user_id: int, role: str = "admin") -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def admin():
    return create_admin()


@pytest.fixture
def headers(admin):
    return auth_headers(admin.id)


@pytest.fixture
def make_service(client, headers):
    def _make(name="Haircut", duration=60, price=50.0):
        response = client.post(
            "/api/services", json={"name": name, "duration": duration, "price": price}, headers=headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_client(client, headers):
    def _make(name="Maria Silva", phone="11987654321", email=None):
        response = client.post(
            "/api/clients", json={"name": name, "phone": phone, "email": email}, headers=headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_professional(client, headers):
    def _make(name="Ana", **schedule):
        payload = {"name": name, "specialty": "Hair", "phone": "11911112222", **schedule}
        response = client.post("/api/professionals", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def book(client, headers):
    def _book(client_id, service_id, date, professional_id=None, **extra):
        payload = {
            "clientId": client_id,
            "serviceId": service_id,
            "professionalId": professional_id,
            "date": date,
            **extra,
        }
        return client.post("/api/appointments", json=payload, headers=headers)

    return _book
