"""
Pytest fixtures for testing
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from homeplanner.auth import TokenService, hash_password
from homeplanner.infrastructure.db.session import Base, get_db
from homeplanner.infrastructure.db.models import User, FamilyProfile
from homeplanner.application.profiles import CreateProfileUseCase
from homeplanner.main import app


@pytest.fixture
def db_engine():
    """In-memory SQLite shared by every connection of a test (TestClient runs routes in a worker thread)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def tokens():
    return TokenService("test-signing-secret-at-least-32-bytes")


@pytest.fixture
def make_user(db_session):
    """Factory: persisted user with a known password"""
    def _make(email="anna@example.com", name="Anna", password="password123") -> User:
        user = User(name=name, email=email, password_hash=hash_password(password))
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture
def make_profile(db_session):
    """Factory: family profile through the use case (first one is the default)"""
    def _make(user: User, family_name="Cohen family", monthly_goal=None) -> FamilyProfile:
        return CreateProfileUseCase(db_session).execute(user.id, family_name, monthly_goal)
    return _make


@pytest.fixture
def client(db_engine):
    """Test client with get_db bound to the test database"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Factory: register through the API, returns (auth headers, user json)"""
    def _register(email="anna@example.com", name="Anna", password="password123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]
    return _register


@pytest.fixture
def auth_headers(client, register):
    """Registered user with one profile"""
    headers, _ = register()
    response = client.post("/api/v1/profiles", json={"familyName": "Cohen family"}, headers=headers)
    assert response.status_code == 201, response.text
    return headers
