"""Pytest fixtures for the helpdesk tests.

Uses an in-memory SQLite database and FastAPI TestClient. Overrides the
`get_db` dependency so tests are isolated from any real DB file.
"""

import os
import uuid

# Must be set before the app (and its engine) is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import helpdesk.database as database
from helpdesk.auth import get_password_hash
from helpdesk.main import app
from helpdesk.models import Base, UtilizadorModel


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

engine = database.make_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them after to ensure isolation."""
    database.init_db(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    """Provide a SQLAlchemy session for direct DB access in tests."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[database.get_db] = _override_get_db

# Many logins run across the suite; the rate limit test re-enables it locally
app.state.limiter.enabled = False


@pytest.fixture()
def client():
    """FastAPI test client using the app with overridden dependencies."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def create_user(db_session):
    """Insert a user directly in the DB; the password is stored hashed."""
    def _create_user(email: str | None = None, password: str = "secret123", tipo_utilizador: str | None = "tecnico", **kwargs):
        email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
        user = UtilizadorModel(
            email=email,
            senha=get_password_hash(password),
            nome=kwargs.get("nome", email.split("@")[0]),
            tipo_utilizador=tipo_utilizador,
            empresa=kwargs.get("empresa"),
            funcao=kwargs.get("funcao"),
            foto_perfil=kwargs.get("foto_perfil"),
            estado=kwargs.get("estado", "activo"),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture()
def auth_headers(client, create_user):
    """Return a helper that creates a user, logs in and builds the auth header."""
    def _auth_headers(email: str | None = None, password: str = "secret123", **kwargs):
        user = create_user(email=email, password=password, **kwargs)
        resp = client.post("/routes/login", json={"email": user.email, "senha": password})
        assert resp.status_code == 200
        token = resp.json()["token"]
        return {"Authorization": f"Bearer {token}"}, user

    return _auth_headers
