"""
Pytest fixtures for testing
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, JSON
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.dialects.postgresql import JSONB

from profoli.infrastructure.db.session import Base
from profoli.infrastructure.db import models  # noqa: F401
from profoli.infrastructure.storage.local import LocalFileStorage


@pytest.fixture
def db_engine():
    """In-memory SQLite engine for tests, with JSONB→JSON mapping."""
    # StaticPool: TestClient roda as rotas em outra thread, mesma conexão
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # SQLite não tem JSONB
    for table in Base.metadata.tables.values():
        for col in table.columns:
            if isinstance(col.type, JSONB):
                col.type = JSON()
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
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(
        base_dir=tmp_path / "uploads",
        url_prefix="/uploads",
        max_bytes=1024 * 1024,
    )


@pytest.fixture
def client(db_engine, storage):
    """TestClient com banco em memória e uploads em tmp_path"""
    from profoli.main import app
    from profoli.api.deps import get_db
    from profoli.infrastructure.storage.local import get_storage

    SessionLocal = sessionmaker(bind=db_engine)

    def _get_test_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_engine):
    """Factory: cria (ou redefine) um usuário e devolve o id"""
    from profoli.application.users import EnsureUserUseCase

    SessionLocal = sessionmaker(bind=db_engine)

    def _make(username, password, role="standard"):
        session = SessionLocal()
        try:
            user, _ = EnsureUserUseCase(session).execute(username, password, role=role)
            return user.id
        finally:
            session.close()

    return _make


@pytest.fixture
def admin_client(client, make_user):
    """Client logado como admin"""
    make_user("admin", "admin123", "admin")
    response = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return client


@pytest.fixture
def standard_client(client, make_user):
    """Client logado com perfil standard"""
    make_user("secretaria", "secret123", "standard")
    response = client.post("/api/login", json={"username": "secretaria", "password": "secret123"})
    assert response.status_code == 200
    return client
