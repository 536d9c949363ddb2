"""Fixtures partilhadas: banco em memória com seed, TestClient e cliente da API via ASGI."""

import os

# Hash de passwords rápido nos testes; lido quando routers.deps é importado
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import seed
from main import app
from models.database import Base, get_db
from schemas.pagination_schemas import PageResult
from services.api_service import ApiService
from services.pagination_service import PaginationService
from services.session_service import SessionState


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = factory()
    seed.populate(db)
    db.commit()
    db.close()

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    return TestClient(app)


def login(client, username="admin"):
    response = client.post("/api/auth/login", json={"username": username, "password": f"{username}123"})
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.fixture
def auth_headers(client):
    token = login(client)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def session_state(tmp_path):
    return SessionState(tmp_path / "session.json")


@pytest.fixture
def admin_session(client, session_state):
    data = login(client)
    session_state.store(data["user"], data["token"])
    return session_state


def make_api(session):
    """ApiService a falar diretamente com a app FastAPI (sem rede)"""
    return ApiService(
        session,
        base_url="http://testserver/api",
        transport=httpx.ASGITransport(app=app),
    )


def make_page(items, page=1, per_page=10, total=None):
    total = len(items) if total is None else total
    meta = PaginationService.compute(total, per_page, page)
    return PageResult(items=list(items), **meta.model_dump())
