import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.app import app
from api.deps import get_db
from db.models import Base

# An in-memory SQLite database by default; point at a real test DB if you have one
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite://")


@pytest.fixture
def engine():
    kwargs = {"future": True}
    if TEST_DATABASE_URL.startswith("sqlite"):
        kwargs.update(
            connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    eng = create_engine(TEST_DATABASE_URL, **kwargs)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def db_session(engine):
    SessionLocal = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, future=True
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """
    Override FastAPI's get_db dependency to use the test session.
    """

    def _override():
        yield db_session

    app.dependency_overrides[get_db] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
