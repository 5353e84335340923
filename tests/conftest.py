# tests/conftest.py
import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_cloakroom.db")

import pytest
from fastapi.testclient import TestClient

from cloakroom.branch.models import Branch
from cloakroom.core.clock import get_clock
from cloakroom.core.database import Base, SessionLocal, engine
from cloakroom.main import app


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    fake = FakeClock(datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc))
    app.dependency_overrides[get_clock] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def client(clock):
    return TestClient(app)


def _branch(db, **fields) -> Branch:
    branch = Branch(**fields)
    db.add(branch)
    db.commit()
    db.refresh(branch)
    return branch


@pytest.fixture
def branch(db):
    return _branch(
        db,
        name="Centro",
        address="Av. 16 de Julio 100",
        maps_url="https://maps.example.com/?q=centro",
        active=True,
    )


@pytest.fixture
def inactive_branch(db):
    return _branch(db, name="Terminal", address="Calle 2", active=False)
