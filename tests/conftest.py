"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from viah_budget.api.main import create_app
from viah_budget.domain.catalog import DEFAULT_CATALOG
from viah_budget.domain.models import Catalog, Event
from viah_budget.infrastructure.database.models import Base
from viah_budget.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def catalog() -> Catalog:
    """Built-in ceremony catalog"""
    return DEFAULT_CATALOG


@pytest.fixture
def hindu_events() -> list[Event]:
    """Typical Hindu wedding weekend as entered in the planning app"""
    return [
        Event(id="evt_mehndi", name="Mehndi", type="mehndi", guest_count=200, date=date(2026, 6, 18)),
        Event(id="evt_sangeet", name="Sangeet Night", type="sangeet", guest_count=250, date=date(2026, 6, 19)),
        Event(id="evt_wedding", name="Hindu Wedding", type="wedding", guest_count=280, date=date(2026, 6, 20)),
        Event(id="evt_reception", name="Grand Reception", type="reception", guest_count=299, date=date(2026, 6, 20)),
    ]
