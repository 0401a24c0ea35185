import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from datetime import datetime
import os
import uuid
from typing import Any, Callable, Dict, Generator

# Test database URL must be set BEFORE settings are imported.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

# Import all model modules first so Base.metadata is populated.
import rescue_api.models
from rescue_api.models.base import Base

from rescue_api.main import app
from rescue_api.database import get_db
from rescue_api.crud import roster as crud_roster
from rescue_api.dependencies import build_assignment_service, build_team_orchestrator

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test. The code under test commits and rolls back for real,
    so tables are recreated instead of wrapping the test in an outer transaction.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient with `get_db` overridden to the test session.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    del app.dependency_overrides[get_db]


@pytest.fixture
def orchestrator(db: Session):
    return build_team_orchestrator(db)


@pytest.fixture
def assignments(db: Session):
    return build_assignment_service(db)


# ==== Payload factories ====

@pytest.fixture
def shift_data_factory() -> Callable[..., Dict[str, Any]]:
    def _factory(**kwargs):
        data = {
            "name": "Morning shift",
            "start_at": datetime(2025, 1, 1, 8, 0),
            "end_at": datetime(2025, 1, 1, 16, 0),
        }
        data.update(kwargs)
        return data
    return _factory


@pytest.fixture
def location_data_factory() -> Callable[..., Dict[str, Any]]:
    def _factory(**kwargs):
        data = {
            "street": "Av. Libertador",
            "house_number": 1234,
            "district": "Santiago Centro",
            "region": "Region Metropolitana",
        }
        data.update(kwargs)
        return data
    return _factory


@pytest.fixture
def company_data_factory(location_data_factory) -> Callable[..., Dict[str, Any]]:
    def _factory(**kwargs):
        data = {
            "name": f"Company {uuid.uuid4().hex[:6]}",
            "location": location_data_factory(),
        }
        data.update(kwargs)
        return data
    return _factory


@pytest.fixture
def team_data_factory(shift_data_factory) -> Callable[..., Dict[str, Any]]:
    def _factory(**kwargs):
        data = {
            "name": "Alpha",
            "member_count": 5,
            "active": True,
            "leader": "J. Smith",
            "shift": shift_data_factory(),
        }
        data.update(kwargs)
        return data
    return _factory


@pytest.fixture
def make_member(db: Session) -> Callable[..., Any]:
    counter = {"phone": 900000000}

    def _make(**kwargs):
        counter["phone"] += 1
        data = {
            "first_name": "Juan",
            "paternal_surname": "Perez",
            "maternal_surname": "Soto",
            "phone": counter["phone"],
        }
        data.update(kwargs)
        return crud_roster.create_member(db, data)
    return _make


@pytest.fixture
def make_vehicle(db: Session) -> Callable[..., Any]:
    def _make(**kwargs):
        data = {
            "brand": "Mercedes",
            "model": "Atego",
            "plate": "AB1234",
            "driver": "Pedro Rojas",
            "status": "available",
        }
        data.update(kwargs)
        return crud_roster.create_vehicle(db, data)
    return _make


@pytest.fixture
def make_resource(db: Session) -> Callable[..., Any]:
    def _make(**kwargs):
        data = {"name": "Hydraulic cutter", "resource_type": "TOOL", "quantity": 2}
        data.update(kwargs)
        return crud_roster.create_resource(db, data)
    return _make


@pytest.fixture
def saved_team(orchestrator, team_data_factory):
    return orchestrator.save(team_data_factory())
