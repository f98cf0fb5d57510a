from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from pathlib import Path
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_dashboard_service
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services.dashboard import DashboardService
from app.services.listings import ListingRepository

CSV_HEADER = (
    "State,City,Region,Year,Job Title,SOC Code,Openings,Previous Year Openings,"
    "Job Growth (%),Average Salary ($),Median Salary ($),Industry,Employment Type,"
    "Remote Work,Education Requirement,Experience Level,Key Skills,Posting Source"
)

CSV_ROWS = [
    'CA,San Francisco,West,2023,Data Scientist,15-2051,10,8,25,100000,98000,Health Tech,Full-time,Yes,Master\'s,Mid,"Python, SQL, Communication",Indeed',
    'WA,Seattle,West,2024,Data Scientist,15-2051,5,4,25,120000,118000,Health Tech,Full-time,No,Master\'s,Senior,"Python, Machine Learning",LinkedIn',
    'TX,Austin,Southwest,2023,Nurse Informaticist,15-1211,4,4,0,90000,89000,Hospitals,Contract,No,Bachelor\'s,Mid,"EHR, Training, Communication",Indeed',
    'NY,New York,Northeast,2024,Health IT Project Manager,11-9111,,3,10,,,Hospitals,Full-time,Yes,Bachelor\'s,Senior,"Project Management, EHR",Glassdoor',
]


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


def write_listings_csv(path: Path, rows: list[str]) -> Path:
    path.write_text("\n".join([CSV_HEADER, *rows]) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def listings_csv(tmp_path: Path) -> Path:
    return write_listings_csv(tmp_path / "listings.csv", CSV_ROWS)


@pytest.fixture
def dashboard(listings_csv: Path) -> DashboardService:
    return DashboardService(ListingRepository(str(listings_csv)))


@pytest.fixture
def client(engine, dashboard: DashboardService):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session: Session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dashboard_service] = lambda: dashboard
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., str]:
    """Register a user and return its bearer token."""

    def _register(username: str = "alice", role: str = "job_seeker", **overrides: str) -> str:
        payload = {
            "username": username,
            "password": "s3cret-pass",
            "email": f"{username}@example.com",
            "role": role,
            "name": username.title(),
        }
        payload.update(overrides)
        response = client.post("/api/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["token"]

    return _register


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class OfflineAsyncClient:
    """Stand-in for ``httpx.AsyncClient`` whose every request fails to connect."""

    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def get(self, url, **kwargs):
        raise httpx.ConnectError("upstream unreachable", request=httpx.Request("GET", url))

    async def post(self, url, **kwargs):
        raise httpx.ConnectError("upstream unreachable", request=httpx.Request("POST", url))


@pytest.fixture
def offline_upstream(monkeypatch):
    monkeypatch.setattr(httpx, "AsyncClient", OfflineAsyncClient)
