import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_REGISTRATION_SECRET"] = "let-me-in"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FRONTEND_BASE_URL"] = "https://complaints.example.com"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.security import make_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app as fastapi_app
from app.models.user import UserRole
from app.schemas.complaint import ComplaintCreate
from app.services.users import create_user


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db):
    return await create_user(db, "Admin", "Admin@12345", email="admin@example.com", role=UserRole.admin)


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {make_access_token(admin_user)}"}


def complaint_payload(**overrides) -> dict:
    data = {
        "person_name": "Ram Bahadur",
        "phone": "9841234567",
        "email": "ram.bahadur@example.com",
        "address": "Thamel, Kathmandu",
        "ward_number": 1,
        "complaint_type": "Road",
        "title": "Pothole on main road",
        "description": "Large pothole near Thamel Chowk damaging vehicles for a month.",
        "priority": "High",
    }
    data.update(overrides)
    return data


def make_complaint_input(**overrides) -> ComplaintCreate:
    return ComplaintCreate(**complaint_payload(**overrides))


@pytest.fixture
def payload():
    return complaint_payload


@pytest.fixture
def complaint_input():
    return make_complaint_input
