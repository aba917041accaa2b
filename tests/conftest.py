import os

os.environ.setdefault("SECRET_KEY", "test-secret-" + "x" * 40)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.main import app as fastapi_app
from app.models import User, UserRole


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
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db):
    user = User(
        display_name="Admin",
        username="admin",
        email="admin@school.local",
        password_hash=get_password_hash("secret123"),
        role=UserRole.ADMIN,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
def auth_headers(admin_user):
    token = create_access_token(user_id=admin_user.id, username=admin_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_group(client, auth_headers):
    """Create a session → level → group chain through the API."""

    async def _make(session_name="SESSION25", level_name="NIV1", group_name="GRPA"):
        resp = await client.post(
            "/sessions",
            json={
                "name": session_name,
                "startDate": "2025-09-01",
                "endDate": "2026-06-30",
                "state": "ONGOING",
            },
            headers=auth_headers,
        )
        assert resp.status_code == 201, resp.text
        session_id = resp.json()["id"]

        resp = await client.post(
            "/niveaux", json={"name": level_name, "sessionId": session_id}, headers=auth_headers
        )
        assert resp.status_code == 201, resp.text
        level_id = resp.json()["id"]

        resp = await client.post(
            "/groupes",
            json={"name": group_name, "capacity": 20, "type": "ON_SITE", "levelId": level_id},
            headers=auth_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_student(client, auth_headers):
    """Create a student (and its account) through the API."""

    async def _make(username="alice", email="alice@school.local", national_id="NID-001"):
        resp = await client.post(
            "/students",
            json={
                "name": "Alice",
                "surname": "Martin",
                "birthDate": "2004-03-15",
                "address": "1 Main Street",
                "nationalId": national_id,
                "status": "STUDENT",
                "username": username,
                "email": email,
                "password": "pass1234",
            },
            headers=auth_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
