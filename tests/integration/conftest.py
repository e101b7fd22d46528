import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from offboard_tenancy.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from offboard_tenancy.depends import get_app_url, get_email_dispatcher, get_unit_of_work
from tests.fixtures.email import RecordingEmailDispatcher
from tests.fixtures.identity import identity_headers

TEST_APP_URL = "http://app.test"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def email_dispatcher():
    return RecordingEmailDispatcher()


@pytest_asyncio.fixture
async def client(db_session, email_dispatcher):
    from offboard_tenancy.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_dispatcher] = lambda: email_dispatcher
    app.dependency_overrides[get_app_url] = lambda: TEST_APP_URL

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
async def signup(client):
    """Sign up an identity with its own organization; returns (user_id, headers, body)"""

    async def _signup(email, organization_name, name=None):
        user_id, headers = identity_headers(email, name=name)
        response = await client.post(
            "/auth/signup",
            json={"organization_name": organization_name, "name": name or ""},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return user_id, headers, response.json()

    return _signup
