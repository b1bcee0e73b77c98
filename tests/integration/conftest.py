from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import authcore.domain.entities  # noqa: F401  (registers table models)
from authcore.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from authcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authcore.app.services.email_sender import IEmailSender
from authcore.depends import get_email_sender, get_password_hasher, get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader


class RecordingEmailSender(IEmailSender):
    """Keeps activation emails in memory so tests can follow the links"""

    def __init__(self):
        self.sent: List[Tuple[str, str, str]] = []

    async def send_activation(self, email: str, token: str, name: str) -> bool:
        self.sent.append((email, token, name))
        return True

    def last_token_for(self, email: str) -> str:
        return [token for to, token, _ in self.sent if to == email][-1]


@pytest.fixture
def test_data():
    return TestDataLoader()


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


@pytest.fixture
def outbox():
    return RecordingEmailSender()


def build_app(override_get_unit_of_work, outbox):
    from authcore.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    fast_hasher = BcryptPasswordHasher(rounds=4)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: outbox
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher
    return app


@pytest_asyncio.fixture
async def client(db_session, outbox):
    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app = build_app(override_get_unit_of_work, outbox)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def concurrent_client(engine, outbox):
    """Client whose requests each get their own database session, like production"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app = build_app(override_get_unit_of_work, outbox)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_and_activate(client, outbox, test_data):
    """Register the default user, follow the activation link, return the payload"""

    async def _run(key: str = "register_payload"):
        payload = test_data.get_copy(key)
        response = await client.post("/auth/register", json=payload)
        assert response.status_code == 201
        token = outbox.last_token_for(payload["email"])
        response = await client.get("/auth/confirm", params={"token": token})
        assert response.status_code == 200
        return payload

    return _run


@pytest.fixture
def login(client):
    async def _run(email: str, password: str, device_id=None):
        body = {"email": email, "password": password}
        if device_id is not None:
            body["device_id"] = device_id
        return await client.post("/auth/login", json=body)

    return _run
