"""Shared test fixtures for the planner API."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.errors import NotificationError
from app.core.mail import MailMessage, get_mail_client
from app.main import app
from app.services.trips.trip_notifications import TripNotifier
from app.services.trips.trip_service import TripService


class FakeMailClient:
    """Records messages instead of talking to an SMTP server."""

    def __init__(self):
        self.sent: list[MailMessage] = []
        self.fail_for: set[str] = set()

    async def send_mail(self, message: MailMessage) -> str:
        if message.to_address in self.fail_for:
            raise NotificationError(f"Could not send email to {message.to_address}: refused")
        self.sent.append(message)
        return f"<{len(self.sent)}@test>"

    def recipients(self) -> list[str]:
        return [m.to_address for m in self.sent]


@pytest.fixture
def tomorrow() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=1)


@pytest.fixture
def trip_payload(tomorrow):
    return {
        "destination": "Florianópolis",
        "start_at": tomorrow.isoformat(),
        "ends_at": (tomorrow + timedelta(days=5)).isoformat(),
        "owner_name": "Ana",
        "owner_email": "ana@x.com",
        "emails_to_invite": ["bob@x.com"],
    }


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mail_client() -> FakeMailClient:
    return FakeMailClient()


@pytest.fixture
def trip_service(mail_client) -> TripService:
    return TripService(TripNotifier(mail_client))


@pytest_asyncio.fixture
async def client(session_factory, mail_client):
    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_mail_client():
        yield mail_client

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_mail_client] = _get_mail_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
