"""
Pytest configuration and fixtures.
"""
from typing import Any, AsyncGenerator, Callable, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from topup_server.api.deps import get_db_session, get_notification_verifier, get_snap_client
from topup_server.core.config import DatabaseSettings
from topup_server.core.security import create_access_token
from topup_server.db import models  # noqa: F401
from topup_server.infrastructure.database import Base, build_engine
from topup_server.main import app
from topup_server.modules.checkout import MidtransSnapClient
from topup_server.modules.notifications import NotificationVerifier
from topup_server.modules.transactions import Transaction, TransactionStore
from topup_server.modules.users import User, UserCreateInput, UserService

SERVER_KEY = "SB-Mid-server-test-key"


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, Any]:
    """File-backed SQLite so separate sessions see each other's commits."""
    engine = build_engine(DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'topup-test.db'}"))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, Any]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def create_user(session: AsyncSession) -> Callable[..., Any]:
    async def _create(user_id: str = "u1", role: str = "user", balance: int = 0) -> User:
        service = UserService.with_session(session)
        user = await service.create_user(UserCreateInput(id=user_id, email=f"{user_id}@example.com", role=role))
        if balance:
            await session.execute(update(models.User).where(models.User.id == user_id).values(balance=balance))
        await session.commit()
        return user

    return _create


@pytest.fixture
def create_transaction(session: AsyncSession) -> Callable[..., Any]:
    async def _create(
        order_id: str = "topup-1",
        user_id: str = "u1",
        amount: int = 50000,
        service_name: Optional[str] = "Top up 50K",
    ) -> Transaction:
        store = TransactionStore.with_session(session)
        transaction = await store.create(
            order_id=order_id,
            user_id=user_id,
            service_id="svc-50k",
            service_name=service_name,
            amount=amount,
        )
        await session.commit()
        return transaction

    return _create


@pytest.fixture
def snap_handler() -> dict[str, Any]:
    """Mutable holder so tests can swap the fake gateway behaviour."""

    def default(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            201,
            json={
                "token": "snap-token-123",
                "redirect_url": "https://app.sandbox.midtrans.com/snap/v4/redirection/snap-token-123",
            },
        )

    return {"handler": default, "requests": []}


@pytest.fixture
def snap_client(snap_handler: dict[str, Any]) -> MidtransSnapClient:
    def dispatch(request: httpx.Request) -> httpx.Response:
        snap_handler["requests"].append(request)
        return snap_handler["handler"](request)

    return MidtransSnapClient(
        server_key=SERVER_KEY,
        base_url="https://app.sandbox.midtrans.com",
        transport=httpx.MockTransport(dispatch),
    )


@pytest.fixture
def verifier() -> NotificationVerifier:
    return NotificationVerifier()


@pytest_asyncio.fixture
async def client(session_factory, verifier, snap_client) -> AsyncGenerator[AsyncClient, Any]:
    """HTTP client bound to the app with the test database and fake gateway."""

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_notification_verifier] = lambda: verifier
    app.dependency_overrides[get_snap_client] = lambda: snap_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    def _headers(subject: str, role: str = "user") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(subject, role)}"}

    return _headers


@pytest.fixture
def admin_headers(auth_headers) -> dict[str, str]:
    return auth_headers("admin-1", "admin")
