"""
Shared fixtures for the test suite

Environment overrides are applied before any app import so that the
module-level settings, engine and password context pick them up.

Function-scoped fixtures:
    engine         in-memory SQLite engine with every table created
    session_factory  sessions bound to that engine
    client         httpx AsyncClient talking to the app through ASGITransport
    sign_up        helper that registers a user and returns (user_id, token)
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-not-real"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # fast bcrypt
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "test"

from typing import AsyncGenerator, Dict, Tuple

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import build_engine, get_db_session, init_db
from app.main import app
from app.models.user import User

COOKIE = settings.SESSION_COOKIE_NAME


def signup_payload(user_name: str, **overrides) -> Dict[str, str]:
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "userName": user_name,
        "email": f"{user_name}@example.com",
        "password": "secret-pw",
        "birthday": "1990-05-17",
        "bio": f"hello from {user_name}",
    }
    payload.update(overrides)
    return payload


def auth(token: str) -> Dict[str, str]:
    """Cookie header carrying a session token"""
    return {"Cookie": f"{COOKIE}={token}"}


async def post_tweet(client: AsyncClient, token: str, content: str) -> dict:
    resp = await client.post("/api/tweets", json={"content": content}, headers=auth(token))
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


async def post_reply(client: AsyncClient, token: str, tweet_id: int, content: str) -> dict:
    resp = await client.post(
        "/api/replies", json={"tweetId": tweet_id, "content": content}, headers=auth(token)
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


@pytest_asyncio.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        pool_pre_ping=False,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    App client with get_db_session pointed at the test engine
    - the cookie jar is cleared after every sign-up/sign-in helper call,
      tests pass the session explicitly with auth(token)
    """
    async def _override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sign_up(client, session_factory):
    """
    Register a user through the API
    Returns:
        (user_id, session token)
    """
    async def _sign_up(user_name: str, **overrides) -> Tuple[int, str]:
        resp = await client.post("/api/sign-up", json=signup_payload(user_name, **overrides))
        assert resp.status_code == 200, resp.text
        token = resp.cookies[COOKIE]
        client.cookies.clear()

        async with session_factory() as session:
            user_id = await session.scalar(select(User.id).where(User.user_name == user_name))
        return user_id, token

    return _sign_up
