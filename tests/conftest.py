# tests/conftest.py
"""
Shared fixtures: in-memory database and a small cast of users

bob owns channel c1 (5 subscribers) and uploaded video v1 (no reactions).
alice and carol are plain viewers.

Seed rows are written through their own session and come back detached,
so a rollback in the session under test never expires them.
"""

from datetime import datetime, timedelta

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from src.app.models import Base, User, Session, Channel, Video, VideoPrivacy

pytest_plugins = ("pytest_asyncio",)


@pytest_asyncio.fixture
async def async_engine():
    """Create async engine for testing"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # Required for in-memory SQLite
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create async database session for testing"""
    async with session_factory() as session:
        yield session


async def _seed(session_factory, *rows):
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()


@pytest_asyncio.fixture
async def users(session_factory):
    """alice, bob and carol"""
    people = {
        name: User(username=name, name=name.title(), email=f"{name}@example.com")
        for name in ("alice", "bob", "carol")
    }
    await _seed(session_factory, *people.values())
    return people


@pytest_asyncio.fixture
async def channel(session_factory, users):
    """Channel c1 owned by bob with 5 subscribers"""
    c1 = Channel(user_id=users["bob"].id, name="Bob's Channel", handle="@bob", subscriber_count=5)
    await _seed(session_factory, c1)
    return c1


@pytest_asyncio.fixture
async def video(session_factory, users, channel):
    """Video v1 uploaded by bob on c1"""
    v1 = Video(
        user_id=users["bob"].id,
        channel_id=channel.id,
        title="First Upload",
        category="Music",
        tags='["intro", "music"]',
        likes=0,
        dislikes=0,
        views=0,
    )
    await _seed(session_factory, v1)
    return v1


@pytest_asyncio.fixture
async def more_videos(session_factory, users, channel, video):
    """Three extra videos: a popular public one, a private one and a short"""
    now = datetime.utcnow()
    popular = Video(
        user_id=users["bob"].id,
        channel_id=channel.id,
        title="Popular",
        category="Gaming",
        views=500,
        created_at=now - timedelta(days=2),
    )
    hidden = Video(
        user_id=users["bob"].id,
        channel_id=channel.id,
        title="Hidden",
        category="Music",
        privacy=VideoPrivacy.PRIVATE,
        views=9999,
        created_at=now - timedelta(days=1),
    )
    short = Video(
        user_id=users["bob"].id,
        channel_id=channel.id,
        title="Short clip",
        category="Music",
        is_short=True,
        created_at=now - timedelta(hours=1),
    )
    await _seed(session_factory, popular, hidden, short)
    return {"popular": popular, "hidden": hidden, "short": short}


@pytest_asyncio.fixture
async def tokens(session_factory, users):
    """Live session token per user, plus one expired token for alice"""
    issued = {}
    rows = []
    for name, user in users.items():
        token = f"token-{name}"
        rows.append(
            Session(
                user_id=user.id,
                token=token,
                expires_at=datetime.utcnow() + timedelta(days=1),
            )
        )
        issued[name] = token
    rows.append(
        Session(
            user_id=users["alice"].id,
            token="token-expired",
            expires_at=datetime.utcnow() - timedelta(minutes=1),
        )
    )
    await _seed(session_factory, *rows)
    return issued
