# tests/unit/test_view_service.py
"""
Unit Tests for ViewService
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from src.app.models import Base, User, Channel, Video
from src.infrastructure.repositories import VideoRepository
from src.services.view_service import ViewService
from src.services.exceptions import ResourceNotFoundError


@pytest.mark.asyncio
async def test_every_call_counts(db_session, video):
    service = ViewService(db_session)

    results = [await service.increment_view(video.id) for _ in range(3)]

    assert [r.views for r in results] == [1, 2, 3]
    assert results[-1].message == "View counted"
    assert results[-1].to_response() == {
        "success": True,
        "message": "View counted",
        "views": 3,
    }


@pytest.mark.asyncio
async def test_view_on_missing_video(db_session, video):
    service = ViewService(db_session)

    with pytest.raises(ResourceNotFoundError):
        await service.increment_view("b" * 32)

    counters = await VideoRepository(db_session).get_counters(video.id)
    assert counters["views"] == 0


@pytest.mark.asyncio
async def test_concurrent_views_all_land(tmp_path):
    """Three independent callers, each with its own session"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'views.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        owner = User(username="owner", name="Owner", email="owner@example.com")
        session.add(owner)
        await session.flush()
        channel = Channel(user_id=owner.id, name="Owner TV")
        session.add(channel)
        await session.flush()
        video = Video(user_id=owner.id, channel_id=channel.id, title="Race", views=10)
        session.add(video)
        await session.commit()
        video_id = video.id

    async def one_view():
        async with factory() as session:
            return await ViewService(session).increment_view(video_id)

    try:
        await asyncio.gather(one_view(), one_view(), one_view())

        async with factory() as session:
            counters = await VideoRepository(session).get_counters(video_id)
        assert counters["views"] == 13
    finally:
        await engine.dispose()
