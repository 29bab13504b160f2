# tests/unit/test_reaction_service.py
"""
Unit Tests for ReactionService
Like idempotence, dislike counting, floors and transaction behaviour
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.app.models import VideoLike
from src.infrastructure.repositories import LikeRepository, VideoRepository
from src.services.reaction_service import ReactionService
from src.services.exceptions import (
    AuthenticationError,
    DatabaseError,
    ResourceNotFoundError,
    ValidationError,
)


@pytest.mark.asyncio
async def test_like_twice_increments_once(db_session, users, video):
    service = ReactionService(db_session)
    alice = users["alice"]

    first = await service.apply_reaction(video.id, alice, "like")
    second = await service.apply_reaction(video.id, alice, "like")

    assert first.likes == 1
    assert first.changed is True
    assert second.likes == 1
    assert second.changed is False
    assert second.message == "Video liked"
    assert await LikeRepository(db_session).has_liked(video.id, alice.id)


@pytest.mark.asyncio
async def test_like_unlike_scenario(db_session, users, video):
    """likes: 0 -> 1 -> 1 -> 0 -> 0"""
    service = ReactionService(db_session)
    alice = users["alice"]

    observed = []
    for action in ("like", "like", "unlike", "unlike"):
        result = await service.apply_reaction(video.id, alice, action)
        observed.append(result.likes)

    assert observed == [1, 1, 0, 0]


@pytest.mark.asyncio
async def test_likes_from_different_users_accumulate(db_session, users, video):
    service = ReactionService(db_session)

    await service.apply_reaction(video.id, users["alice"], "like")
    result = await service.apply_reaction(video.id, users["carol"], "like")

    assert result.likes == 2
    assert result.dislikes == 0


@pytest.mark.asyncio
async def test_unlike_without_like_is_noop(db_session, users, video):
    service = ReactionService(db_session)

    result = await service.apply_reaction(video.id, users["carol"], "unlike")

    assert result.likes == 0
    assert result.changed is False
    assert result.message == "Video unliked"


@pytest.mark.asyncio
async def test_unlike_never_drives_likes_negative(db_session, users, video):
    """A fact row with a zero counter (drift) still floors at zero"""
    await LikeRepository(db_session).add_if_absent(video.id, users["alice"].id)
    await db_session.commit()

    service = ReactionService(db_session)
    result = await service.apply_reaction(video.id, users["alice"], "unlike")

    assert result.changed is True
    assert result.likes == 0


@pytest.mark.asyncio
async def test_dislike_is_not_idempotent(db_session, users, video):
    service = ReactionService(db_session)
    alice = users["alice"]

    for _ in range(4):
        result = await service.apply_reaction(video.id, alice, "dislike")

    assert result.dislikes == 4
    assert result.likes == 0
    assert result.message == "Video disliked"


@pytest.mark.asyncio
async def test_undislike_floors_at_zero(db_session, users, video):
    service = ReactionService(db_session)
    alice = users["alice"]

    await service.apply_reaction(video.id, alice, "dislike")
    await service.apply_reaction(video.id, alice, "undislike")
    result = await service.apply_reaction(video.id, alice, "undislike")

    assert result.dislikes == 0
    assert result.message == "Dislike removed"


@pytest.mark.asyncio
async def test_counters_never_negative_for_mixed_sequence(db_session, users, video):
    service = ReactionService(db_session)
    sequence = ["unlike", "undislike", "like", "unlike", "unlike", "dislike", "undislike", "undislike"]

    for action in sequence:
        result = await service.apply_reaction(video.id, users["carol"], action)
        assert result.likes >= 0
        assert result.dislikes >= 0

    counters = await VideoRepository(db_session).get_counters(video.id)
    assert counters["likes"] == 0
    assert counters["dislikes"] == 0


@pytest.mark.asyncio
async def test_anonymous_reaction_rejected(db_session, video):
    service = ReactionService(db_session)

    with pytest.raises(AuthenticationError):
        await service.apply_reaction(video.id, None, "like")


@pytest.mark.asyncio
async def test_reaction_on_missing_video(db_session, users):
    service = ReactionService(db_session)

    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.apply_reaction("0" * 32, users["alice"], "like")

    assert exc_info.value.message == "Video not found"


@pytest.mark.asyncio
async def test_unknown_reaction_rejected(db_session, users, video):
    service = ReactionService(db_session)

    with pytest.raises(ValidationError):
        await service.apply_reaction(video.id, users["alice"], "love")


@pytest.mark.asyncio
async def test_concurrent_duplicate_like_rolls_back(db_session, users, video):
    """Unique constraint catches a like the pre-check missed"""
    service = ReactionService(db_session)
    alice = users["alice"]
    await service.apply_reaction(video.id, alice, "like")

    async def insert_without_check(video_id, user_id):
        # the other request committed between our check and our insert
        db_session.add(VideoLike(video_id=video_id, user_id=user_id))
        await db_session.flush()
        return True

    service.like_repo.add_if_absent = insert_without_check
    result = await service.apply_reaction(video.id, alice, "like")

    assert result.changed is False
    assert result.likes == 1


@pytest.mark.asyncio
async def test_counter_failure_rolls_back_like_fact(db_session, users, video):
    """Fact insert and counter update commit together or not at all"""
    service = ReactionService(db_session)
    service.video_repo.increment_counter = AsyncMock(side_effect=SQLAlchemyError("boom"))

    with pytest.raises(DatabaseError):
        await service.apply_reaction(video.id, users["alice"], "like")

    assert not await LikeRepository(db_session).has_liked(video.id, users["alice"].id)
    counters = await VideoRepository(db_session).get_counters(video.id)
    assert counters["likes"] == 0


@pytest.mark.asyncio
async def test_non_duplicate_integrity_error_is_reported(db_session, users, video):
    """A constraint failure that leaves no like behind is not a no-op"""
    service = ReactionService(db_session)
    service.like_repo.add_if_absent = AsyncMock(
        side_effect=IntegrityError(
            "INSERT INTO video_likes", {}, Exception("FOREIGN KEY constraint failed")
        )
    )

    with pytest.raises(DatabaseError):
        await service.apply_reaction(video.id, users["alice"], "like")

    counters = await VideoRepository(db_session).get_counters(video.id)
    assert counters["likes"] == 0
