# src/infrastructure/repositories/engagement_repository.py
"""
Engagement Repositories
Fact tables behind the like and subscriber counters, plus comments

Fact writes only flush. The service that pairs a fact write with a counter
update commits both together.
"""

from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from .base import BaseRepository
from src.app.models import VideoLike, Subscription, VideoComment

logger = logging.getLogger(__name__)


class LikeRepository(BaseRepository[VideoLike]):
    """Repository for the video_likes fact table"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, VideoLike)

    async def has_liked(self, video_id: str, user_id: str) -> bool:
        try:
            result = await self.session.execute(
                select(VideoLike.id)
                .where(VideoLike.video_id == video_id, VideoLike.user_id == user_id)
                .limit(1)
            )
            return result.first() is not None
        except Exception as e:
            logger.error(f"❌ Failed to check like: {e}")
            raise

    async def add_if_absent(self, video_id: str, user_id: str) -> bool:
        """
        Insert the like fact unless one already exists

        A concurrent insert of the same pair surfaces as IntegrityError
        from the unique constraint on flush.

        Returns:
            True if a new row was inserted
        """
        if await self.has_liked(video_id, user_id):
            return False

        self.session.add(VideoLike(video_id=video_id, user_id=user_id))
        await self.session.flush()
        return True

    async def remove(self, video_id: str, user_id: str) -> bool:
        """
        Delete the like fact if present

        Returns:
            True if a row was deleted
        """
        try:
            result = await self.session.execute(
                delete(VideoLike).where(
                    VideoLike.video_id == video_id, VideoLike.user_id == user_id
                )
            )
            return int(result.rowcount or 0) > 0
        except Exception as e:
            logger.error(f"❌ Failed to delete like: {e}")
            raise


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for the subscriptions fact table"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Subscription)

    async def is_subscribed(self, user_id: str, channel_id: str) -> bool:
        try:
            result = await self.session.execute(
                select(Subscription.id)
                .where(
                    Subscription.user_id == user_id,
                    Subscription.creator_id == channel_id,
                )
                .limit(1)
            )
            return result.first() is not None
        except Exception as e:
            logger.error(f"❌ Failed to check subscription: {e}")
            raise

    async def add(self, user_id: str, channel_id: str, notifications: bool = True) -> Subscription:
        """Insert a subscription fact (flush only)"""
        subscription = Subscription(
            user_id=user_id, creator_id=channel_id, notifications=notifications
        )
        self.session.add(subscription)
        await self.session.flush()
        return subscription

    async def remove(self, user_id: str, channel_id: str) -> bool:
        """
        Delete the subscription fact if present

        Returns:
            True if a row was deleted
        """
        try:
            result = await self.session.execute(
                delete(Subscription).where(
                    Subscription.user_id == user_id,
                    Subscription.creator_id == channel_id,
                )
            )
            return int(result.rowcount or 0) > 0
        except Exception as e:
            logger.error(f"❌ Failed to delete subscription: {e}")
            raise


class CommentRepository(BaseRepository[VideoComment]):
    """Repository for video comments"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, VideoComment)

    async def get_latest_for_video(self, video_id: str, limit: int = 50) -> List[VideoComment]:
        """
        Newest comments first, authors loaded

        Args:
            video_id: Video ID
            limit: Max results
        """
        try:
            result = await self.session.execute(
                select(VideoComment)
                .options(selectinload(VideoComment.author))
                .execution_options(populate_existing=True)
                .where(VideoComment.video_id == video_id)
                .order_by(VideoComment.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get comments: {e}")
            raise
