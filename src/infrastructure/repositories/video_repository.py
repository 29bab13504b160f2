# src/infrastructure/repositories/video_repository.py
"""
Video Repository
Handles video reads, feeds and the video counters
"""

from typing import List, Optional, Dict
from sqlalchemy import select, func, desc, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from .base import BaseRepository
from src.app.models import Video, VideoPrivacy

logger = logging.getLogger(__name__)


class VideoRepository(BaseRepository[Video]):
    """
    Repository for Video operations
    """

    def __init__(self, session: AsyncSession):
        """Initialize video repository"""
        super().__init__(session, Video)

    # ========================================================================
    # Video Retrieval Methods
    # ========================================================================

    async def get_with_uploader(self, video_id: str) -> Optional[Video]:
        """
        Get video with its uploader loaded

        Args:
            video_id: Video ID

        Returns:
            Video or None
        """
        try:
            result = await self.session.execute(
                select(Video)
                .options(selectinload(Video.uploader))
                .execution_options(populate_existing=True)
                .where(Video.id == video_id)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"❌ Failed to get video with uploader: {e}")
            raise

    async def get_counters(self, video_id: str) -> Optional[Dict[str, int]]:
        """
        Read likes, dislikes and views as currently stored

        Returns:
            Counter dict or None if the video does not exist
        """
        try:
            result = await self.session.execute(
                select(Video.likes, Video.dislikes, Video.views).where(
                    Video.id == video_id
                )
            )
            row = result.first()
            if row is None:
                return None
            return {
                "likes": int(row.likes or 0),
                "dislikes": int(row.dislikes or 0),
                "views": int(row.views or 0),
            }
        except Exception as e:
            logger.error(f"❌ Failed to read video counters: {e}")
            raise

    async def get_channel_id(self, video_id: str) -> Optional[str]:
        """Channel the video belongs to, or None if the video is missing"""
        return await self.get_column(video_id, "channel_id")

    # ========================================================================
    # Feeds
    # ========================================================================

    async def get_recommended(self, exclude_video_id: str, limit: int = 20) -> List[Video]:
        """
        Public videos other than the given one, most viewed first

        Args:
            exclude_video_id: Video being watched
            limit: Max results

        Returns:
            List of videos with uploader loaded
        """
        try:
            result = await self.session.execute(
                select(Video)
                .options(selectinload(Video.uploader))
                .execution_options(populate_existing=True)
                .where(
                    Video.id != exclude_video_id,
                    Video.privacy == VideoPrivacy.PUBLIC,
                )
                .order_by(desc(Video.views), desc(Video.created_at))
                .limit(limit)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get recommended videos: {e}")
            raise

    async def get_home_feed(
        self, category: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> List[Video]:
        """
        Public regular (non-short) videos, newest first

        Args:
            category: Category filter; None means all categories
            limit: Page size
            offset: Pagination offset

        Returns:
            List of videos with uploader and channel loaded
        """
        try:
            query = (
                select(Video)
                .options(selectinload(Video.uploader), selectinload(Video.channel))
                .execution_options(populate_existing=True)
                .where(
                    Video.privacy == VideoPrivacy.PUBLIC,
                    or_(Video.is_short.is_(False), Video.is_short.is_(None)),
                )
            )
            if category:
                query = query.where(Video.category == category)

            result = await self.session.execute(
                query.order_by(desc(Video.created_at)).offset(offset).limit(limit)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get home feed: {e}")
            raise

    async def get_shorts(self, limit: int = 10) -> List[Video]:
        """
        Public shorts, newest first

        Args:
            limit: Max results

        Returns:
            List of shorts with uploader and channel loaded
        """
        try:
            result = await self.session.execute(
                select(Video)
                .options(selectinload(Video.uploader), selectinload(Video.channel))
                .execution_options(populate_existing=True)
                .where(
                    Video.privacy == VideoPrivacy.PUBLIC,
                    Video.is_short.is_(True),
                )
                .order_by(desc(Video.created_at))
                .limit(limit)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get shorts: {e}")
            raise

    async def count_public_by_channel(self, channel_id: str) -> int:
        """Number of public videos on a channel"""
        try:
            result = await self.session.execute(
                select(func.count())
                .select_from(Video)
                .where(
                    Video.channel_id == channel_id,
                    Video.privacy == VideoPrivacy.PUBLIC,
                )
            )
            return int(result.scalar_one() or 0)
        except Exception as e:
            logger.error(f"❌ Failed to count channel videos: {e}")
            raise
