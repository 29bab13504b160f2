"""
Video Service
Read path for videos and channels, plus comment creation
"""

import re
from typing import Optional, List, Dict, Any, Union

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.config import Config
from src.app.models import User, Video, VideoComment
from src.domain.models import ActionResult
from src.infrastructure.repositories import (
    ChannelRepository,
    CommentRepository,
    LikeRepository,
    SubscriptionRepository,
    VideoRepository,
)
from src.services.base_service import BaseService
from src.services.exceptions import ResourceNotFoundError, ValidationError


class VideoService(BaseService):
    """
    Video and channel queries

    Handles:
    - Video screen (video, channel, comments, recommendations)
    - Video and channel details
    - Home feed
    - Per-viewer is_liked / is_subscribed flags
    - Adding comments
    """

    def __init__(self, session: AsyncSession, config: Optional[Config] = None):
        super().__init__(session, config=config)
        self.video_repo = VideoRepository(session)
        self.channel_repo = ChannelRepository(session)
        self.like_repo = LikeRepository(session)
        self.subscription_repo = SubscriptionRepository(session)
        self.comment_repo = CommentRepository(session)

    def get_service_name(self) -> str:
        return "video"

    # ========================================================================
    # Viewer flags
    # ========================================================================

    async def is_liked(self, video_id: str, viewer: Optional[User]) -> bool:
        """Anonymous viewers never have liked anything"""
        if viewer is None:
            return False
        return await self.like_repo.has_liked(video_id, viewer.id)

    async def is_subscribed(self, channel_id: str, viewer: Optional[User]) -> bool:
        if viewer is None:
            return False
        return await self.subscription_repo.is_subscribed(viewer.id, channel_id)

    # ========================================================================
    # Video queries
    # ========================================================================

    async def get_video_screen(
        self, video_id: str, viewer: Optional[User] = None
    ) -> Dict[str, Any]:
        """
        Everything the watch page needs in one payload

        Args:
            video_id: Normalized video id
            viewer: Authenticated user or None

        Returns:
            Dict with video, channel, comments and recommended

        Raises:
            ResourceNotFoundError: video missing
        """
        self.log_debug(f"Fetching video screen: {video_id}")

        video = await self._video_payload(video_id, viewer)

        channel = await self.channel_repo.get_by_id(video["channel_id"])
        channel_payload = None
        if channel is not None:
            channel_payload = channel.to_dict()
            channel_payload["is_subscribed"] = await self.is_subscribed(channel.id, viewer)

        comments = await self._comments_payload(video_id)

        recommended = await self.video_repo.get_recommended(
            video_id, limit=self.config.feed.recommended_limit
        )

        return {
            "success": True,
            "video": video,
            "channel": channel_payload,
            "comments": comments,
            "recommended": [
                {**rec.to_summary(), "uploader": self._uploader_block(rec.uploader)}
                for rec in recommended
            ],
        }

    async def get_video_details(
        self, video_id: str, viewer: Optional[User] = None
    ) -> Dict[str, Any]:
        """Video, uploader, viewer flags and latest comments"""
        video = await self._video_payload(video_id, viewer)
        comments = await self._comments_payload(video_id)
        video["comments_count"] = len(comments)

        return {"success": True, "video": video, "comments": comments}

    async def get_home_feed(
        self,
        category: Optional[str] = None,
        limit: Union[int, str, None] = None,
        offset: Union[int, str, None] = 0,
    ) -> Dict[str, Any]:
        """
        Public regular videos newest first, plus the latest public shorts

        limit and offset may arrive as raw query strings: a leading integer
        is used and anything else counts as 0. limit is then clamped to
        1..max_limit and offset floored at 0. A category of "All" (or empty)
        means no filter; shorts ignore the category.
        """
        feed_config = self.config.feed
        limit = min(max(_leading_int(limit, feed_config.default_limit), 1), feed_config.max_limit)
        offset = max(_leading_int(offset, 0), 0)
        requested_category = category or "All"
        category_filter = None if requested_category == "All" else requested_category

        videos = await self.video_repo.get_home_feed(
            category=category_filter, limit=limit, offset=offset
        )
        shorts = await self.video_repo.get_shorts(limit=feed_config.shorts_limit)

        items = [self._feed_item(video) for video in videos]

        return {
            "success": True,
            "videos": items,
            "shorts": [self._feed_item(short) for short in shorts],
            "total": len(items),
            "category": requested_category,
            "limit": limit,
            "offset": offset,
            "has_more": len(items) == limit,
        }

    # ========================================================================
    # Channel queries
    # ========================================================================

    async def get_channel_details(
        self, channel_id: str, viewer: Optional[User] = None
    ) -> Dict[str, Any]:
        """
        Channel fields, public video count and is_subscribed

        Raises:
            ResourceNotFoundError: channel missing
        """
        channel = await self.channel_repo.get_by_id(channel_id)
        if channel is None:
            raise ResourceNotFoundError("Channel", channel_id)

        payload = channel.to_dict()
        payload["video_count"] = await self.video_repo.count_public_by_channel(channel_id)
        payload["is_subscribed"] = await self.is_subscribed(channel_id, viewer)

        return {"success": True, "channel": payload}

    # ========================================================================
    # Comments
    # ========================================================================

    async def add_comment(
        self, video_id: str, user: Optional[User], text: Optional[str]
    ) -> ActionResult:
        """
        Add a comment to a video

        Raises:
            AuthenticationError: anonymous caller
            ValidationError: empty comment
            ResourceNotFoundError: video missing
        """
        user = self.require_user(user)
        if not text or not text.strip():
            raise ValidationError("Comment text required", field="comment")

        if not await self.video_repo.exists(video_id):
            raise ResourceNotFoundError("Video", video_id)

        self.log_info(f"Adding comment to video: {video_id}")
        try:
            comment = await self.comment_repo.create(
                video_id=video_id, user_id=user.id, comment=text.strip()
            )
        except Exception as e:
            raise self.handle_error(e, "add_comment", {"video_id": video_id})

        return ActionResult(message="Comment added", comment_id=comment.id)

    # ========================================================================
    # Helpers
    # ========================================================================

    async def _video_payload(self, video_id: str, viewer: Optional[User]) -> Dict[str, Any]:
        video = await self.video_repo.get_with_uploader(video_id)
        if video is None:
            raise ResourceNotFoundError("Video", video_id)

        payload = video.to_dict()
        payload["uploader"] = self._uploader_block(video.uploader)
        payload["is_liked"] = await self.is_liked(video_id, viewer)
        # Dislikes and saves have no per-user record
        payload["is_disliked"] = False
        payload["is_saved"] = False
        return payload

    async def _comments_payload(self, video_id: str) -> List[Dict[str, Any]]:
        comments: List[VideoComment] = await self.comment_repo.get_latest_for_video(
            video_id, limit=self.config.feed.comments_limit
        )
        return [comment.to_dict() for comment in comments]

    @staticmethod
    def _uploader_block(uploader: Optional[User]) -> Optional[Dict[str, Any]]:
        return uploader.to_public_dict() if uploader is not None else None

    def _feed_item(self, video: Video) -> Dict[str, Any]:
        item = video.to_summary()
        item["description"] = video.description
        item["is_short"] = bool(video.is_short)
        item["uploader"] = self._uploader_block(video.uploader)
        item["channel_id"] = video.channel_id
        item["channel_name"] = video.channel.name if video.channel else None
        return item


_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(value: Union[int, str, None], default: int) -> int:
    """Integer prefix of a query value; missing -> default, garbage -> 0"""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else 0
