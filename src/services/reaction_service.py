"""
Reaction Service
Keeps videos.likes in step with video_likes and maintains videos.dislikes
"""

from typing import Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.config import Config
from src.app.models import User
from src.domain.models import ActionResult, ReactionAction
from src.infrastructure.repositories import LikeRepository, VideoRepository
from src.services.base_service import BaseService
from src.services.exceptions import ResourceNotFoundError, ValidationError

_MESSAGES = {
    ReactionAction.LIKE: "Video liked",
    ReactionAction.UNLIKE: "Video unliked",
    ReactionAction.DISLIKE: "Video disliked",
    ReactionAction.UNDISLIKE: "Dislike removed",
}


class ReactionService(BaseService):
    """
    Like / unlike / dislike / undislike reconciler

    like and unlike are backed by a fact row per (video, user): repeating
    them changes nothing. dislike and undislike only move the counter, so
    every call counts.
    """

    def __init__(self, session: AsyncSession, config: Optional[Config] = None):
        super().__init__(session, config=config)
        self.video_repo = VideoRepository(session)
        self.like_repo = LikeRepository(session)

    def get_service_name(self) -> str:
        return "reaction"

    async def apply_reaction(
        self,
        video_id: str,
        user: Optional[User],
        action: Union[ReactionAction, str],
    ) -> ActionResult:
        """
        Apply one reaction and return the fresh counters

        Args:
            video_id: Normalized video id
            user: Authenticated user or None
            action: like, unlike, dislike or undislike

        Returns:
            ActionResult with likes and dislikes

        Raises:
            AuthenticationError: anonymous caller
            ValidationError: unknown action
            ResourceNotFoundError: video missing
            DatabaseError: store failure
        """
        user = self.require_user(user)
        try:
            action = ReactionAction(action)
        except ValueError:
            raise ValidationError("Invalid action", field="action")

        user_id = user.id
        self.log_info(f"{action.value} on video {video_id} by user {user_id}")

        changed = True
        try:
            if not await self.video_repo.exists(video_id):
                raise ResourceNotFoundError("Video", video_id)

            if action is ReactionAction.LIKE:
                changed = await self.like_repo.add_if_absent(video_id, user_id)
                if changed:
                    await self.video_repo.increment_counter(video_id, "likes")
            elif action is ReactionAction.UNLIKE:
                changed = await self.like_repo.remove(video_id, user_id)
                if changed:
                    await self.video_repo.decrement_counter(video_id, "likes")
            elif action is ReactionAction.DISLIKE:
                await self.video_repo.increment_counter(video_id, "dislikes")
            else:
                await self.video_repo.decrement_counter(video_id, "dislikes")

            await self.session.commit()
        except IntegrityError as e:
            # The rollback also discards the counter bump. Only a racing like
            # of the same pair leaves a committed fact behind; any other
            # violation (a vanished user, say) is a real failure.
            await self.session.rollback()
            duplicate = False
            if action is ReactionAction.LIKE:
                try:
                    duplicate = await self.like_repo.has_liked(video_id, user_id)
                except Exception as check_error:
                    raise self.handle_error(
                        check_error, "apply_reaction", {"video_id": video_id}
                    )
            if not duplicate:
                raise self.handle_error(e, "apply_reaction", {"video_id": video_id})
            changed = False
            self.log_debug(f"Duplicate like on video {video_id} by user {user_id}")
        except Exception as e:
            await self.session.rollback()
            raise self.handle_error(e, "apply_reaction", {"video_id": video_id})

        counters = await self._read_counters(video_id)
        return ActionResult(
            message=_MESSAGES[action],
            likes=counters["likes"],
            dislikes=counters["dislikes"],
            changed=changed,
        )

    async def _read_counters(self, video_id: str) -> dict:
        try:
            counters = await self.video_repo.get_counters(video_id)
        except Exception as e:
            raise self.handle_error(e, "read_counters", {"video_id": video_id})
        if counters is None:
            raise ResourceNotFoundError("Video", video_id)
        return counters
