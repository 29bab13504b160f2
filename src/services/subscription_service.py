"""
Subscription Service
Keeps channels.subscriber_count in step with the subscriptions table
"""

from typing import Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.config import Config
from src.app.models import User
from src.domain.models import ActionResult, SubscriptionAction
from src.infrastructure.repositories import (
    ChannelRepository,
    SubscriptionRepository,
    VideoRepository,
)
from src.services.base_service import BaseService
from src.services.exceptions import (
    ResourceConflictError,
    ResourceNotFoundError,
    ValidationError,
)


class SubscriptionService(BaseService):
    """
    Subscribe / unsubscribe reconciler

    subscribe is deliberately not idempotent: a second call is rejected as
    a conflict. unsubscribe without a subscription is a no-op.
    """

    def __init__(self, session: AsyncSession, config: Optional[Config] = None):
        super().__init__(session, config=config)
        self.channel_repo = ChannelRepository(session)
        self.subscription_repo = SubscriptionRepository(session)
        self.video_repo = VideoRepository(session)

    def get_service_name(self) -> str:
        return "subscription"

    async def apply_subscription(
        self,
        channel_id: str,
        user: Optional[User],
        action: Union[SubscriptionAction, str],
    ) -> ActionResult:
        """
        Subscribe to or unsubscribe from a channel

        Args:
            channel_id: Normalized channel id
            user: Authenticated user or None
            action: subscribe or unsubscribe

        Returns:
            ActionResult with subscriber_count

        Raises:
            AuthenticationError: anonymous caller
            ValidationError: unknown action
            ResourceNotFoundError: channel missing
            ResourceConflictError: own channel, or already subscribed
            DatabaseError: store failure
        """
        user = self.require_user(user)
        action = self._parse_action(action)

        user_id = user.id
        self.log_info(f"{action.value} channel {channel_id} by user {user_id}")

        try:
            owner_id = await self.channel_repo.get_owner_id(channel_id)
            if owner_id is None:
                raise ResourceNotFoundError("Channel", channel_id)
            if owner_id == user_id:
                raise ResourceConflictError("You cannot subscribe to your own channel")

            if action is SubscriptionAction.SUBSCRIBE:
                changed = await self._subscribe(channel_id, user_id)
                message = "Subscribed successfully"
            else:
                changed = await self._unsubscribe(channel_id, user_id)
                message = "Unsubscribed successfully"
        except Exception as e:
            await self.session.rollback()
            raise self.handle_error(e, "apply_subscription", {"channel_id": channel_id})

        try:
            count = await self.channel_repo.get_subscriber_count(channel_id)
        except Exception as e:
            raise self.handle_error(e, "read_subscriber_count", {"channel_id": channel_id})

        return ActionResult(message=message, subscriber_count=count, changed=changed)

    async def apply_subscription_for_video(
        self,
        video_id: str,
        user: Optional[User],
        action: Union[SubscriptionAction, str],
    ) -> ActionResult:
        """Subscribe to or unsubscribe from the channel a video belongs to"""
        user = self.require_user(user)
        try:
            channel_id = await self.video_repo.get_channel_id(video_id)
        except Exception as e:
            raise self.handle_error(e, "resolve_channel", {"video_id": video_id})
        if channel_id is None:
            raise ResourceNotFoundError("Video", video_id)
        return await self.apply_subscription(channel_id, user, action)

    async def _subscribe(self, channel_id: str, user_id: str) -> bool:
        if await self.subscription_repo.is_subscribed(user_id, channel_id):
            raise ResourceConflictError("Already subscribed")

        try:
            await self.subscription_repo.add(user_id, channel_id, notifications=True)
            await self.channel_repo.increment_counter(channel_id, "subscriber_count")
            await self.session.commit()
        except IntegrityError:
            # A concurrent subscribe of the same pair won
            await self.session.rollback()
            raise ResourceConflictError("Already subscribed")
        return True

    async def _unsubscribe(self, channel_id: str, user_id: str) -> bool:
        removed = await self.subscription_repo.remove(user_id, channel_id)
        if removed:
            await self.channel_repo.decrement_counter(channel_id, "subscriber_count")
        await self.session.commit()
        return removed

    @staticmethod
    def _parse_action(action: Union[SubscriptionAction, str]) -> SubscriptionAction:
        try:
            return SubscriptionAction(action)
        except ValueError:
            raise ValidationError("Invalid action", field="action")
