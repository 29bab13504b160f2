# src/infrastructure/repositories/channel_repository.py
"""
Channel Repository
Handles channel reads and the subscriber counter
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from src.app.models import Channel

logger = logging.getLogger(__name__)


class ChannelRepository(BaseRepository[Channel]):
    """
    Repository for Channel operations
    """

    def __init__(self, session: AsyncSession):
        """Initialize channel repository"""
        super().__init__(session, Channel)

    async def get_owner_id(self, channel_id: str) -> Optional[str]:
        """User id of the channel owner, or None if the channel is missing"""
        return await self.get_column(channel_id, "user_id")

    async def get_subscriber_count(self, channel_id: str) -> int:
        count = await self.get_column(channel_id, "subscriber_count")
        return int(count or 0)
