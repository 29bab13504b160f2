# src/infrastructure/repositories/user_repository.py
"""
User Repository
Accounts and bearer-token session lookup
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from src.app.models import User, Session

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for User operations
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_session_token(
        self, token: str, now: Optional[datetime] = None
    ) -> Optional[User]:
        """
        Resolve a bearer token to its user

        Only sessions whose expires_at lies in the future count.

        Args:
            token: Raw token from the Authorization header
            now: Reference time (defaults to utcnow)

        Returns:
            User or None
        """
        now = now or datetime.utcnow()
        try:
            result = await self.session.execute(
                select(User)
                .join(Session, Session.user_id == User.id)
                .where(Session.token == token, Session.expires_at > now)
                .limit(1)
            )
            return result.scalars().first()
        except Exception as e:
            logger.error(f"❌ Failed to look up session: {e}")
            raise

    async def create_session(
        self, user_id: str, ttl_hours: int = 24 * 30, token_bytes: int = 48
    ) -> Session:
        """
        Open a login session for a user and commit

        Returns:
            Session carrying the new token
        """
        login = Session(
            user_id=user_id,
            token=secrets.token_hex(token_bytes),
            expires_at=datetime.utcnow() + timedelta(hours=ttl_hours),
        )
        try:
            self.session.add(login)
            await self.session.commit()
            await self.session.refresh(login)
            logger.info(f"✅ Opened session for user {user_id}")
            return login
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Failed to open session: {e}")
            raise
