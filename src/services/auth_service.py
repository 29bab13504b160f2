"""
Auth Service
Resolves the Authorization header to a user
"""

import re
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.models import User
from src.infrastructure.repositories import UserRepository
from src.services.base_service import BaseService

_BEARER_RE = re.compile(r"Bearer\s+(.+)", re.IGNORECASE)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an "Authorization: Bearer <token>" header value"""
    if not authorization:
        return None
    match = _BEARER_RE.search(authorization)
    if not match:
        return None
    token = match.group(1).strip()
    return token or None


class AuthService(BaseService):
    """
    Bearer-token authentication against the sessions table

    Lookup failures never raise: a broken or unknown token is treated the
    same as no token. Callers that need a user call require_user().
    """

    def __init__(self, session: AsyncSession, config=None):
        super().__init__(session, config=config)
        self.user_repo = UserRepository(session)

    def get_service_name(self) -> str:
        return "auth"

    async def get_auth_user(self, authorization: Optional[str]) -> Optional[User]:
        token = extract_bearer_token(authorization)
        if token is None:
            return None

        try:
            user = await self.user_repo.get_by_session_token(token)
        except Exception as e:
            self.log_error("Session lookup failed", error=e)
            await self.session.rollback()
            return None

        if user is None:
            self.log_debug("No valid session found for token")
        return user

    async def open_session(self, user_id: str):
        """Issue a new session token for a user"""
        return await self.user_repo.create_session(
            user_id,
            ttl_hours=self.config.auth.session_ttl_hours,
            token_bytes=self.config.auth.token_bytes,
        )
