"""
Service Dependency Injection
FastAPI dependency providers for the current user and services
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.database import get_db
from src.app.models import User
from src.services import (
    AuthService,
    ReactionService,
    SubscriptionService,
    VideoService,
    ViewService,
)


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """
    Authenticated user for this request, or None

    Usage in FastAPI:
        @router.post("/things")
        async def create_thing(user: Optional[User] = Depends(get_current_user)):
            ...
    """
    return await AuthService(db).get_auth_user(authorization)


def get_reaction_service(db: AsyncSession = Depends(get_db)) -> ReactionService:
    return ReactionService(db)


def get_subscription_service(db: AsyncSession = Depends(get_db)) -> SubscriptionService:
    return SubscriptionService(db)


def get_view_service(db: AsyncSession = Depends(get_db)) -> ViewService:
    return ViewService(db)


def get_video_service(db: AsyncSession = Depends(get_db)) -> VideoService:
    return VideoService(db)
