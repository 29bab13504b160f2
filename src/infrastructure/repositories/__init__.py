# src/infrastructure/repositories/__init__.py
"""
Repository Layer
Data access patterns for all entities
"""

from .base import BaseRepository
from .video_repository import VideoRepository
from .channel_repository import ChannelRepository
from .engagement_repository import (
    LikeRepository,
    SubscriptionRepository,
    CommentRepository,
)
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "VideoRepository",
    "ChannelRepository",
    "LikeRepository",
    "SubscriptionRepository",
    "CommentRepository",
    "UserRepository",
]
