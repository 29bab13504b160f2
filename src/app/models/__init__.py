# src/app/models/__init__.py
"""
ORM Models
"""

from .base import Base
from .user import User, Session
from .channel import Channel
from .video import Video, VideoPrivacy
from .engagement import VideoLike, Subscription, VideoComment

__all__ = [
    "Base",
    "User",
    "Session",
    "Channel",
    "Video",
    "VideoPrivacy",
    "VideoLike",
    "Subscription",
    "VideoComment",
]
