"""
API Routers
"""

from .video_router import router as video_router
from .channel_router import router as channel_router

__all__ = ["video_router", "channel_router"]
