"""
Services Package
Business logic layer for the RumPlay engagement API
"""

from .base_service import BaseService
from .auth_service import AuthService, extract_bearer_token
from .reaction_service import ReactionService
from .subscription_service import SubscriptionService
from .view_service import ViewService
from .video_service import VideoService
from .exceptions import (
    ServiceError,
    ValidationError,
    AuthenticationError,
    ResourceNotFoundError,
    ResourceConflictError,
    DatabaseError,
    error_to_http_status,
)

__all__ = [
    "BaseService",
    "AuthService",
    "extract_bearer_token",
    "ReactionService",
    "SubscriptionService",
    "ViewService",
    "VideoService",
    "ServiceError",
    "ValidationError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "ResourceConflictError",
    "DatabaseError",
    "error_to_http_status",
]

__version__ = "0.1.0"
