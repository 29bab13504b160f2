"""
API Schemas
Request bodies and response envelopes
"""

from typing import Optional

from pydantic import BaseModel, Field


class CommentRequest(BaseModel):
    """Body of the comment action"""

    comment: str = Field(default="", description="Comment text")


class ActionResponse(BaseModel):
    """Success envelope of every reconciler call; untouched counters are omitted"""

    success: bool = True
    message: str
    likes: Optional[int] = Field(default=None, ge=0)
    dislikes: Optional[int] = Field(default=None, ge=0)
    subscriber_count: Optional[int] = Field(default=None, ge=0)
    views: Optional[int] = Field(default=None, ge=0)
    comment_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Failure envelope"""

    success: bool = False
    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error or conflict"},
    401: {"model": ErrorResponse, "description": "Not authenticated"},
    404: {"model": ErrorResponse, "description": "Target not found"},
    500: {"model": ErrorResponse, "description": "Database error"},
}
