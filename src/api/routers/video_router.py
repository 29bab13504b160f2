"""
Video API Router
Watch-page action dispatch, video details and home feed
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from src.api.schemas import CommentRequest, ERROR_RESPONSES
from src.app.dependencies import (
    get_current_user,
    get_reaction_service,
    get_subscription_service,
    get_video_service,
    get_view_service,
)
from src.app.models import User
from src.domain.models import ReactionAction, SubscriptionAction
from src.services import (
    ReactionService,
    SubscriptionService,
    ValidationError,
    VideoService,
    ViewService,
)
from src.utils.id_helpers import require_valid_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/video", tags=["Video"])

REACTION_ACTIONS = {a.value for a in ReactionAction}
SUBSCRIPTION_ACTIONS = {a.value for a in SubscriptionAction}
RECOGNIZED_ACTIONS = (
    {"fetch", "comment", "increment_view"} | REACTION_ACTIONS | SUBSCRIPTION_ACTIONS
)


# ============================================================================
# Watch page
# ============================================================================


@router.api_route(
    "/video_screen", methods=["GET", "POST"], responses=ERROR_RESPONSES
)
async def video_screen(
    video_id: str = Query(default="", description="Video ID (32 or 36 chars)"),
    action: str = Query(default="fetch", description="Action to perform"),
    payload: Optional[CommentRequest] = Body(default=None),
    user: Optional[User] = Depends(get_current_user),
    video_service: VideoService = Depends(get_video_service),
    reaction_service: ReactionService = Depends(get_reaction_service),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
    view_service: ViewService = Depends(get_view_service),
) -> Dict[str, Any]:
    """
    Single entry point of the watch page

    - **fetch**: video, channel, comments and recommendations
    - **like / unlike / dislike / undislike**: returns likes and dislikes
    - **subscribe / unsubscribe**: channel of the video; returns subscriber_count
    - **increment_view**: returns views (no login needed)
    - **comment**: body `{"comment": "..."}`; returns comment_id
    """
    logger.info(f"video_screen request: action={action} video_id={video_id}")

    video_id = require_valid_id(video_id, "Video ID")

    if action not in RECOGNIZED_ACTIONS:
        raise ValidationError("Invalid action", field="action")

    if action == "fetch":
        return await video_service.get_video_screen(video_id, user)

    if action in REACTION_ACTIONS:
        result = await reaction_service.apply_reaction(video_id, user, action)
    elif action in SUBSCRIPTION_ACTIONS:
        result = await subscription_service.apply_subscription_for_video(
            video_id, user, action
        )
    elif action == "increment_view":
        result = await view_service.increment_view(video_id)
    else:
        text = payload.comment if payload is not None else ""
        result = await video_service.add_comment(video_id, user, text)

    return result.to_response()


# ============================================================================
# Read-only endpoints
# ============================================================================


@router.get("/details", responses=ERROR_RESPONSES)
async def video_details(
    video_id: str = Query(default=""),
    user: Optional[User] = Depends(get_current_user),
    video_service: VideoService = Depends(get_video_service),
) -> Dict[str, Any]:
    """Video with uploader, is_liked and latest comments"""
    video_id = require_valid_id(video_id, "Video ID")
    return await video_service.get_video_details(video_id, user)


@router.get("/home_feed", responses=ERROR_RESPONSES)
async def home_feed(
    category: str = Query(default="All"),
    limit: Optional[str] = Query(default=None, description="Page size, clamped to 1..100"),
    offset: Optional[str] = Query(default=None),
    video_service: VideoService = Depends(get_video_service),
) -> Dict[str, Any]:
    """
    Public regular videos newest first, plus the latest shorts

    Non-numeric limit or offset values count as 0 rather than failing.
    """
    return await video_service.get_home_feed(category=category, limit=limit, offset=offset)
