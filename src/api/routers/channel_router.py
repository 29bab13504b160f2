"""
Channel API Router
Channel details and subscribe/unsubscribe by channel id
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from src.api.schemas import ActionResponse, ERROR_RESPONSES
from src.app.dependencies import (
    get_current_user,
    get_subscription_service,
    get_video_service,
)
from src.app.models import User
from src.services import SubscriptionService, VideoService
from src.utils.id_helpers import require_valid_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/channel", tags=["Channel"])


@router.get("/details", responses=ERROR_RESPONSES)
async def channel_details(
    channel_id: str = Query(default=""),
    user: Optional[User] = Depends(get_current_user),
    video_service: VideoService = Depends(get_video_service),
) -> Dict[str, Any]:
    """Channel fields, public video count and is_subscribed"""
    channel_id = require_valid_id(channel_id, "Channel ID")
    return await video_service.get_channel_details(channel_id, user)


@router.post(
    "/subscription",
    response_model=ActionResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def channel_subscription(
    channel_id: str = Query(default=""),
    action: str = Query(..., description="subscribe or unsubscribe"),
    user: Optional[User] = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
) -> Dict[str, Any]:
    """Subscribe to or unsubscribe from a channel"""
    channel_id = require_valid_id(channel_id, "Channel ID")
    result = await subscription_service.apply_subscription(channel_id, user, action)
    return result.to_response()
