# src/domain/models.py
"""
Lightweight DTOs returned by the reconcilers.

These are not DB models. Routes turn them into the JSON success body
via to_response(), which drops counters the action did not touch.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class ReactionAction(str, Enum):
    LIKE = "like"
    UNLIKE = "unlike"
    DISLIKE = "dislike"
    UNDISLIKE = "undislike"


class SubscriptionAction(str, Enum):
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"


@dataclass
class ActionResult:
    """Outcome of one reconciler call"""

    message: str
    likes: Optional[int] = None
    dislikes: Optional[int] = None
    subscriber_count: Optional[int] = None
    views: Optional[int] = None
    comment_id: Optional[str] = None
    changed: bool = True

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": True}
        for key, value in asdict(self).items():
            if key == "changed" or value is None:
                continue
            body[key] = value
        return body


__all__ = ["ReactionAction", "SubscriptionAction", "ActionResult"]
