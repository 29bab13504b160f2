# src/domain/__init__.py
"""
Domain-level value types shared by services and routes.
"""
from .models import ReactionAction, SubscriptionAction, ActionResult

__all__ = ["ReactionAction", "SubscriptionAction", "ActionResult"]
