# src/app/models/engagement.py
"""
Engagement fact tables: likes, subscriptions and comments
"""

from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    Text,
    ForeignKey,
    UniqueConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class VideoLike(Base):
    """One row per (video, user) that currently likes the video"""

    __tablename__ = "video_likes"
    __table_args__ = (
        UniqueConstraint("video_id", "user_id", name="uq_video_likes_video_user"),
        Index("idx_video_likes_user", "user_id", "created_at"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    video_id = Column(
        String(32), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<VideoLike(video_id={self.video_id}, user_id={self.user_id})>"


class Subscription(Base):
    """One row per (subscriber, channel) pair"""

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "creator_id", name="uq_subscriptions_user_creator"),
        Index("idx_subscriptions_creator", "creator_id"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Subscriber",
    )
    creator_id = Column(
        String(32),
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=False,
        comment="Channel subscribed to",
    )
    notifications = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Subscription(user_id={self.user_id}, creator_id={self.creator_id})>"


class VideoComment(Base):
    """Top-level comment on a video"""

    __tablename__ = "video_comments"
    __table_args__ = (Index("idx_video_comments_video", "video_id", "created_at"),)

    id = Column(String(32), primary_key=True, default=new_id)
    video_id = Column(
        String(32), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    video = relationship("Video", back_populates="comments")
    author = relationship("User")

    def to_dict(self) -> dict:
        """Comment with its author block (author must be loaded)"""
        return {
            "id": self.id,
            "video_id": self.video_id,
            "user_id": self.user_id,
            "comment": self.comment,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "user": {
                "username": self.author.username,
                "name": self.author.name,
                "profile_pic": self.author.profile_pic,
            }
            if self.author is not None
            else None,
        }
