# src/app/models/video.py
"""
Video Model
The reactable entity: metadata plus likes, dislikes and views counters
"""

import enum
import json

from sqlalchemy import (
    Column,
    String,
    Integer,
    BigInteger,
    DateTime,
    Text,
    Boolean,
    ForeignKey,
    CheckConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class VideoPrivacy(str, enum.Enum):
    """Who can see a video"""

    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"


class Video(Base):
    """
    Uploaded video

    likes mirrors the row count of video_likes for this video. dislikes and
    views are plain counters with no backing fact table.
    """

    __tablename__ = "videos"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_videos_likes"),
        CheckConstraint("dislikes >= 0", name="ck_videos_dislikes"),
        CheckConstraint("views >= 0", name="ck_videos_views"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    # Foreign Keys
    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Uploader",
    )
    channel_id = Column(
        String(32),
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Basic Info
    title = Column(String(500), nullable=False)
    description = Column(Text)
    video_url = Column(String(500))
    thumbnail = Column(String(500))
    duration = Column(Integer, comment="Length in seconds")
    category = Column(String(50), index=True)
    tags = Column(Text, comment="JSON encoded list of tags")
    privacy = Column(
        SQLEnum(
            VideoPrivacy,
            name="video_privacy",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=VideoPrivacy.PUBLIC,
        index=True,
    )
    is_short = Column(Boolean, nullable=False, default=False)

    # Aggregate counters
    views = Column(BigInteger, nullable=False, default=0, index=True)
    likes = Column(BigInteger, nullable=False, default=0)
    dislikes = Column(BigInteger, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    uploader = relationship("User", foreign_keys=[user_id])
    channel = relationship("Channel", back_populates="videos")
    comments = relationship(
        "VideoComment", back_populates="video", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Video(id={self.id}, title={self.title[:30]}...)>"

    @property
    def tags_list(self) -> list:
        """Decode the JSON tag list; tolerate legacy empty values"""
        if not self.tags:
            return []
        try:
            decoded = json.loads(self.tags)
        except ValueError:
            return []
        return decoded if isinstance(decoded, list) else []

    def to_dict(self) -> dict:
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "channel_id": self.channel_id,
            "title": self.title,
            "description": self.description,
            "video_url": self.video_url,
            "thumbnail": self.thumbnail,
            "duration": self.duration,
            "category": self.category,
            "tags": self.tags_list,
            "privacy": self.privacy.value if self.privacy else None,
            "is_short": bool(self.is_short),
            "views": int(self.views or 0),
            "likes": int(self.likes or 0),
            "dislikes": int(self.dislikes or 0),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_summary(self) -> dict:
        """Compact form used by feeds and recommendations"""
        return {
            "id": self.id,
            "title": self.title,
            "video_url": self.video_url,
            "thumbnail": self.thumbnail,
            "views": int(self.views or 0),
            "likes": int(self.likes or 0),
            "duration": self.duration,
            "category": self.category,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
