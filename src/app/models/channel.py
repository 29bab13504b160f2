# src/app/models/channel.py
"""
Channel Model
The subscribable entity; carries the denormalized subscriber counter
"""

from sqlalchemy import (
    Column,
    String,
    Integer,
    BigInteger,
    Boolean,
    DateTime,
    Text,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class Channel(Base):
    """
    Creator channel

    subscriber_count mirrors the number of rows in subscriptions naming this
    channel and only changes through the subscription reconciler.
    """

    __tablename__ = "channels"
    __table_args__ = (
        CheckConstraint("subscriber_count >= 0", name="ck_channels_subscribers"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Channel owner",
    )

    name = Column(String(100), nullable=False)
    handle = Column(String(100), unique=True)
    avatar = Column(String(500))
    banner = Column(String(500))
    description = Column(Text)

    # Aggregate counters
    subscriber_count = Column(BigInteger, nullable=False, default=0)
    total_views = Column(BigInteger, nullable=False, default=0)
    total_watch_hours = Column(Integer, nullable=False, default=0)

    verified = Column(Boolean, nullable=False, default=False)
    monetization = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    owner = relationship("User", foreign_keys=[user_id])
    videos = relationship("Video", back_populates="channel")

    def __repr__(self):
        return f"<Channel(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict:
        """Convert model to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "handle": self.handle,
            "avatar": self.avatar,
            "banner": self.banner,
            "description": self.description,
            "subscriber_count": int(self.subscriber_count or 0),
            "total_views": int(self.total_views or 0),
            "total_watch_hours": int(self.total_watch_hours or 0),
            "verified": bool(self.verified),
            "monetization": bool(self.monetization),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
