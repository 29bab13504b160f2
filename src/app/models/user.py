# src/app/models/user.py
"""
User and Session Models
Accounts and bearer-token login sessions
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class User(Base):
    """Platform account"""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="viewer")
    profile_pic = Column(String(500))
    bio = Column(Text)
    channel_id = Column(String(32), comment="Channel owned by this user, if any")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    sessions = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"

    def to_public_dict(self) -> dict:
        """Author/uploader block embedded in video and comment payloads"""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "profile_pic": self.profile_pic,
            "channel_id": self.channel_id,
        }


class Session(Base):
    """Login session; a request authenticates by presenting its token"""

    __tablename__ = "sessions"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token = Column(String(128), nullable=False, unique=True, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="sessions")

    def __repr__(self):
        return f"<Session(user_id={self.user_id}, expires_at={self.expires_at})>"
