from datetime import date, datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from app.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    Service user model
    - credentials (salted bcrypt hash) and public profile fields
    - owns tweets, replies, favorites and both ends of follow edges
    """
    __tablename__ = "user"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="User id"
    )
    first_name: str = Column(
        String(120),
        nullable=False,
        doc="First name"
    )
    last_name: str = Column(
        String(120),
        nullable=False,
        doc="Last name"
    )
    user_name: str = Column(
        String(120),
        unique=True,
        nullable=False,
        doc="Handle, unique as stored"
    )
    email: str = Column(
        String(255),
        unique=True,
        nullable=False,
        doc="E-mail address (sign-in id)"
    )
    password: str = Column(
        String(255),
        nullable=False,
        doc="bcrypt hash, never returned by the API"
    )
    birthday: date = Column(
        Date,
        nullable=False,
        doc="Date of birth (age >= 18 at sign-up)"
    )
    bio: str = Column(
        Text,
        nullable=False,
        doc="Profile text"
    )
    created_at: datetime = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: datetime = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    # User ↔ Tweet (1:N)
    tweets = relationship(
        "Tweet",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Tweet.created_at.desc(), Tweet.id.desc()]",
        doc="Tweets written by this user, newest first"
    )

    # User ↔ Reply (1:N)
    replies = relationship(
        "Reply",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Reply.created_at.desc(), Reply.id.desc()]",
        doc="Replies written by this user, newest first"
    )

    # User ↔ Favorite (1:N)
    favorites = relationship(
        "Favorite",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="Tweets this user favorited"
    )
