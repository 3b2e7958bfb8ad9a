from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.user import utcnow

TWEET_MAX_LENGTH = 280


class Tweet(Base):
    """
    Tweet model
    - owner (user_id) is fixed at creation
    - replies and favorites are removed with the tweet
    """
    __tablename__ = "tweet"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Tweet id"
    )
    content: str = Column(
        String(TWEET_MAX_LENGTH),
        nullable=False,
        doc="Tweet text (1-280 characters)"
    )
    user_id: int = Column(
        Integer,
        ForeignKey(
            "user.id",
            ondelete="CASCADE"  # author removed -> tweets removed
        ),
        nullable=False,
        index=True,
        doc="Author (User.id)"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Many-to-One
    user = relationship(
        "User",
        back_populates="tweets",
        doc="Author"
    )

    # One-to-Many
    replies = relationship(
        "Reply",
        back_populates="tweet",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Reply.created_at.desc(), Reply.id.desc()]",
        doc="Replies to this tweet, newest first"
    )

    favorites = relationship(
        "Favorite",
        back_populates="tweet",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
