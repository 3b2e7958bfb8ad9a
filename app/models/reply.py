from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.user import utcnow


class Reply(Base):
    """
    Reply to a tweet
    """
    __tablename__ = "reply"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
    )
    content: str = Column(
        Text,
        nullable=False,
        doc="Reply text"
    )
    user_id: int = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Author (User.id)"
    )
    tweet_id: int = Column(
        Integer,
        ForeignKey(
            "tweet.id",
            ondelete="CASCADE"  # tweet removed -> replies removed
        ),
        nullable=False,
        index=True,
        doc="Target tweet (Tweet.id)"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user = relationship(
        "User",
        back_populates="replies",
    )

    tweet = relationship(
        "Tweet",
        back_populates="replies",
    )
