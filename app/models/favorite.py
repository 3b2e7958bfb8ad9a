from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.user import utcnow


class Favorite(Base):
    """
    Favorite model
    - a user favorites a given tweet at most once (uq_favorite_user_tweet)
    """
    __tablename__ = "favorite"
    __table_args__ = (
        UniqueConstraint("user_id", "tweet_id", name="uq_favorite_user_tweet"),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
    )
    user_id: int = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        doc="User who favorited"
    )
    tweet_id: int = Column(
        Integer,
        ForeignKey("tweet.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Favorited tweet"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user = relationship(
        "User",
        back_populates="favorites",
    )

    tweet = relationship(
        "Tweet",
        back_populates="favorites",
        lazy="selectin",
        doc="Favorited Tweet (always loaded with the favorite)"
    )
