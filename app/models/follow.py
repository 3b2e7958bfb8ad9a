from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.user import utcnow


class Follow(Base):
    """
    Directed follow edge: follower -> following
    - one edge per ordered pair (uq_follow_pair)
    - no self-follow (ck_follow_not_self)
      MySQL refuses a CHECK over columns with an ON DELETE CASCADE action,
      there the rule is left to FollowService
    """
    __tablename__ = "follow"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follow_pair"),
        CheckConstraint(
            "follower_id <> following_id", name="ck_follow_not_self"
        ).ddl_if(dialect=("sqlite", "postgresql")),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
    )
    follower_id: int = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        doc="User who follows"
    )
    following_id: int = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="User being followed"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    follower = relationship(
        "User",
        foreign_keys=[follower_id],
    )
    following = relationship(
        "User",
        foreign_keys=[following_id],
    )
