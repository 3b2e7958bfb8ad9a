from datetime import datetime
from typing import List

from pydantic import Field

from app.models.tweet import TWEET_MAX_LENGTH
from app.schemas.common_schema import CamelModel


# ─── request schemas ─────────────────────────────────────────────────────────

class TweetCreateRequest(CamelModel):
    content: str = Field(
        ...,
        min_length=1,
        max_length=TWEET_MAX_LENGTH,
        description="content is required(max 280 characters).",
    )


class ReplyCreateRequest(CamelModel):
    """
    Reply request
    - tweetId must be numeric and reference an existing tweet
    """
    tweet_id: int = Field(..., description="Tweet id (must be a number) is required.")
    content:  str = Field(..., min_length=1, description="content is required.")


# ─── response schemas ─────────────────────────────────────────────────────────

class TweetResponse(CamelModel):
    id: int
    content: str
    user_id: int
    created_at: datetime


class ReplyResponse(CamelModel):
    id: int
    content: str
    user_id: int
    tweet_id: int
    created_at: datetime


class TweetWithRepliesResponse(TweetResponse):
    """
    Tweet with the replies it received, newest first
    """
    replies: List[ReplyResponse] = Field(default_factory=list)


class TimelineReplyResponse(CamelModel):
    id: int
    username: str
    content: str


class TimelineTweetResponse(CamelModel):
    """
    Timeline entry: author name instead of ids
    """
    id: int
    username: str
    content: str
    replies: List[TimelineReplyResponse] = Field(default_factory=list)


class FavoritedTweetContent(CamelModel):
    content: str


class FavoriteResponse(CamelModel):
    """
    Favorite joined to the favorited tweet's content
    """
    id: int
    user_id: int
    tweet_id: int
    created_at: datetime
    tweet: FavoritedTweetContent


class FavoriteDetailResponse(FavoriteResponse):
    """
    Favorite joined to the whole favorited tweet
    """
    tweet: TweetResponse


class FollowResponse(CamelModel):
    id: int
    follower_id: int
    following_id: int
    created_at: datetime
