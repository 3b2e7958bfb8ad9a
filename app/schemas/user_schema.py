from datetime import date, datetime
from typing import List

from pydantic import Field

from app.schemas.common_schema import CamelModel
from app.schemas.tweet_schema import ReplyResponse, TweetResponse


# ─── user response schemas ───────────────────────────────────────────────

class ReducedProfileResponse(CamelModel):
    """
    Profile projection for anonymous callers
    """
    user_name: str = Field(..., description="Username")
    bio: str = Field(..., description="Profile text")


class ProfileResponse(ReducedProfileResponse):
    """
    Profile projection for authenticated callers
    - no id, password or timestamps
    """
    first_name: str
    last_name: str
    email: str
    birthday: date


class UserResponse(ProfileResponse):
    """
    Own account as returned by sign-up, sign-in, /me and the /me/change-* routes
    - id and password are never included
    """
    created_at: datetime
    updated_at: datetime


class GraphUserResponse(ProfileResponse):
    """
    Follower/following entry for authenticated callers
    """
    id: int
    tweets: List[TweetResponse] = Field(default_factory=list)
    replies: List[ReplyResponse] = Field(default_factory=list)


# ─── user request schemas ────────────────────────────────────────────────

class ChangeUsernameRequest(CamelModel):
    user_name: str = Field(..., min_length=1, max_length=120, description="new username is required.")


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(..., min_length=1, description="old password is required.")
    new_password: str = Field(..., min_length=1, description="new password is required.")


class ChangeBioRequest(CamelModel):
    bio: str = Field(..., min_length=1, description="bio is required.")
