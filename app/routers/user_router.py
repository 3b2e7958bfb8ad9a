from typing import List, Optional, Union

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.dependencies import get_current_identity, get_optional_identity
from app.jwt.token_service import IdentityClaim
from app.schemas.common_schema import DataResponse
from app.schemas.tweet_schema import (
    FavoriteDetailResponse,
    FollowResponse,
    ReplyResponse,
    TweetResponse,
)
from app.schemas.user_schema import (
    GraphUserResponse,
    ProfileResponse,
    ReducedProfileResponse,
)
from app.services.follow_service import FollowService
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

# full projection first so authenticated payloads keep every field
ProfilePayload = Union[ProfileResponse, ReducedProfileResponse]
GraphPayload = Union[List[GraphUserResponse], List[ReducedProfileResponse]]


@router.get("/{user_id}", response_model=DataResponse[ProfilePayload])
async def get_profile(
    user_id: int,
    identity: Optional[IdentityClaim] = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Profile by id
    - signed in: every field except id, password and timestamps
    - anonymous: userName and bio
    """
    profile = await UserService(db).get_profile(user_id, identity)
    return DataResponse[ProfilePayload](data=profile)


@router.get("/{user_id}/tweets", response_model=DataResponse[List[TweetResponse]])
async def user_tweets(
    user_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    tweets = await UserService(db).list_tweets(user_id)
    return DataResponse[List[TweetResponse]](
        data=[TweetResponse.model_validate(t) for t in tweets]
    )


@router.get("/{user_id}/replies", response_model=DataResponse[List[ReplyResponse]])
async def user_replies(
    user_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    replies = await UserService(db).list_replies(user_id)
    return DataResponse[List[ReplyResponse]](
        data=[ReplyResponse.model_validate(r) for r in replies]
    )


@router.get("/{user_id}/favorites", response_model=DataResponse[List[FavoriteDetailResponse]])
async def user_favorites(
    user_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Favorites of user_id, each with the whole favorited tweet
    """
    favorites = await UserService(db).list_favorites(user_id)
    return DataResponse[List[FavoriteDetailResponse]](
        data=[FavoriteDetailResponse.model_validate(f) for f in favorites]
    )


@router.get("/{user_id}/followers", response_model=DataResponse[GraphPayload])
async def user_followers(
    user_id: int,
    identity: Optional[IdentityClaim] = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db_session),
):
    """
    - signed in: every follower with id, tweets and replies
    - anonymous: the newest followers only, userName and bio
    """
    users = await UserService(db).list_followers(user_id, identity)
    return DataResponse[GraphPayload](data=users)


@router.get("/{user_id}/following", response_model=DataResponse[GraphPayload])
async def user_following(
    user_id: int,
    identity: Optional[IdentityClaim] = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db_session),
):
    users = await UserService(db).list_following(user_id, identity)
    return DataResponse[GraphPayload](data=users)


# ─── follow / unfollow ─────────────────────────────────────────────────────

@router.post("/{user_id}/follow", response_model=DataResponse[FollowResponse])
async def follow_user(
    user_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    follow = await FollowService(db).follow(identity, user_id)
    return DataResponse[FollowResponse](
        data=FollowResponse.model_validate(follow),
        message="User was followed successfully!",
    )


@router.delete("/{user_id}/follow", response_model=DataResponse[FollowResponse])
async def unfollow_user(
    user_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    follow = await FollowService(db).unfollow(identity, user_id)
    return DataResponse[FollowResponse](
        data=FollowResponse.model_validate(follow),
        message="User was unfollowed successfully!",
    )
