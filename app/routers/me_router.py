from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.dependencies import get_current_identity
from app.jwt.token_service import IdentityClaim
from app.schemas.common_schema import DataResponse
from app.schemas.tweet_schema import (
    FavoriteResponse,
    ReplyResponse,
    TweetResponse,
    TweetWithRepliesResponse,
)
from app.schemas.user_schema import (
    ChangeBioRequest,
    ChangePasswordRequest,
    ChangeUsernameRequest,
    GraphUserResponse,
    UserResponse,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/me", tags=["Me"])


@router.get("", response_model=DataResponse[UserResponse])
async def get_me(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserResponse]:
    user = await UserService(db).get_me(identity)
    return DataResponse[UserResponse](data=UserResponse.model_validate(user))


@router.get("/tweets", response_model=DataResponse[List[TweetResponse]])
async def my_tweets(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    tweets = await UserService(db).list_tweets(identity.uid)
    return DataResponse[List[TweetResponse]](
        data=[TweetResponse.model_validate(t) for t in tweets]
    )


@router.get("/replies", response_model=DataResponse[List[ReplyResponse]])
async def my_replies(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    replies = await UserService(db).list_replies(identity.uid)
    return DataResponse[List[ReplyResponse]](
        data=[ReplyResponse.model_validate(r) for r in replies]
    )


@router.get("/tweets-and-replies", response_model=DataResponse[List[TweetWithRepliesResponse]])
async def my_tweets_and_replies(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Own tweets, each with the replies it received
    """
    tweets = await UserService(db).list_tweets_and_replies(identity.uid)
    return DataResponse[List[TweetWithRepliesResponse]](
        data=[TweetWithRepliesResponse.model_validate(t) for t in tweets]
    )


@router.get("/favorites", response_model=DataResponse[List[FavoriteResponse]])
async def my_favorites(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    favorites = await UserService(db).list_favorites(identity.uid)
    return DataResponse[List[FavoriteResponse]](
        data=[FavoriteResponse.model_validate(f) for f in favorites]
    )


@router.get("/followers", response_model=DataResponse[List[GraphUserResponse]])
async def my_followers(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    users = await UserService(db).list_followers(identity.uid, identity)
    return DataResponse[List[GraphUserResponse]](data=users)


@router.get("/following", response_model=DataResponse[List[GraphUserResponse]])
async def my_following(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    users = await UserService(db).list_following(identity.uid, identity)
    return DataResponse[List[GraphUserResponse]](data=users)


# ─── account updates ──────────────────────────────────────────────────────

@router.put("/change-username", response_model=DataResponse[UserResponse])
async def change_username(
    req: ChangeUsernameRequest,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserResponse]:
    user = await UserService(db).change_username(identity, req.user_name)
    return DataResponse[UserResponse](
        data=UserResponse.model_validate(user),
        message="username was updated successfully.",
    )


@router.put("/change-password", response_model=DataResponse[UserResponse])
async def change_password(
    req: ChangePasswordRequest,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserResponse]:
    """
    oldPassword must match; newPassword must differ from it
    """
    user = await UserService(db).change_password(identity, req.old_password, req.new_password)
    return DataResponse[UserResponse](
        data=UserResponse.model_validate(user),
        message="password was updated successfully.",
    )


@router.put("/change-bio", response_model=DataResponse[UserResponse])
async def change_bio(
    req: ChangeBioRequest,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserResponse]:
    user = await UserService(db).change_bio(identity, req.bio)
    return DataResponse[UserResponse](
        data=UserResponse.model_validate(user),
        message="bio was updated successfully.",
    )
