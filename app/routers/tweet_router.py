from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.dependencies import get_current_identity
from app.jwt.token_service import IdentityClaim
from app.schemas.common_schema import DataResponse
from app.schemas.tweet_schema import (
    FavoriteResponse,
    TimelineTweetResponse,
    TweetCreateRequest,
    TweetResponse,
)
from app.services.tweet_service import TweetService

router = APIRouter(prefix="/tweets", tags=["Tweets"])


@router.get("", response_model=DataResponse[List[TimelineTweetResponse]])
async def timeline(
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    """
    All tweets, newest first, with their replies
    """
    tweets = await TweetService(db).list_timeline()
    return DataResponse[List[TimelineTweetResponse]](data=tweets)


@router.post("", response_model=DataResponse[TweetResponse])
async def create_tweet(
    req: TweetCreateRequest,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    tweet = await TweetService(db).create_tweet(identity, req.content)
    return DataResponse[TweetResponse](data=TweetResponse.model_validate(tweet))


@router.delete("/{tweet_id}", response_model=DataResponse[TweetResponse])
async def delete_tweet(
    tweet_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Owner only; replies and favorites of the tweet are removed too
    """
    tweet = await TweetService(db).delete_tweet(identity, tweet_id)
    return DataResponse[TweetResponse](
        data=TweetResponse.model_validate(tweet),
        message="tweet was deleted successfully!",
    )


# ─── favorites ────────────────────────────────────────────────────────────

@router.post("/{tweet_id}/favorites", response_model=DataResponse[FavoriteResponse])
async def favorite_tweet(
    tweet_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    favorite = await TweetService(db).favorite(identity, tweet_id)
    return DataResponse[FavoriteResponse](
        data=FavoriteResponse.model_validate(favorite),
        message="Tweet was successfully added to favorites!",
    )


@router.delete("/{tweet_id}/favorites", response_model=DataResponse[FavoriteResponse])
async def unfavorite_tweet(
    tweet_id: int,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    favorite = await TweetService(db).unfavorite(identity, tweet_id)
    return DataResponse[FavoriteResponse](
        data=FavoriteResponse.model_validate(favorite),
        message="Tweet was successfully removed from favorites!",
    )
