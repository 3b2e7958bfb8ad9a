import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.jwt.token_service import IdentityClaim
from app.models.favorite import Favorite
from app.models.reply import Reply
from app.models.tweet import Tweet
from app.repositories.exceptions import StoreError, StoreErrorKind
from app.repositories.tweet_repository import (
    FavoriteRepository,
    ReplyRepository,
    TweetRepository,
)
from app.schemas.tweet_schema import TimelineReplyResponse, TimelineTweetResponse
from app.utils.exceptions import (
    DuplicateFavoriteError,
    ForbiddenError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class TweetService:
    """
    Tweets and favorites
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.tweet_repo = TweetRepository(db)
        self.favorite_repo = FavoriteRepository(db)

    async def list_timeline(self) -> List[TimelineTweetResponse]:
        """
        Every tweet, newest first, with author names instead of ids
        """
        tweets = await self.tweet_repo.list_timeline()
        return [
            TimelineTweetResponse(
                id=tweet.id,
                username=tweet.user.user_name,
                content=tweet.content,
                replies=[
                    TimelineReplyResponse(id=r.id, username=r.user.user_name, content=r.content)
                    for r in tweet.replies
                ],
            )
            for tweet in tweets
        ]

    async def get_tweet(self, tweet_id: int) -> Tweet:
        tweet = await self.tweet_repo.find_by_id(tweet_id)
        if tweet is None:
            raise NotFoundError()
        return tweet

    async def create_tweet(self, identity: IdentityClaim, content: str) -> Tweet:
        """
        New tweet owned by the caller
        """
        tweet = Tweet(content=content, user_id=identity.uid)
        await self.tweet_repo.create(tweet)
        await self.tweet_repo.commit()
        logger.info("Tweet created: id=%s user=%s", tweet.id, identity.uid)
        return tweet

    async def delete_tweet(self, identity: IdentityClaim, tweet_id: int) -> Tweet:
        """
        1) tweet must exist
        2) caller must own it
        3) delete (replies and favorites cascade)
        Raises:
            NotFoundError, ForbiddenError
        """
        tweet = await self.get_tweet(tweet_id)
        if tweet.user_id != identity.uid:
            logger.warning("User %s tried to delete tweet %s", identity.uid, tweet_id)
            raise ForbiddenError("You don't own this tweet.")

        await self.tweet_repo.delete(tweet)
        await self.tweet_repo.commit()
        logger.info("Tweet deleted: id=%s", tweet_id)
        return tweet

    async def favorite(self, identity: IdentityClaim, tweet_id: int) -> Favorite:
        """
        Favorite a tweet once
        Raises:
            NotFoundError: tweet does not exist
            DuplicateFavoriteError: already favorited
        """
        await self.get_tweet(tweet_id)
        favorite = Favorite(user_id=identity.uid, tweet_id=tweet_id)
        try:
            await self.favorite_repo.create(favorite)
            await self.favorite_repo.commit()
        except StoreError as e:
            if e.kind is StoreErrorKind.UNIQUE_VIOLATION:
                raise DuplicateFavoriteError()
            if e.kind is StoreErrorKind.FOREIGN_KEY_VIOLATION:
                # tweet deleted between the lookup and the insert
                raise NotFoundError()
            raise

        await self.db.refresh(favorite, attribute_names=["tweet"])
        return favorite

    async def unfavorite(self, identity: IdentityClaim, tweet_id: int) -> Favorite:
        """
        Raises:
            NotFoundError: no favorite for (caller, tweet)
        """
        try:
            favorite = await self.favorite_repo.delete(identity.uid, tweet_id)
            await self.favorite_repo.commit()
        except StoreError as e:
            if e.kind is StoreErrorKind.NOT_FOUND:
                raise NotFoundError()
            raise
        return favorite


class ReplyService:
    """
    Replies to tweets
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.tweet_repo = TweetRepository(db)
        self.reply_repo = ReplyRepository(db)

    async def create_reply(self, identity: IdentityClaim, tweet_id: int, content: str) -> Reply:
        """
        Raises:
            NotFoundError: tweet does not exist
        """
        if await self.tweet_repo.find_by_id(tweet_id) is None:
            raise NotFoundError("selected tweet was not found!")

        reply = Reply(content=content, user_id=identity.uid, tweet_id=tweet_id)
        try:
            await self.reply_repo.create(reply)
            await self.reply_repo.commit()
        except StoreError as e:
            if e.kind is StoreErrorKind.FOREIGN_KEY_VIOLATION:
                raise NotFoundError("selected tweet was not found!")
            raise
        return reply
