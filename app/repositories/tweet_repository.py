import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.user import User  # noqa: F401  (registers the mapper)
from app.models.tweet import Tweet
from app.models.reply import Reply
from app.models.favorite import Favorite
from app.models.follow import Follow  # noqa: F401  (registers the mapper)
from app.repositories.base_repository import BaseRepository
from app.repositories.exceptions import StoreError, StoreErrorKind

logger = logging.getLogger(__name__)


# ==================== query builder ====================
class TweetQueryBuilder:
    """Tweet query builder"""

    @staticmethod
    def timeline_query():
        """All tweets with author and replies (with their authors), newest first"""
        return (
            select(Tweet)
            .options(
                selectinload(Tweet.user),
                selectinload(Tweet.replies).selectinload(Reply.user),
            )
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
        )


# ==================== Tweet ====================
class TweetRepository(BaseRepository):
    """Tweet data access"""

    entity_name = "tweet"

    async def create(self, tweet: Tweet) -> Tweet:
        self.session.add(tweet)
        await self._flush()
        return tweet

    async def find_by_id(self, tweet_id: int) -> Optional[Tweet]:
        return await self.session.get(Tweet, tweet_id)

    async def delete(self, tweet: Tweet) -> None:
        """
        Delete a tweet; replies and favorites go with it (ON DELETE CASCADE)
        """
        await self.session.delete(tweet)
        await self._flush()

    async def list_timeline(self) -> List[Tweet]:
        result = await self.session.execute(TweetQueryBuilder.timeline_query())
        tweets = list(result.scalars().all())
        logger.debug(f"timeline loaded: count={len(tweets)}")
        return tweets


# ==================== Reply ====================
class ReplyRepository(BaseRepository):
    """Reply data access"""

    entity_name = "reply"

    async def create(self, reply: Reply) -> Reply:
        """
        Raises:
            StoreError(FOREIGN_KEY_VIOLATION) when the tweet does not exist
        """
        self.session.add(reply)
        await self._flush()
        return reply


# ==================== Favorite ====================
class FavoriteRepository(BaseRepository):
    """Favorite data access, unique per (user_id, tweet_id)"""

    entity_name = "favorite"

    async def create(self, favorite: Favorite) -> Favorite:
        """
        Raises:
            StoreError(UNIQUE_VIOLATION) on a second favorite of the same pair
        """
        self.session.add(favorite)
        await self._flush()
        return favorite

    async def find(self, user_id: int, tweet_id: int) -> Optional[Favorite]:
        query = select(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.tweet_id == tweet_id,
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def delete(self, user_id: int, tweet_id: int) -> Favorite:
        """
        Remove the (user_id, tweet_id) favorite and return it
        Raises:
            StoreError(NOT_FOUND) when no such favorite exists
        """
        favorite = await self.find(user_id, tweet_id)
        if favorite is None:
            raise StoreError(StoreErrorKind.NOT_FOUND, self.entity_name)
        await self.session.delete(favorite)
        await self._flush()
        return favorite
