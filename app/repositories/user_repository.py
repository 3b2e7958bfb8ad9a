from typing import Any, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.user import User
from app.models.tweet import Tweet
from app.models.reply import Reply
from app.models.favorite import Favorite
from app.models.follow import Follow
from app.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """
    Data access for User and the user-centred listings
    - profile lookups, credential lookups, own tweets/replies/favorites,
      followers and following
    """
    entity_name = "user"

    async def create(self, user: User) -> User:
        """
        Insert a new User
        Raises:
            StoreError(UNIQUE_VIOLATION) when user_name or email is taken
        """
        self.session.add(user)
        await self._flush()
        return user

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def find_by_user_name(self, user_name: str) -> Optional[User]:
        query = select(User).where(User.user_name == user_name)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        User whose e-mail matches exactly
        """
        query = select(User).where(User.email == email)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists_by_user_name(self, user_name: str) -> bool:
        query = select(User.id).where(User.user_name == user_name)
        result = await self.session.execute(query)
        return result.first() is not None

    async def exists_by_email(self, email: str) -> bool:
        query = select(User.id).where(User.email == email)
        result = await self.session.execute(query)
        return result.first() is not None

    async def update_fields(self, user: User, **fields: Any) -> User:
        """
        Set the given attributes and flush
        Raises:
            StoreError(UNIQUE_VIOLATION) when the new user_name is taken
        """
        for name, value in fields.items():
            setattr(user, name, value)
        await self._flush()
        return user

    # ─── listings (newest first) ──────────────────────────────────────────

    async def list_tweets(self, user_id: int) -> List[Tweet]:
        query = (
            select(Tweet)
            .where(Tweet.user_id == user_id)
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_tweets_with_replies(self, user_id: int) -> List[Tweet]:
        """
        Own tweets with the replies they received, both newest first
        """
        query = (
            select(Tweet)
            .where(Tweet.user_id == user_id)
            .options(selectinload(Tweet.replies))
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_replies(self, user_id: int) -> List[Reply]:
        query = (
            select(Reply)
            .where(Reply.user_id == user_id)
            .order_by(Reply.created_at.desc(), Reply.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_favorites(self, user_id: int) -> List[Favorite]:
        """
        Favorites of a user joined to the favorited tweet
        """
        query = (
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .options(selectinload(Favorite.tweet))
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_followers(
            self,
            user_id: int,
            limit: Optional[int] = None,
            with_activity: bool = True,
    ) -> List[User]:
        """
        Users following user_id, most recent edge first
        - with_activity: also load each follower's tweets and replies
        """
        query = (
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return await self._list_graph_users(query, limit, with_activity)

    async def list_following(
            self,
            user_id: int,
            limit: Optional[int] = None,
            with_activity: bool = True,
    ) -> List[User]:
        """
        Users followed by user_id, most recent edge first
        """
        query = (
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return await self._list_graph_users(query, limit, with_activity)

    async def _list_graph_users(self, query, limit: Optional[int], with_activity: bool) -> List[User]:
        if with_activity:
            query = query.options(selectinload(User.tweets), selectinload(User.replies))
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())
