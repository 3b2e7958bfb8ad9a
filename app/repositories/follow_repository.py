from typing import Optional

from sqlalchemy import select

from app.models.user import User  # noqa: F401  (registers the mapper)
from app.models.follow import Follow
from app.repositories.base_repository import BaseRepository
from app.repositories.exceptions import StoreError, StoreErrorKind


class FollowRepository(BaseRepository):
    """
    Social graph edges, unique per (follower_id, following_id)
    """
    entity_name = "follow"

    async def create(self, follow: Follow) -> Follow:
        """
        Raises:
            StoreError(UNIQUE_VIOLATION) when the edge already exists
            StoreError(FOREIGN_KEY_VIOLATION) when either user does not exist
            StoreError(CHECK_VIOLATION) on a self edge
        """
        self.session.add(follow)
        await self._flush()
        return follow

    async def find(self, follower_id: int, following_id: int) -> Optional[Follow]:
        query = select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def delete(self, follower_id: int, following_id: int) -> Follow:
        """
        Remove the edge and return it
        Raises:
            StoreError(NOT_FOUND) when the edge does not exist
        """
        follow = await self.find(follower_id, following_id)
        if follow is None:
            raise StoreError(StoreErrorKind.NOT_FOUND, self.entity_name)
        await self.session.delete(follow)
        await self._flush()
        return follow
