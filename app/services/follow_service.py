import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.jwt.token_service import IdentityClaim
from app.models.follow import Follow
from app.repositories.exceptions import StoreError, StoreErrorKind
from app.repositories.follow_repository import FollowRepository
from app.repositories.user_repository import UserRepository
from app.utils.exceptions import (
    DuplicateFollowError,
    InvalidOperationError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

SELF_FOLLOW_MESSAGE = "You cannot follow/unfollow yourself!"


class FollowService:
    """
    Follow / unfollow in the social graph
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_repo = FollowRepository(db)

    async def follow(self, identity: IdentityClaim, target_id: int) -> Follow:
        """
        1) no self-follow
        2) target must exist
        3) insert the edge; a second insert is a duplicate
        Raises:
            InvalidOperationError, NotFoundError, DuplicateFollowError
        """
        if identity.uid == target_id:
            raise InvalidOperationError(SELF_FOLLOW_MESSAGE)
        if await self.user_repo.find_by_id(target_id) is None:
            raise NotFoundError()

        follow = Follow(follower_id=identity.uid, following_id=target_id)
        try:
            await self.follow_repo.create(follow)
            await self.follow_repo.commit()
        except StoreError as e:
            if e.kind is StoreErrorKind.UNIQUE_VIOLATION:
                raise DuplicateFollowError()
            if e.kind is StoreErrorKind.FOREIGN_KEY_VIOLATION:
                raise NotFoundError()
            if e.kind is StoreErrorKind.CHECK_VIOLATION:
                raise InvalidOperationError(SELF_FOLLOW_MESSAGE)
            raise

        logger.info("User %s followed %s", identity.uid, target_id)
        return follow

    async def unfollow(self, identity: IdentityClaim, target_id: int) -> Follow:
        """
        Raises:
            InvalidOperationError: target is the caller
            NotFoundError: no such edge
        """
        if identity.uid == target_id:
            raise InvalidOperationError(SELF_FOLLOW_MESSAGE)
        try:
            follow = await self.follow_repo.delete(identity.uid, target_id)
            await self.follow_repo.commit()
        except StoreError as e:
            if e.kind is StoreErrorKind.NOT_FOUND:
                raise NotFoundError()
            raise

        logger.info("User %s unfollowed %s", identity.uid, target_id)
        return follow
