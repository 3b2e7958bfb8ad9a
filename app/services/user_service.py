import logging
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.jwt.token_service import IdentityClaim
from app.models.favorite import Favorite
from app.models.reply import Reply
from app.models.tweet import Tweet
from app.models.user import User
from app.repositories.exceptions import StoreError, StoreErrorKind
from app.repositories.user_repository import UserRepository
from app.schemas.user_schema import (
    GraphUserResponse,
    ProfileResponse,
    ReducedProfileResponse,
)
from app.services.auth_service import (
    hash_password,
    resolve_duplicate_field,
    verify_password,
)
from app.utils.exceptions import (
    IncorrectPasswordError,
    NoChangeError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

GraphListing = Union[List[GraphUserResponse], List[ReducedProfileResponse]]


class UserService:
    """
    User profile service
    - own account reads and updates (/me)
    - profile and activity lookups by id (/users/{id})
    - follower / following listings with optional-auth projections
    """
    def __init__(self, db: AsyncSession, follow_preview_limit: int = settings.FOLLOW_PREVIEW_LIMIT):
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_preview_limit = follow_preview_limit

    async def get_me(self, identity: IdentityClaim) -> User:
        """
        Account behind a verified token
        Raises:
            UnauthorizedError if the account no longer exists
        """
        user = await self.user_repo.find_by_id(identity.uid)
        if user is None:
            logger.warning("Token for missing user id=%s", identity.uid)
            raise UnauthorizedError("Not Authorized")
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        return user

    # ─── account updates ──────────────────────────────────────────────────

    async def change_username(self, identity: IdentityClaim, user_name: str) -> User:
        """
        Raises:
            DuplicateFieldError("userName") when the name is taken
        """
        user = await self.get_me(identity)
        try:
            await self.user_repo.update_fields(user, user_name=user_name)
            await self.user_repo.commit()
        except StoreError as e:
            if e.kind is not StoreErrorKind.UNIQUE_VIOLATION:
                raise
            raise await resolve_duplicate_field(self.user_repo, user_name)
        logger.info("Username changed: id=%s", user.id)
        return user

    async def change_password(self, identity: IdentityClaim, old_password: str, new_password: str) -> User:
        """
        1) old password must match
        2) new password must differ from the old one
        3) store the new hash
        Raises:
            IncorrectPasswordError, NoChangeError
        """
        user = await self.get_me(identity)
        if not verify_password(old_password, user.password):
            logger.warning("Password change rejected: bad old password for id=%s", user.id)
            raise IncorrectPasswordError()
        if new_password == old_password:
            raise NoChangeError("New password must be different from Old password!")

        await self.user_repo.update_fields(user, password=hash_password(new_password))
        await self.user_repo.commit()
        logger.info("Password changed: id=%s", user.id)
        return user

    async def change_bio(self, identity: IdentityClaim, bio: str) -> User:
        user = await self.get_me(identity)
        await self.user_repo.update_fields(user, bio=bio)
        await self.user_repo.commit()
        return user

    # ─── profile and activity ─────────────────────────────────────────────

    async def get_profile(
            self,
            user_id: int,
            identity: Optional[IdentityClaim],
    ) -> Union[ProfileResponse, ReducedProfileResponse]:
        """
        Profile by id
        - authenticated caller: every profile field except id/password/timestamps
        - anonymous caller: userName and bio only
        """
        user = await self.get_user(user_id)
        if identity is None:
            return ReducedProfileResponse.model_validate(user)
        return ProfileResponse.model_validate(user)

    async def list_tweets(self, user_id: int) -> List[Tweet]:
        await self.get_user(user_id)
        return await self.user_repo.list_tweets(user_id)

    async def list_replies(self, user_id: int) -> List[Reply]:
        await self.get_user(user_id)
        return await self.user_repo.list_replies(user_id)

    async def list_tweets_and_replies(self, user_id: int) -> List[Tweet]:
        await self.get_user(user_id)
        return await self.user_repo.list_tweets_with_replies(user_id)

    async def list_favorites(self, user_id: int) -> List[Favorite]:
        await self.get_user(user_id)
        return await self.user_repo.list_favorites(user_id)

    # ─── social graph listings ────────────────────────────────────────────

    async def list_followers(self, user_id: int, identity: Optional[IdentityClaim]) -> GraphListing:
        """
        Followers of user_id
        - authenticated: full projection with tweets and replies
        - anonymous: first FOLLOW_PREVIEW_LIMIT, userName and bio only
        """
        await self.get_user(user_id)
        if identity is None:
            users = await self.user_repo.list_followers(
                user_id, limit=self.follow_preview_limit, with_activity=False
            )
            return [ReducedProfileResponse.model_validate(u) for u in users]
        users = await self.user_repo.list_followers(user_id)
        return [GraphUserResponse.model_validate(u) for u in users]

    async def list_following(self, user_id: int, identity: Optional[IdentityClaim]) -> GraphListing:
        """
        Users followed by user_id, same projections as list_followers
        """
        await self.get_user(user_id)
        if identity is None:
            users = await self.user_repo.list_following(
                user_id, limit=self.follow_preview_limit, with_activity=False
            )
            return [ReducedProfileResponse.model_validate(u) for u in users]
        users = await self.user_repo.list_following(user_id)
        return [GraphUserResponse.model_validate(u) for u in users]
