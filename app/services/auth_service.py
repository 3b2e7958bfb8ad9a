import logging
from typing import Tuple

from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.jwt.token_service import IdentityClaim, TokenService
from app.models.user import User
from app.repositories.exceptions import StoreError, StoreErrorKind
from app.repositories.user_repository import UserRepository
from app.schemas.auth_schema import SignInRequest, SignUpRequest
from app.utils.exceptions import DuplicateFieldError, InvalidCredentialsError

logger = logging.getLogger(__name__)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


async def resolve_duplicate_field(
        user_repo: UserRepository,
        user_name: str,
        email: str | None = None,
) -> DuplicateFieldError:
    """
    After a unique violation on user, work out which field collided
    """
    if await user_repo.exists_by_user_name(user_name):
        return DuplicateFieldError("userName")
    if email is not None and await user_repo.exists_by_email(email):
        return DuplicateFieldError("email")
    # the other row went away in the meantime; report the handle
    return DuplicateFieldError("userName")


class AuthService:
    """
    Authentication service
    - sign-up and sign-in, both ending with a fresh session token
    """
    def __init__(self, db: AsyncSession, token_service: TokenService):
        self.db = db
        self.user_repo = UserRepository(db)
        self.token_service = token_service

    def issue_token(self, user: User) -> str:
        return self.token_service.issue(
            IdentityClaim(uid=user.id, username=user.user_name)
        )

    async def sign_up(self, data: SignUpRequest) -> Tuple[User, str]:
        """
        1) hash the password
        2) insert the user; a unique violation names the taken field
        3) commit and issue the session token
        Raises:
            DuplicateFieldError: userName or email already exists
        """
        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            user_name=data.user_name,
            email=data.email,
            password=hash_password(data.password),
            birthday=data.birthday,
            bio=data.bio,
        )

        try:
            await self.user_repo.create(user)
            await self.user_repo.commit()
        except StoreError as e:
            if e.kind is not StoreErrorKind.UNIQUE_VIOLATION:
                raise
            error = await resolve_duplicate_field(self.user_repo, data.user_name, data.email)
            logger.info("Sign-up rejected: %s already exists", error.field)
            raise error

        logger.info("User signed up: id=%s", user.id)
        return user, self.issue_token(user)

    async def sign_in(self, data: SignInRequest) -> Tuple[User, str]:
        """
        userName (preferred) or email + password
        Raises:
            InvalidCredentialsError: unknown user or wrong password, same message
        """
        if data.user_name:
            user = await self.user_repo.find_by_user_name(data.user_name)
        else:
            user = await self.user_repo.find_by_email(data.email)

        if user is None:
            # keep the timing of a real hash check
            pwd_context.dummy_verify()
            logger.warning("Sign-in failed: unknown account")
            raise InvalidCredentialsError()
        if not verify_password(data.password, user.password):
            logger.warning("Sign-in failed: bad password for id=%s", user.id)
            raise InvalidCredentialsError()

        logger.info("User signed in: id=%s", user.id)
        return user, self.issue_token(user)
