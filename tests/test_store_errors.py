"""
Store error classification and repository behaviour

Driver errors are classified by their codes: SQLite extended result codes,
MySQL errno and PostgreSQL SQLSTATE.
"""

from datetime import date

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.schema import CreateTable

from app.main import status_for
from app.models.follow import Follow
from app.models.user import User
from app.repositories.exceptions import (
    StoreError,
    StoreErrorKind,
    classify_integrity_error,
)
from app.repositories.follow_repository import FollowRepository
from app.repositories.user_repository import UserRepository
from app.utils.exceptions import (
    ApiError,
    BadRequestError,
    DuplicateFieldError,
    DuplicateFavoriteError,
    ForbiddenError,
    IncorrectPasswordError,
    InvalidOperationError,
    NoChangeError,
    NotFoundError,
)


class FakeSqliteError(Exception):
    def __init__(self, code: int):
        super().__init__("constraint failed")
        self.sqlite_errorcode = code


class FakePgError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__("violation")
        self.sqlstate = sqlstate


def wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


class TestClassifyIntegrityError:

    @pytest.mark.parametrize("code, kind", [
        (2067, StoreErrorKind.UNIQUE_VIOLATION),
        (1555, StoreErrorKind.UNIQUE_VIOLATION),
        (787, StoreErrorKind.FOREIGN_KEY_VIOLATION),
        (275, StoreErrorKind.CHECK_VIOLATION),
        (1299, StoreErrorKind.UNKNOWN),  # NOT NULL
    ])
    def test_sqlite_codes(self, code, kind):
        assert classify_integrity_error(wrap(FakeSqliteError(code))) is kind

    @pytest.mark.parametrize("errno, kind", [
        (1062, StoreErrorKind.UNIQUE_VIOLATION),
        (1452, StoreErrorKind.FOREIGN_KEY_VIOLATION),
        (1451, StoreErrorKind.FOREIGN_KEY_VIOLATION),
        (3819, StoreErrorKind.CHECK_VIOLATION),
        (1048, StoreErrorKind.UNKNOWN),
    ])
    def test_mysql_errno(self, errno, kind):
        orig = Exception(errno, "Duplicate entry 'ada' for key 'user_name'")
        assert classify_integrity_error(wrap(orig)) is kind

    def test_postgres_sqlstate(self):
        assert classify_integrity_error(wrap(FakePgError("23505"))) is StoreErrorKind.UNIQUE_VIOLATION
        assert classify_integrity_error(wrap(FakePgError("23503"))) is StoreErrorKind.FOREIGN_KEY_VIOLATION

    def test_message_text_is_ignored(self):
        orig = Exception("UNIQUE constraint failed: user.user_name")
        assert classify_integrity_error(wrap(orig)) is StoreErrorKind.UNKNOWN


def make_user(name: str) -> User:
    return User(
        first_name="Ada", last_name="Lovelace", user_name=name,
        email=f"{name}@example.com", password="x", birthday=date(1990, 1, 1), bio="hi",
    )


class TestRepositoriesOnSqlite:
    """Real constraint violations from the in-memory database"""

    @pytest.mark.asyncio
    async def test_duplicate_user_name_is_unique_violation(self, db_session):
        repo = UserRepository(db_session)
        await repo.create(make_user("ada"))
        await repo.commit()

        clash = make_user("ada")
        clash.email = "other@example.com"
        with pytest.raises(StoreError) as info:
            await repo.create(clash)
        assert info.value.kind is StoreErrorKind.UNIQUE_VIOLATION

    @pytest.mark.asyncio
    async def test_follow_of_missing_user_is_fk_violation(self, db_session):
        users = UserRepository(db_session)
        ada = await users.create(make_user("ada"))
        await users.commit()

        with pytest.raises(StoreError) as info:
            await FollowRepository(db_session).create(Follow(follower_id=ada.id, following_id=9999))
        assert info.value.kind is StoreErrorKind.FOREIGN_KEY_VIOLATION

    @pytest.mark.asyncio
    async def test_self_follow_is_check_violation(self, db_session):
        users = UserRepository(db_session)
        ada = await users.create(make_user("ada"))
        await users.commit()

        with pytest.raises(StoreError) as info:
            await FollowRepository(db_session).create(Follow(follower_id=ada.id, following_id=ada.id))
        assert info.value.kind is StoreErrorKind.CHECK_VIOLATION

    @pytest.mark.asyncio
    async def test_delete_missing_follow_is_not_found(self, db_session):
        with pytest.raises(StoreError) as info:
            await FollowRepository(db_session).delete(1, 2)
        assert info.value.kind is StoreErrorKind.NOT_FOUND


class TestFollowTableDdl:
    """CREATE TABLE follow as each supported backend receives it"""

    @staticmethod
    def ddl(dialect) -> str:
        return str(CreateTable(Follow.__table__).compile(dialect=dialect))

    def test_mysql_leaves_self_follow_to_the_service(self):
        ddl = self.ddl(mysql.dialect())
        assert "ck_follow_not_self" not in ddl
        assert "ON DELETE CASCADE" in ddl
        assert "uq_follow_pair" in ddl

    @pytest.mark.parametrize("dialect", [sqlite.dialect(), postgresql.dialect()])
    def test_self_follow_check_where_allowed(self, dialect):
        assert "CONSTRAINT ck_follow_not_self CHECK (follower_id <> following_id)" in self.ddl(dialect)


class TestStatusMapping:

    @pytest.mark.parametrize("exc, status", [
        (BadRequestError("bad"), 400),
        (NoChangeError("same"), 400),
        (InvalidOperationError("self"), 400),
        (IncorrectPasswordError(), 401),
        (ForbiddenError("nope"), 403),
        (NotFoundError(), 404),
        (DuplicateFieldError("email"), 409),
        (DuplicateFavoriteError(), 409),
        (ApiError("plain"), 500),
    ])
    def test_nearest_mapped_base_wins(self, exc, status):
        assert status_for(exc) == status

    def test_duplicate_field_message(self):
        err = DuplicateFieldError("userName")
        assert err.field == "userName"
        assert err.message == "userName already exists!"
