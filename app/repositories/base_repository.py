import logging
from abc import ABC

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.exceptions import (
    DatabaseCommitError,
    RepositoryError,
    StoreError,
    classify_integrity_error,
)

logger = logging.getLogger(__name__)


class BaseRepository(ABC):
    """Repository base class"""

    entity_name = "entity"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        """Commit the transaction; constraint failures become StoreError"""
        try:
            await self.session.commit()
            logger.debug("DB commit ok")
        except IntegrityError as e:
            await self.session.rollback()
            raise StoreError(classify_integrity_error(e), self.entity_name)
        except SQLAlchemyError as e:
            logger.error(f"DB commit failed: {e}")
            await self.session.rollback()
            raise DatabaseCommitError(f"DB commit failed: {e}")

    async def rollback(self) -> None:
        """Roll the transaction back"""
        try:
            await self.session.rollback()
            logger.debug("DB rollback done")
        except SQLAlchemyError as e:
            logger.error(f"DB rollback failed: {e}")
            raise RepositoryError(f"DB rollback failed: {e}")

    async def _flush(self) -> None:
        """
        Push pending changes so constraint violations surface here
        - on IntegrityError the session is rolled back and a StoreError raised
        """
        try:
            await self.session.flush()
        except IntegrityError as e:
            kind = classify_integrity_error(e)
            logger.info("%s rejected by store: %s", self.entity_name, kind.value)
            await self.session.rollback()
            raise StoreError(kind, self.entity_name)
