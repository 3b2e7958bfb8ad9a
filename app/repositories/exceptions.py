"""
Repository layer exceptions

The store adapter reports failed mutations as a StoreError carrying a
StoreErrorKind. Services map kinds to API errors; nothing above this layer
looks at driver exceptions or their messages.
"""

import enum
from typing import Optional

from sqlalchemy.exc import IntegrityError


class StoreErrorKind(str, enum.Enum):
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    CHECK_VIOLATION = "check_violation"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """Repository base exception"""
    pass


class DatabaseCommitError(RepositoryError):
    """Commit failed for a reason other than a constraint"""
    pass


class StoreError(RepositoryError):
    """A mutation rejected by the store"""
    def __init__(self, kind: StoreErrorKind, entity: str, detail: Optional[str] = None):
        self.kind = kind
        self.entity = entity
        super().__init__(f"{entity}: {kind.value}" + (f" ({detail})" if detail else ""))


# SQLite extended result codes
_SQLITE_CODES = {
    2067: StoreErrorKind.UNIQUE_VIOLATION,       # SQLITE_CONSTRAINT_UNIQUE
    1555: StoreErrorKind.UNIQUE_VIOLATION,       # SQLITE_CONSTRAINT_PRIMARYKEY
    787: StoreErrorKind.FOREIGN_KEY_VIOLATION,   # SQLITE_CONSTRAINT_FOREIGNKEY
    275: StoreErrorKind.CHECK_VIOLATION,         # SQLITE_CONSTRAINT_CHECK
}

# MySQL server errno
_MYSQL_CODES = {
    1062: StoreErrorKind.UNIQUE_VIOLATION,       # ER_DUP_ENTRY
    1451: StoreErrorKind.FOREIGN_KEY_VIOLATION,  # ER_ROW_IS_REFERENCED_2
    1452: StoreErrorKind.FOREIGN_KEY_VIOLATION,  # ER_NO_REFERENCED_ROW_2
    3819: StoreErrorKind.CHECK_VIOLATION,        # ER_CHECK_CONSTRAINT_VIOLATED
}

# PostgreSQL SQLSTATE
_SQLSTATE_CODES = {
    "23505": StoreErrorKind.UNIQUE_VIOLATION,
    "23503": StoreErrorKind.FOREIGN_KEY_VIOLATION,
    "23514": StoreErrorKind.CHECK_VIOLATION,
}


def classify_integrity_error(exc: IntegrityError) -> StoreErrorKind:
    """
    Map a driver IntegrityError to a StoreErrorKind using its error code
    - async adapters may wrap the driver exception; its __cause__ is checked too
    """
    for orig in (exc.orig, getattr(exc.orig, "__cause__", None)):
        if orig is not None:
            kind = _classify_driver_error(orig)
            if kind is not StoreErrorKind.UNKNOWN:
                return kind
    return StoreErrorKind.UNKNOWN


def _classify_driver_error(orig: BaseException) -> StoreErrorKind:
    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    if sqlite_code is not None:
        return _SQLITE_CODES.get(sqlite_code, StoreErrorKind.UNKNOWN)

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return _SQLSTATE_CODES.get(sqlstate, StoreErrorKind.UNKNOWN)

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return _MYSQL_CODES.get(args[0], StoreErrorKind.UNKNOWN)

    return StoreErrorKind.UNKNOWN
