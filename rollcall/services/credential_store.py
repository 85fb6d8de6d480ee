"""Account persistence. Uniqueness is enforced by database indexes, not by lookups here."""

import logging
import re

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rollcall.models.user import (
    ROLE_ADMIN,
    UQ_EMAIL,
    UQ_SINGLE_ADMIN,
    UQ_USERNAME,
    User,
)

logger = logging.getLogger(__name__)


class DuplicateAccountError(Exception):
    """Raised when an insert hits a unique index. field is 'username', 'email' or 'role'."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"duplicate account {field}")


_CONSTRAINT_FIELDS = {
    UQ_SINGLE_ADMIN: "role",
    UQ_EMAIL: "email",
    UQ_USERNAME: "username",
}
_SQLITE_UNIQUE_RE = re.compile(r"^UNIQUE constraint failed: (?P<columns>[\w.]+(?:, [\w.]+)*)$")
_SQLITE_UNIQUE_INDEX_RE = re.compile(r"^UNIQUE constraint failed: index '(?P<index>\w+)'$")
_SQLITE_COLUMN_FIELDS = {
    "users.role": "role",
    "users.email": "email",
    "users.username": "username",
}


def _duplicate_field(error: IntegrityError) -> str | None:
    """
    Map a unique-index violation to the account field it protects.

    Postgres drivers report the violated index in diag.constraint_name. SQLite
    has no diagnostics, so its fixed "UNIQUE constraint failed: table.column"
    message is parsed instead; row values never appear in it.
    """
    diag = getattr(error.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return _CONSTRAINT_FIELDS.get(constraint)
    detail = str(error.orig).strip()
    index_match = _SQLITE_UNIQUE_INDEX_RE.match(detail)
    if index_match is not None:
        return _CONSTRAINT_FIELDS.get(index_match.group("index"))
    match = _SQLITE_UNIQUE_RE.match(detail)
    if match is None:
        return None
    for column in match.group("columns").split(", "):
        if column in _SQLITE_COLUMN_FIELDS:
            return _SQLITE_COLUMN_FIELDS[column]
    return None


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_by_username_or_email(db: Session, username: str, email: str) -> User | None:
    return (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )


def admin_exists(db: Session) -> bool:
    return db.query(User.id).filter(User.role == ROLE_ADMIN).first() is not None


def insert_account(db: Session, account: User) -> User:
    """
    Insert and commit a new account; return it refreshed with id and timestamps.

    Raises DuplicateAccountError when a unique index rejects the row. The
    session is rolled back in that case, so no partial record is left.
    """
    db.add(account)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        field = _duplicate_field(e)
        if field is None:
            raise
        logger.info("Insert rejected by unique index on %s", field)
        raise DuplicateAccountError(field) from e
    db.refresh(account)
    return account
