"""Account registration and login."""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.core.errors import (
    Conflict,
    Forbidden,
    InternalError,
    InvalidCredentials,
    ValidationError,
)
from rollcall.core.security import PASSWORD_MAX_LEN, hash_password, verify_password
from rollcall.core.tokens import TokenService
from rollcall.models.user import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    ROLE_ADMIN,
    ROLE_USER,
    ROLES,
    USERNAME_MAX_LEN,
    User,
)
from rollcall.schemas.auth import TokenClaims
from rollcall.services import credential_store
from rollcall.services.credential_store import DuplicateAccountError

logger = logging.getLogger(__name__)

# One @, something on both sides, a dot in the domain.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DUPLICATE_ACCOUNT_MESSAGE = "User with this email or username already exists."
ADMIN_EXISTS_MESSAGE = "An ADMIN user already exists. Only one ADMIN is allowed."


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def normalize_email(email: str) -> str:
    return email.strip().lower()


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("rollcall-unknown-account")


def _require(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationError("All required fields must be filled.")
    return value


def _check_length(label: str, value: str, max_len: int) -> None:
    if len(value) > max_len:
        raise ValidationError(f"{label} must be at most {max_len} characters.")


def register_account(
    db: Session,
    username: str | None,
    name: str | None,
    email: str | None,
    password: str | None,
    role: str | None = None,
) -> User:
    """
    Create an account and return it.

    Raises ValidationError for missing or malformed input, Conflict when the
    username or email is taken and Forbidden when a second ADMIN is requested.
    The lookups below only produce early, friendly errors; the unique indexes
    decide when two registrations race.
    """
    username = _require(username).strip()
    name = _require(name).strip()
    email = normalize_email(_require(email))
    password = _require(password)
    role = (role or ROLE_USER).strip().upper() or ROLE_USER

    if role not in ROLES:
        raise ValidationError(f"role must be one of {', '.join(ROLES)}.")
    if not _EMAIL_RE.match(email):
        raise ValidationError("email must be a valid email address.")
    _check_length("username", username, USERNAME_MAX_LEN)
    _check_length("name", name, NAME_MAX_LEN)
    _check_length("email", email, EMAIL_MAX_LEN)
    _check_length("password", password, PASSWORD_MAX_LEN)

    try:
        if credential_store.find_by_username_or_email(db, username, email) is not None:
            logger.info("Registration rejected: duplicate username or email (username=%s)", username)
            raise Conflict(DUPLICATE_ACCOUNT_MESSAGE)
        if role == ROLE_ADMIN and credential_store.admin_exists(db):
            logger.warning("Registration rejected: ADMIN already exists (username=%s)", username)
            raise Forbidden(ADMIN_EXISTS_MESSAGE)

        # Hash before insert so a hashing failure leaves no row behind.
        account = User(
            username=username,
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )

        account = credential_store.insert_account(db, account)
    except DuplicateAccountError as e:
        if e.field == "role":
            logger.warning("Concurrent ADMIN registration lost the race (username=%s)", username)
            raise Forbidden(ADMIN_EXISTS_MESSAGE) from e
        logger.info("Concurrent registration lost the race on %s (username=%s)", e.field, username)
        raise Conflict(DUPLICATE_ACCOUNT_MESSAGE) from e
    except SQLAlchemyError as e:
        logger.exception("Registration failed in storage (username=%s)", username)
        raise InternalError() from e

    logger.info("Registered account id=%s username=%s role=%s", account.id, account.username, account.role)
    return account


def authenticate(
    db: Session,
    tokens: TokenService,
    email: str | None,
    password: str | None,
) -> LoginResult:
    """
    Check email and password and issue a session token.

    Both "no such email" and "wrong password" raise the same InvalidCredentials;
    only the log says which one it was.
    """
    if not email or not email.strip() or not password or not password.strip():
        raise ValidationError("Email and password are required.")

    try:
        user = credential_store.find_by_email(db, normalize_email(email))
    except SQLAlchemyError as e:
        logger.exception("Login lookup failed in storage")
        raise InternalError() from e

    if user is None:
        # Unknown emails still pay for one bcrypt check.
        verify_password(password, _dummy_hash())
        logger.info("Login failed: email not found")
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: incorrect password for user id=%s", user.id)
        raise InvalidCredentials()

    token = tokens.issue(TokenClaims.model_validate(user))
    logger.info("Login succeeded for user id=%s", user.id)
    return LoginResult(token=token, user=user)
