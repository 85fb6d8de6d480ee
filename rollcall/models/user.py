"""ORM model for application accounts (auth and the single-admin rule)."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    String,
    text,
)

from rollcall.models.base import Base, TimestampMixin

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"
ROLE_OTHER = "OTHER"
ROLES = (ROLE_ADMIN, ROLE_USER, ROLE_OTHER)

USERNAME_MAX_LEN = 255
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 320

# Index names are matched when translating IntegrityError into a field.
UQ_USERNAME = "ix_users_username"
UQ_EMAIL = "ix_users_email"
UQ_SINGLE_ADMIN = "uq_users_single_admin"

_ADMIN_ONLY = text(f"role = '{ROLE_ADMIN}'")


class User(TimestampMixin, Base):
    """
    Account used for login and token issuance.

    username and email are unique; at most one row may have role 'ADMIN'
    (partial unique index, so concurrent inserts cannot both succeed).
    email is stored lower-cased.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('ADMIN', 'USER', 'OTHER')",
            name="ck_users_role",
        ),
        Index(
            UQ_SINGLE_ADMIN,
            "role",
            unique=True,
            postgresql_where=_ADMIN_ONLY,
            sqlite_where=_ADMIN_ONLY,
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(USERNAME_MAX_LEN), nullable=False, unique=True, index=True)
    name = Column(String(NAME_MAX_LEN), nullable=False)
    email = Column(String(EMAIL_MAX_LEN), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_USER)
