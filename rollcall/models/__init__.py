"""SQLAlchemy ORM models."""

from rollcall.models.base import Base, TimestampMixin
from rollcall.models.student import Student
from rollcall.models.user import User

__all__ = ["Base", "Student", "TimestampMixin", "User"]
