"""ORM model for student records served behind the request gate."""

from sqlalchemy import CheckConstraint, Column, Integer, String

from rollcall.models.base import Base, TimestampMixin

GENDERS = ("Male", "Female", "Other")


class Student(TimestampMixin, Base):
    """One student record. email and phone are unique across records."""

    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint(
            "gender IN ('Male', 'Female', 'Other')",
            name="ck_students_gender",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    phone = Column(String(64), nullable=False, unique=True, index=True)
    gender = Column(String(16), nullable=False)
    profile_pic = Column(String(1024), nullable=True)
