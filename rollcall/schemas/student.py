"""Request/response schemas for student record endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rollcall.schemas.auth import MessageResponse


class StudentCreate(BaseModel):
    """Text fields of POST /students (JSON or form). The route checks them so missing ones give 400."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    gender: str | None = None


class StudentUpdate(StudentCreate):
    """Body of PUT /students/{id}; only non-empty fields are applied."""


class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    gender: str
    profile_pic: str | None = Field(default=None, description="Stored file name, served under /uploads")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StudentResponse(MessageResponse):
    data: StudentOut


class StudentListResponse(MessageResponse):
    count: int = Field(..., ge=0)
    data: list[StudentOut]


class StudentDeleteResponse(MessageResponse):
    deleted_id: int
