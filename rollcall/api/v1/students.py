"""Student record endpoints. Mounted behind the request gate."""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rollcall.api.gate import CurrentIdentity
from rollcall.core.database import get_db
from rollcall.core.errors import (
    Conflict,
    NotFound,
    UnsupportedMediaType,
    UploadError,
    ValidationError,
)
from rollcall.models import Student
from rollcall.models.student import GENDERS
from rollcall.schemas.student import (
    StudentCreate,
    StudentDeleteResponse,
    StudentListResponse,
    StudentOut,
    StudentResponse,
    StudentUpdate,
)
from rollcall.services.uploads import (
    PROFILE_PIC_FIELD,
    is_upload_file,
    remove_profile_pic,
    save_profile_pic,
)

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("first_name", "last_name", "email", "phone", "gender")
DUPLICATE_STUDENT_MESSAGE = "Student with this email or phone already exists."
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _validate(schema: type[StudentCreate], raw: dict[str, Any]) -> StudentCreate:
    try:
        return schema.model_validate(raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(f"{location}: {first['msg']}" if location else first["msg"]) from e


async def _read_student_body(
    request: Request, schema: type[StudentCreate]
) -> tuple[StudentCreate, UploadFile | None]:
    """
    Read a JSON or multipart body into the schema plus the optional profile_pic upload.

    A file under any other field name, or a second file, is an upload error.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            raw = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError("Request body must be valid JSON.") from e
        if not isinstance(raw, dict):
            raise ValidationError("Request body must be a JSON object.")
        return _validate(schema, raw), None
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        fields: dict[str, Any] = {}
        upload: UploadFile | None = None
        for key, value in form.multi_items():
            if not is_upload_file(value):
                fields[key] = value
            elif key != PROFILE_PIC_FIELD or upload is not None:
                raise UploadError("Too many files uploaded or unexpected field name.")
            else:
                upload = value
        return _validate(schema, fields), upload
    if not await request.body():
        return schema(), None
    raise UnsupportedMediaType()


def _clean(body: StudentCreate) -> dict[str, str]:
    """Return the non-empty, trimmed fields of a request body."""
    values: dict[str, str] = {}
    for key, value in body.model_dump().items():
        if value is not None and value.strip():
            values[key] = value.strip()
    if "email" in values:
        values["email"] = values["email"].lower()
    if "gender" in values and values["gender"] not in GENDERS:
        raise ValidationError(f"gender must be one of {', '.join(GENDERS)}.")
    return values


def _get_or_404(db: Session, student_id: int) -> Student:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Student not found.")
    return student


def _ensure_unique(db: Session, values: dict[str, str], exclude_id: int | None = None) -> None:
    conditions = [
        getattr(Student, field) == values[field]
        for field in ("email", "phone")
        if field in values
    ]
    if not conditions:
        return
    query = db.query(Student.id).filter(or_(*conditions))
    if exclude_id is not None:
        query = query.filter(Student.id != exclude_id)
    if query.first() is not None:
        raise Conflict(DUPLICATE_STUDENT_MESSAGE)


def _commit(db: Session, stored_pic: str | None = None) -> None:
    """Commit; on a uniqueness race, roll back and drop the picture stored for this request."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        remove_profile_pic(stored_pic)
        raise Conflict(DUPLICATE_STUDENT_MESSAGE) from e


@router.get("", response_model=StudentListResponse)
def list_students(db: Annotated[Session, Depends(get_db)]) -> StudentListResponse:
    """Return every student record; 404 with an empty data list when there are none."""
    students = db.query(Student).order_by(Student.id).all()
    if not students:
        raise NotFound("No students found in the database.", extra={"data": []})
    return StudentListResponse(
        message="Students fetched successfully.",
        count=len(students),
        data=[StudentOut.model_validate(s) for s in students],
    )


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    student = _get_or_404(db, student_id)
    return StudentResponse(
        message="Student fetched successfully.",
        data=StudentOut.model_validate(student),
    )


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    request: Request,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    """
    Create a student record. All fields except profile_pic are required.

    - **JSON body**: `Content-Type: application/json` with the text fields.
    - **Form upload**: `multipart/form-data` with the text fields and an
      optional image file under `profile_pic`.
    """
    body, upload = await _read_student_body(request, StudentCreate)
    values = _clean(body)
    if any(field not in values for field in REQUIRED_FIELDS):
        raise ValidationError(
            "All fields (first name, last name, email, phone, gender) are required."
        )
    _ensure_unique(db, values)

    if upload is not None:
        values["profile_pic"] = await save_profile_pic(upload)
    student = Student(**values)
    db.add(student)
    _commit(db, stored_pic=values.get("profile_pic"))
    db.refresh(student)
    logger.info("Student id=%s created by user id=%s", student.id, identity.id)
    return StudentResponse(
        message="New student added successfully.",
        data=StudentOut.model_validate(student),
    )


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: int,
    request: Request,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
) -> StudentResponse:
    """Apply the non-empty fields of the body; a new profile_pic replaces the stored one."""
    student = _get_or_404(db, student_id)
    body, upload = await _read_student_body(request, StudentUpdate)
    values = _clean(body)
    _ensure_unique(db, values, exclude_id=student.id)

    old_pic = student.profile_pic
    if upload is not None:
        values["profile_pic"] = await save_profile_pic(upload)
    for key, value in values.items():
        setattr(student, key, value)
    _commit(db, stored_pic=values.get("profile_pic"))
    if upload is not None:
        remove_profile_pic(old_pic)
    db.refresh(student)
    logger.info("Student id=%s updated by user id=%s", student.id, identity.id)
    return StudentResponse(
        message="Student updated successfully.",
        data=StudentOut.model_validate(student),
    )


@router.delete("/{student_id}", response_model=StudentDeleteResponse)
def delete_student(
    student_id: int,
    identity: CurrentIdentity,
    db: Annotated[Session, Depends(get_db)],
) -> StudentDeleteResponse:
    student = _get_or_404(db, student_id)
    full_name = f"{student.first_name} {student.last_name}"
    profile_pic = student.profile_pic
    db.delete(student)
    db.commit()
    remove_profile_pic(profile_pic)
    logger.info("Student id=%s deleted by user id=%s", student_id, identity.id)
    return StudentDeleteResponse(
        message=f"Student '{full_name}' deleted successfully.",
        deleted_id=student_id,
    )
