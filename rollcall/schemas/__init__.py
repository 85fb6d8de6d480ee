"""Pydantic request/response schemas."""

from rollcall.schemas.auth import (
    AccountOut,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
)
from rollcall.schemas.health import HealthResponse
from rollcall.schemas.student import (
    StudentCreate,
    StudentDeleteResponse,
    StudentListResponse,
    StudentOut,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    "AccountOut",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "StudentCreate",
    "StudentDeleteResponse",
    "StudentListResponse",
    "StudentOut",
    "StudentResponse",
    "StudentUpdate",
    "TokenClaims",
]
