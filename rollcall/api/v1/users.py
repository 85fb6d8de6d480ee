"""Account endpoints: register, login, logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from rollcall.core.config import settings
from rollcall.core.database import get_db
from rollcall.core.tokens import TokenService, get_token_service
from rollcall.schemas.auth import (
    AccountOut,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
)
from rollcall.services.accounts import authenticate, register_account

router = APIRouter()

TOKEN_COOKIE = "token"


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """
    Create an account. role defaults to USER; only one ADMIN may ever exist.

    Returns 400 for missing fields, 409 when the username or email is taken
    and 403 when an ADMIN already exists.
    """
    user = register_account(
        db,
        username=body.username,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return RegisterResponse(
        message="User registered successfully!",
        user=AccountOut.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a token valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = authenticate(db, tokens, email=body.email, password=body.password)
    return LoginResponse(
        message="Login successful.",
        token=result.token,
        user=AccountOut.model_validate(result.user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """
    Clear the token cookie, if the client keeps one.

    Tokens are not revoked: one already handed out stays valid until it expires.
    """
    response.delete_cookie(
        TOKEN_COOKIE,
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="strict",
    )
    return MessageResponse(message="User logged out successfully.")
