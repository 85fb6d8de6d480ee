"""Signed, time-bounded bearer tokens (JWT) carrying the session identity."""

import time
from collections.abc import Callable
from datetime import timedelta
from functools import lru_cache
from typing import Any

import jwt
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from rollcall.core.config import settings
from rollcall.core.errors import (
    InvalidSignature,
    MalformedToken,
    TokenExpired,
)
from rollcall.schemas.auth import TokenClaims

REQUIRED_CLAIMS = ("id", "username", "role", "exp")


class TokenService:
    """
    Issues and verifies session tokens.

    Verification checks the signature before anything in the payload is
    looked at, then compares exp against the service clock. There is no
    revocation list: a token stays valid until it expires.
    """

    def __init__(
        self,
        secret: SecretStr,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, claims: TokenClaims, ttl: timedelta | None = None) -> str:
        """Sign {id, username, role} with exp = now + ttl (default: the service TTL)."""
        now = self._clock()
        lifetime = self._ttl if ttl is None else ttl
        payload: dict[str, Any] = {
            "id": claims.id,
            "username": claims.username,
            "role": claims.role,
            "iat": int(now),
            "exp": int(now + lifetime.total_seconds()),
        }
        return jwt.encode(
            payload,
            self._secret.get_secret_value(),
            algorithm=self._algorithm,
        )

    def verify(self, token: str) -> TokenClaims:
        """
        Return the embedded claims if the signature is valid and the token has not expired.

        Raises InvalidSignature, TokenExpired or MalformedToken.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret.get_secret_value(),
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(REQUIRED_CLAIMS),
                },
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignature() from e
        except jwt.PyJWTError as e:
            raise MalformedToken() from e

        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise MalformedToken()
        if self._clock() >= exp:
            raise TokenExpired()

        try:
            return TokenClaims.model_validate(
                {k: payload[k] for k in ("id", "username", "role")}
            )
        except PydanticValidationError as e:
            raise MalformedToken() from e


@lru_cache
def get_token_service() -> TokenService:
    """Dependency: process-wide token service built from settings."""
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
