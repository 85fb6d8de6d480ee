"""Request gate: bearer-token check in front of protected routers."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from rollcall.core.errors import MissingToken, TokenError, TokenExpired, Unauthenticated
from rollcall.core.tokens import TokenService, get_token_service
from rollcall.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# auto_error=False: a missing header or a non-bearer scheme yields None, rendered as MissingToken.
security = HTTPBearer(auto_error=False)


def authenticate_header(
    credentials: HTTPAuthorizationCredentials | None,
    tokens: TokenService,
) -> TokenClaims:
    """
    Turn parsed Authorization credentials into verified claims.

    Raises MissingToken when there is no bearer token, TokenExpired when the
    token is past its expiry and a generic Unauthenticated for anything else,
    so callers cannot tell a bad signature from garbage.
    """
    if credentials is None or not credentials.credentials.strip():
        raise MissingToken()
    try:
        return tokens.verify(credentials.credentials.strip())
    except TokenExpired:
        logger.debug("Rejected expired token")
        raise
    except TokenError as e:
        logger.debug("Rejected token: %s", type(e).__name__)
        raise Unauthenticated() from e


def require_identity(
    request: Request,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Dependency: verify the bearer token and attach its claims to request.state.identity."""
    claims = authenticate_header(credentials, tokens)
    request.state.identity = claims
    return claims


CurrentIdentity = Annotated[TokenClaims, Depends(require_identity)]
