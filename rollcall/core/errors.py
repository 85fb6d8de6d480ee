"""Error taxonomy shared by services and the HTTP layer.

Each error carries the HTTP status it maps to and a human-readable message
that is safe to return to the client. `error_type` and `extra` are merged
into the rendered body when set.
"""

from typing import Any


class ServiceError(Exception):
    """Base class for errors that are rendered as {"success": false, "message": ...}."""

    status_code = 500
    default_message = "Something went wrong on the server."
    error_type: str | None = None

    def __init__(self, message: str | None = None, extra: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.extra = extra or {}
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "message": self.message}
        if self.error_type:
            body["type"] = self.error_type
        body.update(self.extra)
        return body


class ValidationError(ServiceError):
    """Missing or malformed input; the client can fix it."""

    status_code = 400
    default_message = "All required fields must be filled."


class UploadError(ValidationError):
    """Rejected file upload: wrong type, too large or an unexpected file field."""

    error_type = "upload_error"
    default_message = "File upload failed."


class UnsupportedMediaType(ServiceError):
    status_code = 415
    default_message = "Content-Type must be application/json or multipart/form-data."

class Conflict(ServiceError):
    """A uniqueness rule would be violated."""

    status_code = 409
    default_message = "Resource already exists."


class Forbidden(ServiceError):
    """A role-cardinality rule would be violated."""

    status_code = 403
    default_message = "Forbidden."


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found."


class InvalidCredentials(ServiceError):
    """Login failed. The message never says which check failed."""

    status_code = 401
    default_message = "Invalid email or password."


class Unauthenticated(ServiceError):
    """No usable bearer token on a protected route."""

    status_code = 401
    default_message = "Invalid token. Access denied."


class MissingToken(Unauthenticated):
    default_message = "Access denied. No token provided."


class TokenError(Unauthenticated):
    """Base for token verification failures."""


class MalformedToken(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


class TokenExpired(TokenError):
    default_message = "Token has expired. Please login again."


class InternalError(ServiceError):
    """Unexpected failure in hashing or storage."""


class PasswordHashingError(InternalError):
    pass
