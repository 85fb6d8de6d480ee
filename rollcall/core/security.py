"""Password hashing for account credentials."""

import bcrypt

from rollcall.core.errors import PasswordHashingError

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72

PASSWORD_MAX_LEN = 128


def _secret_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Each call uses a fresh salt."""
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(_secret_bytes(plain_password), salt).decode("utf-8")
    except (OSError, ValueError) as e:
        raise PasswordHashingError("Could not hash password.") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare)."""
    try:
        return bcrypt.checkpw(_secret_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
