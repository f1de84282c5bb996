"""
Security: credential hashing and caller identity.

Passwords are stored as bcrypt hashes. bcrypt refuses NUL bytes and only
looks at the first 72 bytes, so inputs are checked with password_problem()
before they ever reach hash_password()/verify_password().
Tokens are minted by the auth service; here they are only decoded.
"""

from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BCRYPT_MAX_BYTES = 72


def password_problem(password: str) -> str | None:
    """Name why bcrypt cannot take this password, or None if it can."""
    if "\x00" in password:
        return "password_invalid_char"
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return "password_too_long"
    return None


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate the bearer JWT. None if the signature or expiry is bad."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
