"""Security utilities for authentication and authorization."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from app.core.settings import settings

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)

BCRYPT_MAX_BYTES = 72


class TokenData(BaseModel):
    """Claims carried by an access token."""

    user_id: int
    username: str


def _truncate_to_72(password: str) -> str:
    """Cut a password to bcrypt's 72-byte limit without splitting a character."""
    if not password:
        return password or ""

    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_BYTES:
        password = pw_bytes[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(_truncate_to_72(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    """Get password hash."""
    return pwd_context.hash(_truncate_to_72(password))


def create_access_token(
    user_id: int,
    username: str,
    issued_at: Optional[datetime] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for a user.

    Args:
        user_id: Numeric id of the authenticated user
        username: Username of the authenticated user
        issued_at: Issue time, defaults to now (UTC)
        expires_delta: Validity window, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "user_id": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Optional[TokenData]:
    """Verify access token signature and expiry."""
    try:
        payload = jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None

    user_id = payload.get("user_id")
    username = payload.get("username")
    if not isinstance(user_id, int) or username is None:
        return None
    return TokenData(user_id=user_id, username=username)
