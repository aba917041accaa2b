"""API dependencies for authentication and database access."""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.errors import AuthError, NotFoundError
from app.core.security import verify_token
from app.models import User

# Security scheme; missing headers are reported by get_current_user as 401
security = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Authenticated caller, passed explicitly to each protected handler."""

    user: User
    token: str


async def resolve_token(db: AsyncSession, token: Optional[str]) -> AuthContext:
    """Turn a raw bearer token into an AuthContext."""
    if not token:
        raise AuthError("Missing or invalid token")

    token_data = verify_token(token)
    if token_data is None:
        raise AuthError("Invalid or expired token")

    user = await db.get(User, token_data.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return AuthContext(user=user, token=token)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthContext:
    """Get current authenticated user."""
    token = credentials.credentials if credentials else None
    return await resolve_token(db, token)


# Dependency aliases for easier use
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[AuthContext, Depends(get_current_user)]
