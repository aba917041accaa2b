"""Account service: login, availability checks and username suggestions."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthError, NotFoundError, ValidationError
from app.core.security import create_access_token, verify_password
from app.models import User

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 8
NUMERIC_SUFFIXES = range(1, 11)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass
class AvailabilityResult:
    """Outcome of a username or email availability check."""

    available: bool
    message: str


def normalize_username(base: str) -> str:
    """Lower-case and strip everything outside ``[a-z0-9]``."""
    return _NON_ALNUM.sub("", base.lower())


def build_suggestions(base: str, taken: set[str], year: Optional[int] = None) -> List[str]:
    """Collect up to eight free usernames derived from a normalized base.

    Order: the base itself, base1..base10, then the templated variants.
    """
    year = year or datetime.now().year
    suggestions: List[str] = []

    if base not in taken:
        suggestions.append(base)

    for i in NUMERIC_SUFFIXES:
        if len(suggestions) >= MAX_SUGGESTIONS:
            break
        candidate = f"{base}{i}"
        if candidate not in taken:
            suggestions.append(candidate)

    variations = [
        f"{base}_official",
        f"{base}_{year}",
        f"{base}_user",
        f"the_{base}",
        f"{base}123",
    ]
    for variation in variations:
        if variation not in taken and len(suggestions) < MAX_SUGGESTIONS:
            suggestions.append(variation)

    return suggestions[:MAX_SUGGESTIONS]


class AccountService:
    """Service for account lookups that never mutate storage."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate(self, username: str, password: str) -> str:
        """Validate credentials and return a fresh access token."""
        if not username or not password:
            raise ValidationError("Username and password are required")

        result = await self.db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        if not user:
            logger.info(f"Login failed: unknown username '{username}'")
            raise NotFoundError("User not found")

        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed: wrong password for '{username}'")
            raise AuthError("Incorrect password")

        logger.info(f"✅ User '{username}' logged in")
        return create_access_token(user_id=user.id, username=user.username)

    async def username_exists(self, username: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.username == username))
        return result.first() is not None

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.first() is not None

    async def check_username(self, username: str) -> AvailabilityResult:
        """Exact-match availability check for a username."""
        if not username:
            raise ValidationError("Username is required")
        if await self.username_exists(username):
            return AvailabilityResult(False, "This username is already taken")
        return AvailabilityResult(True, "This username is available")

    async def check_email(self, email: str) -> AvailabilityResult:
        """Exact-match availability check for an email address."""
        if not email:
            raise ValidationError("Email is required")
        if await self.email_exists(email):
            return AvailabilityResult(False, "This email is already in use")
        return AvailabilityResult(True, "This email is available")

    async def suggest_usernames(self, base_username: str) -> List[str]:
        """Propose up to eight usernames that are not taken yet."""
        base = normalize_username(base_username or "")
        if not base:
            raise ValidationError("Base username must contain letters or digits")

        # One prefix query; every candidate starts with the normalized base
        # except "the_{base}", which is checked on its own.
        result = await self.db.execute(
            select(User.username).where(
                (User.username.startswith(base, autoescape=True))
                | (User.username == f"the_{base}")
            )
        )
        taken = set(result.scalars().all())
        return build_suggestions(base, taken)
