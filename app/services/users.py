# app/services/users.py
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthenticationError, ConflictError, PermissionDeniedError, ValidationError
from app.core.security import hash_password, verify_password
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def normalize_username(username: str) -> str:
    return (username or "").strip().lower()


def build_user(username: str, password: str, email: Optional[str] = None, role: UserRole = UserRole.admin) -> User:
    """Hash the password up front; nothing downstream ever sees the plaintext."""
    username = normalize_username(username)
    if not username:
        raise ValidationError.for_field("username", "username is required")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError.for_field(
            "password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        role=role,
        is_active=True,
    )


async def get_by_username(db: AsyncSession, username: str) -> Optional[User]:
    return await db.scalar(select(User).where(User.username == normalize_username(username)))


async def create_user(
    db: AsyncSession,
    username: str,
    password: str,
    email: Optional[str] = None,
    role: UserRole = UserRole.admin,
) -> User:
    user = build_user(username, password, email=email, role=role)
    if await get_by_username(db, user.username):
        raise ConflictError("Username already exists")
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Username already exists")
    await db.refresh(user)
    logger.info("Created %s account %s", user.role.value, user.username)
    return user


async def set_password(db: AsyncSession, user: User, password: str) -> User:
    user.hashed_password = build_user(user.username, password).hashed_password
    user.is_active = True
    await db.commit()
    await db.refresh(user)
    return user


async def authenticate_admin(db: AsyncSession, username: str, password: str) -> User:
    user = await get_by_username(db, username)
    if not user:
        logger.warning("Login failed for %s: unknown user", normalize_username(username))
        raise AuthenticationError("Invalid credentials")
    if user.role != UserRole.admin:
        logger.warning("Login refused for %s: role %s", user.username, user.role.value)
        raise PermissionDeniedError("Access denied. Admin privileges required.")
    if not user.is_active:
        logger.warning("Login refused for %s: account inactive", user.username)
        raise PermissionDeniedError("Account is deactivated. Please contact administrator.")
    if not verify_password(password, user.hashed_password):
        logger.warning("Login failed for %s: bad password", user.username)
        raise AuthenticationError("Invalid credentials")

    user.last_login = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(user)
    logger.info("Admin %s logged in", user.username)
    return user
