"""Credential store operations: registration, login and profile changes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import col, select

from taskboard.core.config import settings
from taskboard.core.errors import (
    AuthenticationError,
    AuthorizationError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from taskboard.core.logging import get_logger
from taskboard.core.security import hash_password, verify_password
from taskboard.db import crud
from taskboard.models.users import ROLE_ADMIN, ROLE_USER, User

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.schemas.auth import (
        LoginRequest,
        RegisterRequest,
        UpdateDetailsRequest,
        UpdatePasswordRequest,
    )

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _check_password_strength(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


async def find_by_email(session: AsyncSession, email: str) -> User | None:
    statement = select(User).where(col(User.email) == normalize_email(email))
    return (await session.exec(statement)).first()


async def register(session: AsyncSession, payload: RegisterRequest) -> User:
    if not payload.name or not payload.email or not payload.password:
        raise ValidationError("Please provide all required fields")
    _check_password_strength(payload.password)

    role = payload.role or ROLE_USER
    if role == ROLE_ADMIN and not settings.allow_admin_signup:
        raise AuthorizationError("Admin accounts cannot be self-registered")

    if await find_by_email(session, payload.email) is not None:
        raise DuplicateError("User already exists")

    user = await crud.create(
        session,
        User,
        name=payload.name,
        email=normalize_email(payload.email),
        password_hash=hash_password(payload.password),
        role=role,
    )
    logger.info("auth.registered user_id=%s role=%s", user.id, user.role)
    return user


async def authenticate(session: AsyncSession, payload: LoginRequest) -> User:
    if not payload.email or not payload.password:
        raise ValidationError("Please provide email and password")
    user = await find_by_email(session, payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("auth.login_failed")
        raise AuthenticationError("Invalid credentials")
    return user


async def update_details(session: AsyncSession, user: User, payload: UpdateDetailsRequest) -> User:
    updates: dict[str, str] = {}
    if payload.name:
        updates["name"] = payload.name
    if payload.email:
        email = normalize_email(payload.email)
        if email != user.email:
            existing = await find_by_email(session, email)
            if existing is not None and existing.id != user.id:
                raise DuplicateError("Duplicate field value entered")
        updates["email"] = email
    if not updates:
        return user
    return await crud.patch(session, user, updates)


async def update_password(
    session: AsyncSession,
    user_id: UUID,
    payload: UpdatePasswordRequest,
) -> User:
    if not payload.current_password or not payload.new_password:
        raise ValidationError("Please provide current and new password")
    user = await crud.get_by_id(session, User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if not verify_password(payload.current_password, user.password_hash):
        raise AuthenticationError("Current password is incorrect")
    _check_password_strength(payload.new_password)
    user = await crud.patch(session, user, {"password_hash": hash_password(payload.new_password)})
    logger.info("auth.password_changed user_id=%s", user.id)
    return user
