"""Password hashing and signed identity tokens."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from passlib.context import CryptContext

from taskboard.core.config import settings
from taskboard.core.errors import AuthenticationError

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def parse_duration(value: str) -> timedelta:
    """Parse token lifetimes such as ``7d``, ``12h``, ``30m``, ``45s`` or ``3600``."""
    match = _DURATION_RE.match(value)
    if match is None:
        msg = f"Invalid duration: {value!r}"
        raise ValueError(msg)
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


def create_access_token(user_id: UUID, *, expires_in: timedelta | None = None) -> str:
    now = datetime.now(UTC)
    lifetime = expires_in if expires_in is not None else parse_duration(settings.jwt_expire)
    payload = {
        "id": str(user_id),
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Return the user id embedded in ``token`` or raise ``AuthenticationError``."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Not authorized to access this route") from exc
    try:
        return UUID(str(payload["id"]))
    except ValueError as exc:
        raise AuthenticationError("Not authorized to access this route") from exc
