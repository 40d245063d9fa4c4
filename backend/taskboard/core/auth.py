"""Bearer-token authentication: resolve the request's token to an actor."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard.core.errors import AuthenticationError
from taskboard.core.security import decode_access_token
from taskboard.db import crud
from taskboard.db.session import get_session
from taskboard.models.users import User
from taskboard.services.authorization import Actor

bearer_scheme = HTTPBearer(auto_error=False)
BEARER_DEP = Depends(bearer_scheme)
SESSION_DEP = Depends(get_session)


@dataclass(frozen=True, slots=True)
class AuthContext:
    user: User

    @property
    def actor(self) -> Actor:
        return Actor.from_user(self.user)


async def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = BEARER_DEP,
    session: AsyncSession = SESSION_DEP,
) -> AuthContext:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("Not authorized to access this route")
    user_id = decode_access_token(credentials.credentials)
    user = await crud.get_by_id(session, User, user_id)
    if user is None:
        raise AuthenticationError("User belonging to this token no longer exists")
    return AuthContext(user=user)


async def get_actor(auth: AuthContext = Depends(get_auth_context)) -> Actor:
    return auth.actor
