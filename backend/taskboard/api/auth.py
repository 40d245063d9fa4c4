from __future__ import annotations

from fastapi import APIRouter, status
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard.api.deps import AUTH_DEP, SESSION_DEP
from taskboard.core.auth import AuthContext
from taskboard.core.security import create_access_token
from taskboard.schemas.auth import (
    AuthData,
    LoginRequest,
    RegisterRequest,
    TokenData,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)
from taskboard.schemas.common import Envelope
from taskboard.schemas.users import UserData, UserRead
from taskboard.services import accounts

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=Envelope[AuthData],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = SESSION_DEP,
) -> Envelope[AuthData]:
    user = await accounts.register(session, payload)
    return Envelope(
        message="User registered successfully",
        data=AuthData(user=UserRead.model_validate(user), token=create_access_token(user.id)),
    )


@router.post("/login", response_model=Envelope[AuthData])
async def login(
    payload: LoginRequest,
    session: AsyncSession = SESSION_DEP,
) -> Envelope[AuthData]:
    user = await accounts.authenticate(session, payload)
    return Envelope(
        message="Login successful",
        data=AuthData(user=UserRead.model_validate(user), token=create_access_token(user.id)),
    )


@router.get("/me", response_model=Envelope[UserData])
def get_me(auth: AuthContext = AUTH_DEP) -> Envelope[UserData]:
    return Envelope(data=UserData(user=UserRead.model_validate(auth.user)))


@router.put("/update-details", response_model=Envelope[UserData])
async def update_details(
    payload: UpdateDetailsRequest,
    session: AsyncSession = SESSION_DEP,
    auth: AuthContext = AUTH_DEP,
) -> Envelope[UserData]:
    user = await accounts.update_details(session, auth.user, payload)
    return Envelope(
        message="User details updated successfully",
        data=UserData(user=UserRead.model_validate(user)),
    )


@router.put("/update-password", response_model=Envelope[TokenData])
async def update_password(
    payload: UpdatePasswordRequest,
    session: AsyncSession = SESSION_DEP,
    auth: AuthContext = AUTH_DEP,
) -> Envelope[TokenData]:
    user = await accounts.update_password(session, auth.user.id, payload)
    return Envelope(
        message="Password updated successfully",
        data=TokenData(token=create_access_token(user.id)),
    )
