from __future__ import annotations

from typing import Annotated, Literal

from pydantic import EmailStr, StringConstraints

from taskboard.schemas.common import ApiModel
from taskboard.schemas.users import UserRead

UserRole = Literal["user", "admin"]
Name = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]


class RegisterRequest(ApiModel):
    name: Name | None = None
    email: EmailStr | None = None
    password: str | None = None
    role: UserRole | None = None


class LoginRequest(ApiModel):
    email: str | None = None
    password: str | None = None


class UpdateDetailsRequest(ApiModel):
    name: Name | None = None
    email: EmailStr | None = None


class UpdatePasswordRequest(ApiModel):
    current_password: str | None = None
    new_password: str | None = None


class AuthData(ApiModel):
    user: UserRead
    token: str


class TokenData(ApiModel):
    token: str
