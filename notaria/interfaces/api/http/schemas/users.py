"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

DTOs HTTP de cuentas de usuario (/api/users) y de autenticación (/api/auth).

Reglas:
    - password_hash nunca forma parte de una respuesta.
    - Email: trim + lower en el borde; el formato lo valida el caso de uso.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from notaria.crosscutting.config import get_settings
from pydantic import BaseModel, Field, field_validator

_settings = get_settings()


def _normalize_email(v: str | None) -> str | None:
    return v.strip().lower() if v is not None else None


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class RegisterReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=_settings.max_email_chars)
    password: str = Field(
        ...,
        min_length=_settings.min_password_chars,
        max_length=_settings.max_password_chars,
    )
    name: str | None = Field(default=None, max_length=_settings.max_name_chars)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginReq(BaseModel):
    email: str = Field(..., min_length=1, max_length=_settings.max_email_chars)
    password: str = Field(..., min_length=1, max_length=_settings.max_password_chars)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class UpdateUserReq(BaseModel):
    """
    Patch de la propia cuenta: al menos un campo (lo valida el caso de uso).

    Cambiar password exige current_password.
    """

    email: str | None = Field(default=None, max_length=_settings.max_email_chars)
    name: str | None = Field(default=None, max_length=_settings.max_name_chars)
    password: str | None = Field(default=None, max_length=_settings.max_password_chars)
    current_password: str | None = Field(
        default=None, max_length=_settings.max_password_chars
    )

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str | None) -> str | None:
        return _normalize_email(v)


class ChangePasswordReq(BaseModel):
    current_password: str = Field(
        ..., min_length=1, max_length=_settings.max_password_chars
    )
    new_password: str = Field(
        ...,
        min_length=_settings.min_password_chars,
        max_length=_settings.max_password_chars,
    )


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserRes(BaseModel):
    id: UUID
    email: str
    name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UsersListRes(BaseModel):
    users: list[UserRes]
    count: int


class DeleteUserRes(BaseModel):
    user_id: UUID
    deleted: bool


class AuthRes(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes
