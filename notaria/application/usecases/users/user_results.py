"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Resultados tipados para registro, login y autogestión de cuentas.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - UserErrorCode: VALIDATION_ERROR / UNAUTHORIZED / FORBIDDEN / NOT_FOUND /
      CONFLICT.
    - UserResult, UserListResult, DeleteUserResult, AuthResult,
      UserProcessListResult.

Collaborators:
    - identity.users.User
    - domain.entities.Process
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Process
from ....identity.users import User


class UserErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str


@dataclass
class UserResult:
    user: User | None = None
    error: UserError | None = None


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    error: UserError | None = None


@dataclass
class DeleteUserResult:
    deleted: bool = False
    error: UserError | None = None


@dataclass
class AuthResult:
    """Registro/login exitoso: usuario + access token."""

    user: User | None = None
    token: str | None = None
    expires_in: int | None = None
    error: UserError | None = None


@dataclass
class UserProcessListResult:
    processes: List[Process] = field(default_factory=list)
    error: UserError | None = None


def user_error(code: UserErrorCode, message: str) -> UserError:
    return UserError(code=code, message=message)
