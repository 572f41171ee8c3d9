"""
===============================================================================
USER USE CASES PACKAGE (Public API / Exports)
===============================================================================

Registro, login y autogestión de cuentas, con sus resultados tipados.
===============================================================================
"""

from __future__ import annotations

from .authenticate_user import AuthenticateUserUseCase
from .change_password import ChangePasswordUseCase
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase, ListUsersUseCase
from .list_user_processes import ListUserProcessesUseCase
from .register_user import RegisterUserUseCase
from .update_user import UpdateUserInput, UpdateUserUseCase
from .user_results import (
    AuthResult,
    DeleteUserResult,
    UserError,
    UserErrorCode,
    UserListResult,
    UserProcessListResult,
    UserResult,
)

__all__ = [
    # Use Cases
    "AuthenticateUserUseCase",
    "ChangePasswordUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUserProcessesUseCase",
    "ListUsersUseCase",
    "RegisterUserUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    # Results
    "AuthResult",
    "DeleteUserResult",
    "UserError",
    "UserErrorCode",
    "UserListResult",
    "UserProcessListResult",
    "UserResult",
]
