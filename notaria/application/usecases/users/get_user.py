"""
USE CASE: Get User / List Users

Lectura de cuentas para usuarios autenticados. Nunca expone password_hash
(eso lo resuelve el schema HTTP).
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import UserRepository
from .user_results import UserErrorCode, UserListResult, UserResult, user_error


class GetUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID) -> UserResult:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            return UserResult(error=user_error(UserErrorCode.NOT_FOUND, "User not found."))
        return UserResult(user=user)


class ListUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self) -> UserListResult:
        return UserListResult(users=self._users.list_users())
