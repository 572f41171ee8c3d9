"""
===============================================================================
USE CASE: Update User (autogestión de cuenta)
===============================================================================

Business Goal:
    Permitir que un usuario cambie su email, nombre y/o password.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateUserUseCase

Responsibilities:
    - Solo la propia cuenta (FORBIDDEN si user_id != actor).
    - Al menos un campo presente (VALIDATION_ERROR si no hay cambios).
    - Mismas reglas que el registro para email y password; password re-hasheado.
    - Cambiar el password exige current_password correcto (UNAUTHORIZED si no).
    - Email tomado por otro usuario -> CONFLICT.

Collaborators:
    - UserRepository.get_user_by_id / get_user_by_email / update_user
    - domain.ownership_policy.is_self
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable
from uuid import UUID

from ....crosscutting.exceptions import ConflictError
from ....domain.ownership_policy import Actor, is_self
from ....domain.repositories import UserRepository
from ....identity.auth_users import hash_password, verify_password
from .change_password import WRONG_CURRENT_PASSWORD
from .credentials import is_valid_email, normalize_email, password_problem
from .user_results import UserErrorCode, UserResult, user_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateUserInput:
    user_id: UUID
    actor: Actor | None
    email: str | None = None
    name: str | None = None
    password: str | None = None
    current_password: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.email is None and self.name is None and self.password is None


class UpdateUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        *,
        min_password_chars: int = 6,
        password_hasher: Callable[[str], str] = hash_password,
        password_verifier: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self._users = repository
        self._min_password_chars = min_password_chars
        self._hash = password_hasher
        self._verify = password_verifier

    def execute(self, input_data: UpdateUserInput) -> UserResult:
        if not is_self(input_data.user_id, input_data.actor):
            return self._error(UserErrorCode.FORBIDDEN, "You can only update your own account.")

        if input_data.is_empty:
            return self._error(UserErrorCode.VALIDATION_ERROR, "No fields to update.")

        current = self._users.get_user_by_id(input_data.user_id)
        if current is None:
            return self._error(UserErrorCode.NOT_FOUND, "User not found.")

        email: str | None = None
        if input_data.email is not None:
            email = normalize_email(input_data.email)
            if not is_valid_email(email):
                return self._error(UserErrorCode.VALIDATION_ERROR, "A valid email is required.")
            other = self._users.get_user_by_email(email)
            if other is not None and other.id != current.id:
                return self._conflict()

        password_hash: str | None = None
        if input_data.password is not None:
            problem = password_problem(
                input_data.password, min_chars=self._min_password_chars
            )
            if problem:
                return self._error(UserErrorCode.VALIDATION_ERROR, problem)
            if not input_data.current_password or not self._verify(
                input_data.current_password, current.password_hash
            ):
                return self._error(UserErrorCode.UNAUTHORIZED, WRONG_CURRENT_PASSWORD)
            password_hash = self._hash(input_data.password)

        name = (input_data.name or "").strip() or None

        try:
            updated = self._users.update_user(
                current.id, email=email, name=name, password_hash=password_hash
            )
        except ConflictError:
            return self._conflict()

        if updated is None:
            return self._error(UserErrorCode.NOT_FOUND, "User not found.")

        logger.info(
            "usuario actualizado",
            extra={
                "user_id": str(current.id),
                "fields": [
                    field
                    for field, value in (
                        ("email", email),
                        ("name", name),
                        ("password", password_hash),
                    )
                    if value is not None
                ],
            },
        )
        return UserResult(user=updated)

    @staticmethod
    def _error(code: UserErrorCode, message: str) -> UserResult:
        return UserResult(error=user_error(code, message))

    @classmethod
    def _conflict(cls) -> UserResult:
        return cls._error(UserErrorCode.CONFLICT, "Email already registered.")
