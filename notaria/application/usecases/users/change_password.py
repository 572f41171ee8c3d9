"""
===============================================================================
USE CASE: Change Password (cuenta autenticada)
===============================================================================

Business Goal:
    Cambiar el password de la propia cuenta confirmando el actual.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ChangePasswordUseCase

Responsibilities:
    - Ambos passwords requeridos; el nuevo con las reglas del registro.
    - Password actual incorrecto -> UNAUTHORIZED (un token filtrado no alcanza
      para tomar la cuenta).
    - Cuenta borrada con token vigente -> NOT_FOUND.

Collaborators:
    - UserRepository.get_user_by_id / update_user
    - identity.auth_users.hash_password / verify_password
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable
from uuid import UUID

from ....domain.repositories import UserRepository
from ....identity.auth_users import hash_password, verify_password
from .credentials import password_problem
from .user_results import UserErrorCode, UserResult, user_error

logger = logging.getLogger(__name__)

WRONG_CURRENT_PASSWORD = "Current password is incorrect."


class ChangePasswordUseCase:
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

    def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> UserResult:
        if not current_password:
            return self._error(
                UserErrorCode.VALIDATION_ERROR, "Current password is required."
            )
        problem = password_problem(new_password, min_chars=self._min_password_chars)
        if problem:
            return self._error(UserErrorCode.VALIDATION_ERROR, problem)

        user = self._users.get_user_by_id(user_id)
        if user is None:
            return self._error(UserErrorCode.NOT_FOUND, "User not found.")

        if not self._verify(current_password, user.password_hash):
            logger.info("cambio de password rechazado", extra={"user_id": str(user_id)})
            return self._error(UserErrorCode.UNAUTHORIZED, WRONG_CURRENT_PASSWORD)

        updated = self._users.update_user(
            user.id, password_hash=self._hash(new_password)
        )
        if updated is None:
            return self._error(UserErrorCode.NOT_FOUND, "User not found.")

        logger.info("password actualizado", extra={"user_id": str(user.id)})
        return UserResult(user=updated)

    @staticmethod
    def _error(code: UserErrorCode, message: str) -> UserResult:
        return UserResult(error=user_error(code, message))
