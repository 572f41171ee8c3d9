"""
===============================================================================
USE CASE: Delete User
===============================================================================

Reglas:
    - Solo la propia cuenta (FORBIDDEN).
    - Cuenta inexistente -> NOT_FOUND.
    - Si el usuario todavía tiene procesos -> CONFLICT (sin borrado en cascada).
      El chequeo previo da un mensaje claro; la FK RESTRICT del store cubre la
      carrera con un alta concurrente.
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....crosscutting.exceptions import ConflictError
from ....domain.ownership_policy import Actor, is_self
from ....domain.repositories import ProcessRepository, UserRepository
from .user_results import DeleteUserResult, UserErrorCode, user_error

logger = logging.getLogger(__name__)

HAS_PROCESSES = "User still owns processes. Delete them first."


class DeleteUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        process_repository: ProcessRepository,
    ) -> None:
        self._users = user_repository
        self._processes = process_repository

    def execute(self, user_id: UUID, actor: Actor | None) -> DeleteUserResult:
        if not is_self(user_id, actor):
            return self._error(UserErrorCode.FORBIDDEN, "You can only delete your own account.")

        if self._users.get_user_by_id(user_id) is None:
            return self._error(UserErrorCode.NOT_FOUND, "User not found.")

        owned = self._processes.count_processes_by_owner(user_id)
        if owned > 0:
            return self._error(UserErrorCode.CONFLICT, HAS_PROCESSES)

        try:
            deleted = self._users.delete_user(user_id)
        except ConflictError:
            return self._error(UserErrorCode.CONFLICT, HAS_PROCESSES)

        if not deleted:
            return self._error(UserErrorCode.NOT_FOUND, "User not found.")

        logger.info("usuario eliminado", extra={"user_id": str(user_id)})
        return DeleteUserResult(deleted=True)

    @staticmethod
    def _error(code: UserErrorCode, message: str) -> DeleteUserResult:
        return DeleteUserResult(error=user_error(code, message))
