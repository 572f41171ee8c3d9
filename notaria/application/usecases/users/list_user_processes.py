"""
USE CASE: List User Processes

Todos los procesos (cualquier estado) de una cuenta, solo para su dueño.
Otro usuario -> FORBIDDEN.
"""

from __future__ import annotations

from uuid import UUID

from ....domain.ownership_policy import Actor, is_self
from ....domain.repositories import ProcessRepository
from .user_results import UserErrorCode, UserProcessListResult, user_error


class ListUserProcessesUseCase:
    def __init__(self, process_repository: ProcessRepository) -> None:
        self._processes = process_repository

    def execute(self, user_id: UUID, actor: Actor | None) -> UserProcessListResult:
        if not is_self(user_id, actor):
            return UserProcessListResult(
                error=user_error(
                    UserErrorCode.FORBIDDEN, "You can only list your own processes."
                )
            )
        return UserProcessListResult(processes=self._processes.list_processes(user_id))
