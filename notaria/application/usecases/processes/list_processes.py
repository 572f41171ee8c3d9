"""
===============================================================================
USE CASE: List Processes
===============================================================================

Name:
    List Processes Use Case

Business Goal:
    Listar los expedientes del usuario autenticado según la vista pedida:
      - ACTIVE: todos menos los Pausado (bandeja principal)
      - PAUSED: solo los Pausado
      - ALL: todos (vista de /api/users/{id}/processes)

    "Pausado" es un filtro de visibilidad: un proceso pausado no se borra,
    se muestra en otra bandeja. ACTIVE ∪ PAUSED == ALL.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListProcessesUseCase

Responsibilities:
    - Resolver el owner desde el actor (nunca desde input del cliente).
    - Traducir la vista a filtro del repositorio.
    - Devolver created_at DESC (contrato del repositorio).

Collaborators:
    - ProcessRepository.list_processes(owner_id, paused=...)
===============================================================================
"""

from __future__ import annotations

from enum import Enum

from ....domain.ownership_policy import Actor
from ....domain.repositories import ProcessRepository
from .process_results import ProcessError, ProcessErrorCode, ProcessListResult


class ProcessView(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    ALL = "all"


_PAUSED_FILTER = {
    ProcessView.ACTIVE: False,
    ProcessView.PAUSED: True,
    ProcessView.ALL: None,
}


class ListProcessesUseCase:
    def __init__(self, repository: ProcessRepository) -> None:
        self._processes = repository

    def execute(
        self,
        actor: Actor | None,
        *,
        view: ProcessView = ProcessView.ACTIVE,
    ) -> ProcessListResult:
        if actor is None or actor.user_id is None:
            return ProcessListResult(
                error=ProcessError(
                    code=ProcessErrorCode.VALIDATION_ERROR,
                    message="Actor is required to list processes.",
                )
            )

        processes = self._processes.list_processes(
            actor.user_id, paused=_PAUSED_FILTER[view]
        )
        return ProcessListResult(processes=processes)
