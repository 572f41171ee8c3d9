"""
===============================================================================
USE CASE: Change Process State
===============================================================================

Name:
    Change Process State Use Case (transición de estado)

Business Goal:
    Mover un expediente a otro estado del catálogo.

Reglas:
    - No hay grafo de transiciones: cualquier estado -> cualquier estado
      (incluido el mismo; repetir la transición no es error).
    - Solo el owner puede transicionar; para el resto el proceso "no existe".

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ChangeProcessStateUseCase

Responsibilities:
    1) Cargar el proceso -> NOT_FOUND si no existe.
    2) Verificar ownership -> NOT_FOUND si no es del actor.
    3) Parsear el estado -> INVALID_STATE si no pertenece al catálogo.
    4) Persistir con UPDATE ... WHERE id AND owner_id (check-and-set atómico).

Collaborators:
    - ProcessRepository.get_process / update_state
    - domain.ownership_policy.owns_process
    - domain.entities.ProcessState.parse

Concurrency:
    - Dos transiciones concurrentes del mismo owner: gana la última escritura.
    - Si el proceso se borra entre (1) y (4), update_state no matchea filas
      y se responde NOT_FOUND.
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....domain.entities import ProcessState
from ....domain.ownership_policy import Actor, owns_process
from ....domain.repositories import ProcessRepository
from .process_results import (
    ProcessError,
    ProcessErrorCode,
    ProcessResult,
    process_not_found,
)

logger = logging.getLogger(__name__)

VALID_STATES = ", ".join(state.value for state in ProcessState)


class ChangeProcessStateUseCase:
    def __init__(self, repository: ProcessRepository) -> None:
        self._processes = repository

    def execute(
        self,
        process_id: UUID,
        actor: Actor | None,
        new_state: ProcessState | str | None,
    ) -> ProcessResult:
        process = self._processes.get_process(process_id)
        if process is None or not owns_process(process, actor):
            return ProcessResult(error=process_not_found())

        state = ProcessState.parse(new_state)
        if state is None:
            return ProcessResult(
                error=ProcessError(
                    code=ProcessErrorCode.INVALID_STATE,
                    message=f"Invalid estado. Valid values: {VALID_STATES}.",
                )
            )

        updated = self._processes.update_state(process.id, process.owner_id, state)
        if updated is None:
            return ProcessResult(error=process_not_found())

        logger.info(
            "estado de proceso actualizado",
            extra={
                "process_id": str(process.id),
                "from_estado": process.estado.value,
                "to_estado": state.value,
            },
        )
        return ProcessResult(process=updated)
